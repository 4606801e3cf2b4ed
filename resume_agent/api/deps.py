"""Shared FastAPI dependencies."""

from fastapi import Request

from resume_agent.core.embedding_cache import EmbeddingCache


def get_embedding_cache(request: Request) -> EmbeddingCache:
    """The process-wide embeddings cache owned by the application."""
    return request.app.state.embedding_cache
