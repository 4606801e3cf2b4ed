"""OpenAI embeddings generation with validation."""

import asyncio

from openai import OpenAI, OpenAIError

from resume_agent.core.config import get_settings
from resume_agent.core.errors import ProviderError
from resume_agent.core.logging import get_logger

logger = get_logger(__name__)


def _get_client() -> OpenAI:
    """Get OpenAI client instance."""
    settings = get_settings()
    return OpenAI(api_key=settings.OPENAI_API_KEY)


def embed_texts(texts: list[str]) -> list[list[float]]:
    """
    Generate embeddings for a list of texts using OpenAI.

    Vectors come back in input order; callers map them onto their inputs
    by position.

    Args:
        texts: List of text strings to embed

    Returns:
        List of embedding vectors (each vector is list of floats)

    Raises:
        ProviderError: If the API call fails, or the response has the wrong
            number of vectors or an unexpected dimension
    """
    if not texts:
        return []

    settings = get_settings()
    client = _get_client()

    try:
        # OpenAI supports up to 2048 texts per request
        response = client.embeddings.create(
            model=settings.EMBEDDING_MODEL,
            input=texts,
        )
    except OpenAIError as e:
        logger.error(f"Failed to generate embeddings: {e}")
        raise ProviderError(f"Embedding request failed: {e}", operation="embed", cause=e) from e

    data = getattr(response, "data", None)
    if data is None or len(data) != len(texts):
        got = "none" if data is None else len(data)
        raise ProviderError(
            f"Embedding count mismatch: expected {len(texts)}, got {got}",
            operation="embed",
        )

    embeddings = []
    for i, embedding_obj in enumerate(data):
        embedding = list(embedding_obj.embedding)

        # Validate dimension
        if settings.EMBEDDING_DIM and len(embedding) != settings.EMBEDDING_DIM:
            raise ProviderError(
                f"Embedding dimension mismatch for text {i}: "
                f"expected {settings.EMBEDDING_DIM}, got {len(embedding)}",
                operation="embed",
            )

        embeddings.append(embedding)

    logger.info(
        f"Generated {len(embeddings)} embeddings using {settings.EMBEDDING_MODEL}",
        extra={"extra_data": {"model": settings.EMBEDDING_MODEL, "count": len(embeddings)}},
    )

    return embeddings


async def embed_texts_async(texts: list[str]) -> list[list[float]]:
    """Async wrapper around embed_texts using thread pool."""
    return await asyncio.to_thread(embed_texts, texts)
