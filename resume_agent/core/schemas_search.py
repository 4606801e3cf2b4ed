"""Semantic search request/response schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SearchRequest(BaseModel):
    """
    Search request body.

    Fields are typed loosely on purpose: the handler validates them so that a
    missing or non-text query maps to 400 rather than a schema 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    query: Any = None
    top_k: Any = Field(default=None, alias="topK")


class SearchResult(BaseModel):
    """A chapter ranked against a query."""

    model_config = ConfigDict(populate_by_name=True)

    chapter_id: str = Field(..., serialization_alias="chapterId")
    chapter_title: str = Field(..., serialization_alias="chapterTitle")
    excerpt: str
    score: float


class SearchResponse(BaseModel):
    results: list[SearchResult]


class CacheStatus(BaseModel):
    """Embeddings cache lifecycle summary."""

    state: str
    chapters: int
    build_count: int
    generation: int
    built_at: str | None = None
