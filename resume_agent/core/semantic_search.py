"""Semantic search over resume chapters using cached embeddings."""

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from resume_agent.core.embedding_cache import ChapterEmbedding, EmbeddingCache, Embedder, coerce_vector
from resume_agent.core.errors import InvalidInputError, ProviderError
from resume_agent.core.logging import get_logger

logger = get_logger(__name__)

EXCERPT_CHARS = 200
ELLIPSIS = "…"
DEFAULT_TOP_K = 3


@dataclass
class ScoredChapter:
    """A chapter with its similarity to the query."""
    chapter_id: str
    chapter_title: str
    excerpt: str
    score: float


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """
    Cosine similarity between two vectors.

    Returns 0.0 when either vector has zero norm.

    Raises:
        ProviderError: If the vectors have different lengths
    """
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    if va.shape != vb.shape:
        raise ProviderError(
            f"Embedding length mismatch: query has {va.size}, chapter has {vb.size}",
            operation="score",
        )

    denominator = float(np.linalg.norm(va)) * float(np.linalg.norm(vb))
    if denominator == 0.0:
        return 0.0
    return float(np.dot(va, vb)) / denominator


def make_excerpt(text: str, limit: int = EXCERPT_CHARS) -> str:
    """First ``limit`` characters of text, with an ellipsis when truncated."""
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def validate_query(query: object) -> str:
    if not isinstance(query, str) or not query:
        raise InvalidInputError("Query is required")
    return query


def validate_top_k(top_k: object) -> int:
    # bool is an int subclass; True is not a result count
    if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 1:
        raise InvalidInputError("topK must be a positive integer")
    return top_k


def rank_chapters(
    query_vector: Sequence[float],
    chapter_embeddings: Sequence[ChapterEmbedding],
    top_k: int,
) -> list[ScoredChapter]:
    """
    Score every chapter against the query vector and keep the best ``top_k``.

    Equal scores keep the chapters' display order (``sorted`` is stable).
    """
    scored = [
        ScoredChapter(
            chapter_id=ce.chapter_id,
            chapter_title=ce.chapter_title,
            excerpt=make_excerpt(ce.canonical_text),
            score=cosine_similarity(query_vector, ce.embedding),
        )
        for ce in chapter_embeddings
    ]
    scored = sorted(scored, key=lambda sc: sc.score, reverse=True)
    return scored[:top_k]


async def semantic_search(
    cache: EmbeddingCache,
    query: object,
    top_k: object = DEFAULT_TOP_K,
    *,
    embed: Embedder | None = None,
) -> list[ScoredChapter]:
    """
    Return the ``top_k`` chapters most relevant to ``query``.

    Args:
        cache: Chapter embeddings cache (built on first use)
        query: Free-text query
        top_k: Maximum number of results
        embed: Query embedder override (defaults to the cache's embedder)

    Returns:
        Scored chapters, best first

    Raises:
        InvalidInputError: If the query is empty or not text, or top_k isn't positive
        ProviderError: If building the cache or embedding the query fails
    """
    query = validate_query(query)
    top_k = validate_top_k(top_k)

    chapter_embeddings = await cache.ensure()

    embedder = embed or cache.embedder
    try:
        vectors = await embedder([query])
    except ProviderError:
        raise
    except Exception as e:
        logger.error(f"Query embedding failed: {e}")
        raise ProviderError(f"Embedding provider failed: {e}", operation="embed_query", cause=e) from e

    if vectors is None or len(vectors) != 1:
        raise ProviderError("Expected exactly one query embedding", operation="embed_query")
    query_vector = coerce_vector(vectors[0], "query")

    results = rank_chapters(query_vector, chapter_embeddings, top_k)

    logger.debug(
        f"Semantic search returned {len(results)} results",
        extra={
            "extra_data": {
                "top_k": top_k,
                "top_score": round(results[0].score, 4) if results else None,
            }
        },
    )
    return results
