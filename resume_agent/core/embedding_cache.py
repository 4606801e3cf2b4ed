"""
Chapter embeddings cache.

Holds one embedding vector per resume chapter, built lazily on the first
search and reused for the life of the process. The cache is an owned
object (the app keeps one on ``app.state``) with an explicit lifecycle:

    ABSENT --ensure()--> BUILDING --success--> READY
       ^                    |                    |
       +------failure-------+                    |
       +---------------invalidate()--------------+

Concurrent first requests share a single build: the first one takes the
lock and calls the provider, the rest wait and then read the stored result.
A failed or cancelled build leaves the cache ABSENT so the next request
retries from scratch. ``invalidate()`` bumps a generation counter; a build
that was started under an older generation hands its result to its own
caller but never stores it.
"""

import asyncio
import math
import time
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from resume_agent.core.embeddings import embed_texts_async
from resume_agent.core.errors import ProviderError
from resume_agent.core.logging import get_logger
from resume_agent.core.schemas_chapters import Chapter
from resume_agent.data.chapters import get_sorted_chapters

logger = get_logger(__name__)

Embedder = Callable[[list[str]], Awaitable[list[list[float]]]]
ChapterSource = Callable[[], Sequence[Chapter]]


class CacheState(Enum):
    """Lifecycle of the embeddings cache."""
    ABSENT = "absent"
    BUILDING = "building"
    READY = "ready"


@dataclass(frozen=True)
class ChapterEmbedding:
    """Embedding of one chapter's canonical text."""
    chapter_id: str
    chapter_title: str
    canonical_text: str
    embedding: tuple[float, ...]


def build_canonical_text(chapter: Chapter) -> str:
    """
    Flatten a chapter into the text blob that gets embedded.

    Title, subtitle, every bullet point and a "Skills:" listing of the tags,
    each joined as a sentence. Pure function of the chapter's fields.
    """
    return ". ".join(
        [
            chapter.title,
            chapter.subtitle,
            ". ".join(chapter.bullet_points),
            f"Skills: {', '.join(chapter.tags)}",
        ]
    )


def coerce_vector(raw: object, label: str) -> tuple[float, ...]:
    """Validate a provider vector and freeze it as a tuple of finite floats."""
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise ProviderError(f"Malformed embedding for {label}: not a sequence", operation="embed")
    if not raw:
        raise ProviderError(f"Malformed embedding for {label}: empty vector", operation="embed")
    try:
        vector = tuple(float(x) for x in raw)
    except (TypeError, ValueError) as e:
        raise ProviderError(
            f"Malformed embedding for {label}: non-numeric value", operation="embed", cause=e
        ) from e
    if not all(math.isfinite(x) for x in vector):
        raise ProviderError(f"Malformed embedding for {label}: non-finite value", operation="embed")
    return vector


def _to_entries(
    chapters: Sequence[Chapter],
    texts: Sequence[str],
    vectors: object,
) -> tuple[ChapterEmbedding, ...]:
    """Pair provider vectors with their chapters, checking count and a uniform length."""
    if vectors is None or len(vectors) != len(chapters):
        got = "none" if vectors is None else len(vectors)
        raise ProviderError(
            f"Embedding count mismatch: expected {len(chapters)}, got {got}",
            operation="build_cache",
        )

    entries = []
    dim: int | None = None
    for chapter, text, raw in zip(chapters, texts, vectors):
        vector = coerce_vector(raw, chapter.id)
        if dim is None:
            dim = len(vector)
        elif len(vector) != dim:
            raise ProviderError(
                f"Embedding length mismatch for {chapter.id}: expected {dim}, got {len(vector)}",
                operation="build_cache",
            )
        entries.append(
            ChapterEmbedding(
                chapter_id=chapter.id,
                chapter_title=chapter.title,
                canonical_text=text,
                embedding=vector,
            )
        )
    return tuple(entries)


class EmbeddingCache:
    """Lazily built, process-wide cache of chapter embeddings."""

    def __init__(
        self,
        embedder: Embedder | None = None,
        chapters: ChapterSource = get_sorted_chapters,
    ):
        """
        Initialize an empty cache.

        Args:
            embedder: Async batch embedder (defaults to OpenAI embeddings)
            chapters: Callable returning chapters in display order
        """
        self._embedder = embedder or embed_texts_async
        self._chapters = chapters
        self._entries: tuple[ChapterEmbedding, ...] | None = None
        self._state = CacheState.ABSENT
        self._lock = asyncio.Lock()
        self._generation = 0
        self._build_count = 0
        self._built_at: datetime | None = None

    @property
    def embedder(self) -> Embedder:
        return self._embedder

    @property
    def state(self) -> CacheState:
        return self._state

    @property
    def build_count(self) -> int:
        """Number of provider batch calls issued to build the cache."""
        return self._build_count

    @property
    def entries(self) -> tuple[ChapterEmbedding, ...] | None:
        return self._entries

    async def ensure(self) -> tuple[ChapterEmbedding, ...]:
        """
        Return the chapter embeddings, building them on first use.

        Returns:
            Chapter embeddings in display order

        Raises:
            ProviderError: If the embedding provider fails; the cache stays absent
        """
        entries = self._entries
        if entries is not None:
            return entries

        async with self._lock:
            # Another request may have finished the build while we waited
            if self._entries is not None:
                return self._entries

            generation = self._generation
            self._state = CacheState.BUILDING
            try:
                entries = await self._build()
                if generation == self._generation:
                    self._entries = entries
                    self._built_at = datetime.now(UTC)
                else:
                    logger.info("Cache invalidated during build, discarding result")
            finally:
                self._state = CacheState.READY if self._entries is not None else CacheState.ABSENT

            return entries

    def invalidate(self) -> None:
        """Drop the cached embeddings; the next ensure() rebuilds them."""
        self._generation += 1
        self._entries = None
        self._built_at = None
        self._state = CacheState.ABSENT
        logger.info(
            "Embeddings cache invalidated",
            extra={"extra_data": {"generation": self._generation}},
        )

    def snapshot(self) -> dict:
        """Lifecycle summary for the admin status route."""
        return {
            "state": self._state.value,
            "chapters": len(self._entries) if self._entries is not None else 0,
            "build_count": self._build_count,
            "generation": self._generation,
            "built_at": self._built_at.isoformat() if self._built_at else None,
        }

    async def _build(self) -> tuple[ChapterEmbedding, ...]:
        chapters = list(self._chapters())
        texts = [build_canonical_text(ch) for ch in chapters]

        logger.info(
            f"Building embeddings for {len(chapters)} chapters",
            extra={"extra_data": {"chapters": len(chapters)}},
        )
        started = time.perf_counter()
        self._build_count += 1

        try:
            vectors = await self._embedder(texts)
        except ProviderError:
            logger.error("Chapter embedding build failed", exc_info=True)
            raise
        except Exception as e:
            logger.error(f"Chapter embedding build failed: {e}")
            raise ProviderError(
                f"Embedding provider failed: {e}", operation="build_cache", cause=e
            ) from e

        try:
            entries = _to_entries(chapters, texts, vectors)
        except ProviderError as e:
            logger.error(
                f"Chapter embeddings rejected: {e}",
                extra={"extra_data": {"operation": e.operation}},
            )
            raise

        logger.info(
            f"Cached {len(entries)} chapter embeddings",
            extra={
                "extra_data": {
                    "chapters": len(entries),
                    "duration_ms": round((time.perf_counter() - started) * 1000, 1),
                }
            },
        )
        return entries
