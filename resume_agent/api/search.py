"""API endpoint for semantic search over resume chapters."""

from fastapi import APIRouter, Depends, HTTPException

from resume_agent.api.deps import get_embedding_cache
from resume_agent.core.config import get_settings
from resume_agent.core.embedding_cache import EmbeddingCache
from resume_agent.core.errors import InvalidInputError, ProviderError
from resume_agent.core.logging import get_logger
from resume_agent.core.schemas_search import SearchRequest, SearchResponse, SearchResult
from resume_agent.core.semantic_search import semantic_search

logger = get_logger(__name__)

router = APIRouter()


@router.post("/search", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    cache: EmbeddingCache = Depends(get_embedding_cache),
) -> SearchResponse:
    """
    Semantic search over resume chapters.

    Body: { query: string, topK?: number }

    Raises:
        HTTPException 400: If query is missing/not text or topK is invalid
        HTTPException 500: If the embedding provider fails
    """
    top_k = request.top_k if request.top_k is not None else get_settings().SEARCH_DEFAULT_TOP_K

    try:
        scored = await semantic_search(cache, request.query, top_k)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except ProviderError as e:
        logger.error(
            f"Search failed: {e}",
            extra={"extra_data": {"operation": e.operation}},
        )
        raise HTTPException(status_code=500, detail=f"Search failed: {e}") from e

    return SearchResponse(
        results=[
            SearchResult(
                chapter_id=sc.chapter_id,
                chapter_title=sc.chapter_title,
                excerpt=sc.excerpt,
                score=sc.score,
            )
            for sc in scored
        ]
    )
