"""Admin endpoints for the embeddings cache."""

import hmac

from fastapi import APIRouter, Depends, Header, HTTPException, Response, status

from resume_agent.api.deps import get_embedding_cache
from resume_agent.core.config import get_settings
from resume_agent.core.embedding_cache import EmbeddingCache
from resume_agent.core.logging import get_logger
from resume_agent.core.schemas_search import CacheStatus

logger = get_logger(__name__)

router = APIRouter(prefix="/search/cache", tags=["admin"])


def require_admin_token(x_admin_token: str | None = Header(default=None)) -> None:
    """Check the X-Admin-Token header against ADMIN_TOKEN."""
    expected = get_settings().ADMIN_TOKEN
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Cache administration is disabled (ADMIN_TOKEN not set)",
        )
    if not x_admin_token or not hmac.compare_digest(x_admin_token, expected):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid admin token")


@router.get("", response_model=CacheStatus)
async def cache_status(cache: EmbeddingCache = Depends(get_embedding_cache)) -> CacheStatus:
    """Current lifecycle state of the embeddings cache."""
    return CacheStatus(**cache.snapshot())


@router.post(
    "/invalidate",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin_token)],
)
async def invalidate_cache(cache: EmbeddingCache = Depends(get_embedding_cache)) -> Response:
    """Drop the cached chapter embeddings; the next search rebuilds them."""
    cache.invalidate()
    logger.info("Embeddings cache invalidated via admin route")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
