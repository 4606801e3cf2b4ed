"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from resume_agent.api import router as api_router
from resume_agent.core.embedding_cache import EmbeddingCache

app = FastAPI(
    title="Resume Agent",
    description="Interactive resume backend: semantic search, agent chat, image generation and OCR",
    version="0.1.0",
)

# Process-wide chapter embeddings, built on the first search
app.state.embedding_cache = EmbeddingCache()


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "ok"}, status_code=200)


# Include v1 API router
app.include_router(api_router, prefix="/v1", tags=["v1"])
