"""API router for v1 endpoints."""

from fastapi import APIRouter

from resume_agent.api import admin, agent, chapters, images, ocr, search

router = APIRouter()

# Semantic search over chapters
router.include_router(search.router, tags=["search"])

# Embeddings cache status and invalidation
router.include_router(admin.router)

# Resume agent chat
router.include_router(agent.router, tags=["agent"])

# Chapter illustrations via the agent's image tool
router.include_router(images.router, tags=["images"])

# Resume document OCR
router.include_router(ocr.router, tags=["ocr"])

# Chapter content
router.include_router(chapters.router)
