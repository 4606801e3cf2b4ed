"""API endpoint for generating chapter illustrations."""

import asyncio

from fastapi import APIRouter, HTTPException

from resume_agent.core import agent
from resume_agent.core.errors import ProviderError
from resume_agent.core.logging import get_logger
from resume_agent.core.schemas_agent import ImageGenRequest, ImageGenResponse
from resume_agent.core.schemas_chapters import Chapter
from resume_agent.data.chapters import get_chapter_by_id

logger = get_logger(__name__)

router = APIRouter()


def resolve_image_prompt(chapter: Chapter, custom_prompt: str | None) -> str:
    """Custom prompt, else the chapter's authored prompt, else one built from its title."""
    return (
        custom_prompt
        or chapter.image_prompt
        or f"A cinematic, editorial illustration representing: {chapter.title} — {chapter.subtitle}"
    )


@router.post("/generate-image", response_model=ImageGenResponse)
async def generate_chapter_image(request: ImageGenRequest) -> ImageGenResponse:
    """
    Generate a visual for a resume chapter using the agent's image tool.

    Raises:
        HTTPException 404: If the chapter doesn't exist
        HTTPException 422: If the agent produced no image
        HTTPException 500: If the provider call fails
    """
    chapter = get_chapter_by_id(request.chapter_id)
    if not chapter:
        raise HTTPException(status_code=404, detail=f'Chapter "{request.chapter_id}" not found')

    prompt = resolve_image_prompt(chapter, request.prompt)

    try:
        turn = await asyncio.to_thread(agent.generate_image, prompt)
    except ProviderError as e:
        logger.error(
            f"Image generation failed for {chapter.id}: {e}",
            extra={"extra_data": {"chapter_id": chapter.id}},
        )
        raise HTTPException(status_code=500, detail=f"Failed to generate image: {e}") from e

    if not turn.image_url:
        raise HTTPException(
            status_code=422,
            detail="Image generation did not produce a result. The agent may need a different prompt.",
        )

    return ImageGenResponse(image_url=turn.image_url, chapter_id=chapter.id)
