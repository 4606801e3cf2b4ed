"""Read-only API over resume chapters."""

from fastapi import APIRouter, HTTPException

from resume_agent.core.schemas_chapters import ChapterOut
from resume_agent.data.chapters import get_all_tags, get_chapter_by_id, get_sorted_chapters

router = APIRouter(prefix="/chapters", tags=["chapters"])


@router.get("", response_model=list[ChapterOut])
async def list_chapters() -> list[ChapterOut]:
    """All chapters in display order."""
    return [ChapterOut.from_chapter(ch) for ch in get_sorted_chapters()]


@router.get("/tags", response_model=list[str])
async def list_tags() -> list[str]:
    return get_all_tags()


@router.get("/{chapter_id}", response_model=ChapterOut)
async def get_chapter(chapter_id: str) -> ChapterOut:
    chapter = get_chapter_by_id(chapter_id)
    if not chapter:
        raise HTTPException(status_code=404, detail=f'Chapter "{chapter_id}" not found')
    return ChapterOut.from_chapter(chapter)
