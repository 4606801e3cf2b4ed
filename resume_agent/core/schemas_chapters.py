"""Resume chapter schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ChapterProject(BaseModel):
    """A featured project linked from a chapter."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
    description: str
    status: str | None = Field(default=None, description='e.g. "Hackathon", "Live"')


class Chapter(BaseModel):
    """A static, authored unit of resume content."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier (scroll targets, API refs)")
    order: int = Field(..., description="Display order")
    title: str
    subtitle: str
    date_range: str
    bullet_points: tuple[str, ...] = ()
    image_prompt: str = ""
    tags: tuple[str, ...] = ()
    projects: tuple[ChapterProject, ...] = ()
    accent_color: str | None = None


class ChapterOut(BaseModel):
    """Chapter as returned by the read API (camelCase keys)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    order: int
    title: str
    subtitle: str
    date_range: str = Field(..., serialization_alias="dateRange")
    bullet_points: list[str] = Field(default_factory=list, serialization_alias="bulletPoints")
    tags: list[str] = Field(default_factory=list)
    projects: list[ChapterProject] = Field(default_factory=list)
    accent_color: str | None = Field(default=None, serialization_alias="accentColor")

    @classmethod
    def from_chapter(cls, chapter: Chapter) -> "ChapterOut":
        return cls(
            id=chapter.id,
            order=chapter.order,
            title=chapter.title,
            subtitle=chapter.subtitle,
            date_range=chapter.date_range,
            bullet_points=list(chapter.bullet_points),
            tags=list(chapter.tags),
            projects=list(chapter.projects),
            accent_color=chapter.accent_color,
        )
