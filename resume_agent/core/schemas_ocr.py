"""OCR ingestion schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ResumeSectionItem(BaseModel):
    """A job, degree or similar entry inside a resume section."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = ""
    organization: str = ""
    date_range: str = Field(default="", alias="dateRange")
    bullets: list[str] = Field(default_factory=list)


class ResumeSection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    heading: str = ""
    content: str = ""
    items: list[ResumeSectionItem] = Field(default_factory=list)


class StructuredResume(BaseModel):
    """Resume text reorganized into labeled sections."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    title: str = ""
    sections: list[ResumeSection] = Field(default_factory=list)


class OcrResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    extracted_text: str = Field(..., serialization_alias="extractedText")
    structured_content: StructuredResume | None = Field(
        default=None, serialization_alias="structuredContent"
    )
