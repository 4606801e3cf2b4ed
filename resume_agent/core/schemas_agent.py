"""Agent chat and image generation schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AgentRequest(BaseModel):
    """Chat turn from the client; message is validated by the handler."""

    model_config = ConfigDict(populate_by_name=True)

    message: Any = None
    conversation_id: str | None = Field(default=None, alias="conversationId")


class AgentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    conversation_id: str = Field(..., serialization_alias="conversationId")
    content: str
    image_url: str | None = Field(default=None, serialization_alias="imageUrl")
    tool_used: str | None = Field(default=None, serialization_alias="toolUsed")


class ImageGenRequest(BaseModel):
    """Chapter image request; an unknown or missing chapter id is a 404 in the handler."""

    model_config = ConfigDict(populate_by_name=True)

    chapter_id: Any = Field(default=None, alias="chapterId")
    prompt: str | None = None


class ImageGenResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(..., serialization_alias="imageUrl")
    chapter_id: str = Field(..., serialization_alias="chapterId")
