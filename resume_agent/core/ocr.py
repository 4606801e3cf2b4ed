"""
Resume document OCR.

Text extraction is delegated to Claude (PDFs as document blocks, images as
image blocks); the raw text is then reorganized into labeled sections with
an OpenAI JSON-mode completion.
"""

import base64
import json

from anthropic import Anthropic, AnthropicError
from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from resume_agent.core.config import get_settings
from resume_agent.core.errors import InvalidInputError, ProviderError
from resume_agent.core.llm import parse_llm_json
from resume_agent.core.logging import get_logger
from resume_agent.core.schemas_ocr import StructuredResume

logger = get_logger(__name__)

PDF_MIME_TYPE = "application/pdf"

SUPPORTED_MIME_TYPES = {
    "pdf": PDF_MIME_TYPE,
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "gif": "image/gif",
}

OCR_PROMPT = """Extract all text from this resume document exactly as written.

Preserve reading order, headings, bullet points and table contents. Render tables
as pipe-separated rows. Do not summarize, translate, or add commentary.
Return only the extracted text."""

STRUCTURE_SYSTEM_PROMPT = """You are a resume parser. Given raw OCR text from a resume document,
extract and structure it into JSON with this schema:
{
  "name": "string",
  "title": "string",
  "sections": [
    {
      "heading": "string (e.g., 'Experience', 'Education', 'Skills')",
      "content": "string (the full text content of this section)",
      "items": [
        {
          "title": "string (job title, degree, etc.)",
          "organization": "string",
          "dateRange": "string",
          "bullets": ["string"]
        }
      ]
    }
  ]
}
Return ONLY valid JSON, no other text."""


def resolve_mime_type(filename: str, content_type: str | None = None) -> str:
    """
    Determine the document MIME type from the upload.

    Raises:
        InvalidInputError: If the type isn't a PDF or a supported image
    """
    if content_type in SUPPORTED_MIME_TYPES.values():
        return content_type

    ext = filename.lower().rsplit(".", 1)[-1] if "." in filename else ""
    mime_type = SUPPORTED_MIME_TYPES.get(ext)
    if not mime_type:
        raise InvalidInputError(
            f"Unsupported file type for {filename!r}. Upload a PDF or an image (PNG, JPEG, WEBP, GIF)."
        )
    return mime_type


def _get_anthropic_client() -> Anthropic:
    settings = get_settings()
    if not settings.ANTHROPIC_API_KEY:
        raise ProviderError("ANTHROPIC_API_KEY not configured for OCR", operation="ocr")
    return Anthropic(api_key=settings.ANTHROPIC_API_KEY)


def _get_openai_client() -> OpenAI:
    settings = get_settings()
    return OpenAI(api_key=settings.OPENAI_API_KEY)


def extract_document_text(file_bytes: bytes, filename: str, mime_type: str) -> str:
    """
    Extract raw text from a resume document.

    Args:
        file_bytes: Raw document content
        filename: Original filename (for logging)
        mime_type: PDF or image MIME type

    Returns:
        Extracted text

    Raises:
        ProviderError: If the OCR call fails or returns no text
    """
    settings = get_settings()
    client = _get_anthropic_client()

    data = base64.standard_b64encode(file_bytes).decode("utf-8")
    block_type = "document" if mime_type == PDF_MIME_TYPE else "image"

    try:
        response = client.messages.create(
            model=settings.OCR_MODEL,
            max_tokens=settings.OCR_MAX_TOKENS,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {
                            "type": block_type,
                            "source": {
                                "type": "base64",
                                "media_type": mime_type,
                                "data": data,
                            },
                        },
                        {"type": "text", "text": OCR_PROMPT},
                    ],
                }
            ],
        )
    except AnthropicError as e:
        logger.error(f"OCR failed for {filename}: {e}")
        raise ProviderError(f"OCR processing failed: {e}", operation="ocr", cause=e) from e

    text = "".join(
        getattr(block, "text", "") for block in (response.content or [])
        if getattr(block, "type", None) == "text"
    ).strip()

    if not text:
        raise ProviderError("OCR returned no text", operation="ocr")

    logger.info(
        f"Extracted {len(text)} chars from {filename}",
        extra={"extra_data": {"filename": filename, "mime_type": mime_type, "chars": len(text)}},
    )
    return text


def structure_resume_text(raw_text: str) -> StructuredResume | None:
    """
    Organize raw OCR text into resume sections.

    Returns:
        StructuredResume, or None when the model's output can't be parsed

    Raises:
        ProviderError: If the completion call itself fails
    """
    settings = get_settings()
    client = _get_openai_client()

    try:
        response = client.chat.completions.create(
            model=settings.STRUCTURE_MODEL,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": STRUCTURE_SYSTEM_PROMPT},
                {"role": "user", "content": raw_text},
            ],
        )
    except OpenAIError as e:
        logger.error(f"Resume structuring failed: {e}")
        raise ProviderError(f"Resume structuring failed: {e}", operation="structure", cause=e) from e

    content = response.choices[0].message.content if response.choices else None
    if not isinstance(content, str):
        logger.warning("Structuring returned no content")
        return None

    try:
        return parse_llm_json(content, StructuredResume)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Failed to parse structured output: {e}")
        return None
