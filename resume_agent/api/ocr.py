"""API endpoint for resume OCR ingestion."""

import asyncio

from fastapi import APIRouter, File, HTTPException, UploadFile

from resume_agent.core import ocr
from resume_agent.core.config import get_settings
from resume_agent.core.errors import InvalidInputError, ProviderError
from resume_agent.core.logging import get_logger
from resume_agent.core.schemas_ocr import OcrResponse

logger = get_logger(__name__)

router = APIRouter()


@router.post("/ocr", response_model=OcrResponse)
async def ocr_resume(file: UploadFile | None = File(default=None)) -> OcrResponse:
    """
    Upload a resume document (PDF recommended) for OCR extraction.

    Returns both the raw text and the structured sections.

    Raises:
        HTTPException 400: If no file (or an empty one) was sent
        HTTPException 413: If the file exceeds MAX_UPLOAD_BYTES
        HTTPException 415: If the file type isn't supported
        HTTPException 500: If OCR or structuring fails
    """
    if file is None:
        raise HTTPException(
            status_code=400,
            detail="No file provided. Send a PDF or image as 'file' in multipart form data.",
        )

    settings = get_settings()
    file_bytes = await file.read()
    filename = file.filename or "upload"

    if not file_bytes:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if len(file_bytes) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"File too large: {len(file_bytes)} bytes (max {settings.MAX_UPLOAD_BYTES})",
        )

    try:
        mime_type = ocr.resolve_mime_type(filename, file.content_type)
    except InvalidInputError as e:
        raise HTTPException(status_code=415, detail=str(e)) from e

    try:
        raw_text = await asyncio.to_thread(ocr.extract_document_text, file_bytes, filename, mime_type)
        structured = await asyncio.to_thread(ocr.structure_resume_text, raw_text)
    except ProviderError as e:
        logger.error(
            f"OCR ingestion failed for {filename}: {e}",
            extra={"extra_data": {"operation": e.operation}},
        )
        raise HTTPException(status_code=500, detail=f"OCR processing failed: {e}") from e

    return OcrResponse(extracted_text=raw_text, structured_content=structured)
