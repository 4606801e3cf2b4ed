"""Tests for resume OCR extraction, structuring and the upload endpoint."""

import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from anthropic import AnthropicError
from fastapi.testclient import TestClient
from openai import OpenAIError

from resume_agent.core import ocr
from resume_agent.core.errors import InvalidInputError, ProviderError
from resume_agent.core.schemas_ocr import StructuredResume
from resume_agent.main import app

client = TestClient(app)

PDF_BYTES = b"%PDF-1.4 fake resume"

STRUCTURED_JSON = {
    "name": "Brendan",
    "title": "Applied AI Engineer",
    "sections": [
        {
            "heading": "Experience",
            "content": "Portfolio manager ...",
            "items": [
                {
                    "title": "Analyst",
                    "organization": "Asset Manager",
                    "dateRange": "2011 - 2026",
                    "bullets": ["Covered 200+ companies"],
                }
            ],
        }
    ],
}


def _anthropic_response(*texts):
    return SimpleNamespace(content=[SimpleNamespace(type="text", text=t) for t in texts])


def _chat_response(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class TestResolveMimeType:
    @pytest.mark.parametrize(
        "filename, expected",
        [
            ("resume.pdf", "application/pdf"),
            ("RESUME.PDF", "application/pdf"),
            ("scan.png", "image/png"),
            ("scan.jpg", "image/jpeg"),
            ("scan.jpeg", "image/jpeg"),
            ("scan.webp", "image/webp"),
        ],
    )
    def test_from_extension(self, filename, expected):
        assert ocr.resolve_mime_type(filename) == expected

    def test_content_type_wins(self):
        assert ocr.resolve_mime_type("upload", "application/pdf") == "application/pdf"

    @pytest.mark.parametrize("filename", ["notes.txt", "resume.docx", "noextension"])
    def test_unsupported_raises(self, filename):
        with pytest.raises(InvalidInputError, match="Unsupported file type"):
            ocr.resolve_mime_type(filename, "application/octet-stream")


class TestExtractDocumentText:
    def test_pdf_sent_as_document_block(self):
        mock_client = MagicMock()
        mock_client.messages.create.return_value = _anthropic_response("Brendan\n", "Experience")

        with patch("resume_agent.core.ocr._get_anthropic_client", return_value=mock_client):
            text = ocr.extract_document_text(PDF_BYTES, "resume.pdf", "application/pdf")

        assert text == "Brendan\nExperience"
        content = mock_client.messages.create.call_args.kwargs["messages"][0]["content"]
        assert content[0]["type"] == "document"
        assert content[0]["source"]["media_type"] == "application/pdf"
        assert content[1] == {"type": "text", "text": ocr.OCR_PROMPT}

    def test_image_sent_as_image_block(self):
        mock_client = MagicMock()
        mock_client.messages.create.return_value = _anthropic_response("text")

        with patch("resume_agent.core.ocr._get_anthropic_client", return_value=mock_client):
            ocr.extract_document_text(b"\x89PNG", "scan.png", "image/png")

        content = mock_client.messages.create.call_args.kwargs["messages"][0]["content"]
        assert content[0]["type"] == "image"

    def test_non_text_blocks_ignored(self):
        mock_client = MagicMock()
        mock_client.messages.create.return_value = SimpleNamespace(
            content=[SimpleNamespace(type="thinking", thinking="hmm"), SimpleNamespace(type="text", text="ok")]
        )

        with patch("resume_agent.core.ocr._get_anthropic_client", return_value=mock_client):
            assert ocr.extract_document_text(PDF_BYTES, "r.pdf", "application/pdf") == "ok"

    def test_empty_output_raises(self):
        mock_client = MagicMock()
        mock_client.messages.create.return_value = _anthropic_response("   ")

        with patch("resume_agent.core.ocr._get_anthropic_client", return_value=mock_client):
            with pytest.raises(ProviderError, match="no text"):
                ocr.extract_document_text(PDF_BYTES, "r.pdf", "application/pdf")

    def test_api_failure_raises_provider_error(self):
        mock_client = MagicMock()
        mock_client.messages.create.side_effect = AnthropicError("overloaded")

        with patch("resume_agent.core.ocr._get_anthropic_client", return_value=mock_client):
            with pytest.raises(ProviderError, match="overloaded") as exc_info:
                ocr.extract_document_text(PDF_BYTES, "r.pdf", "application/pdf")

        assert exc_info.value.operation == "ocr"

    def test_missing_api_key_raises(self, monkeypatch):
        from resume_agent.core.config import get_settings

        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        get_settings.cache_clear()
        try:
            with pytest.raises(ProviderError, match="ANTHROPIC_API_KEY"):
                ocr.extract_document_text(PDF_BYTES, "r.pdf", "application/pdf")
        finally:
            monkeypatch.setenv("ANTHROPIC_API_KEY", "test-anthropic-key")
            get_settings.cache_clear()


class TestStructureResumeText:
    def _run(self, content=None, side_effect=None):
        mock_client = MagicMock()
        if side_effect is not None:
            mock_client.chat.completions.create.side_effect = side_effect
        else:
            mock_client.chat.completions.create.return_value = _chat_response(content)

        with patch("resume_agent.core.ocr._get_openai_client", return_value=mock_client):
            return ocr.structure_resume_text("raw text"), mock_client

    def test_valid_json(self):
        result, mock_client = self._run(json.dumps(STRUCTURED_JSON))

        assert isinstance(result, StructuredResume)
        assert result.name == "Brendan"
        assert result.sections[0].items[0].date_range == "2011 - 2026"
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}

    def test_fenced_json(self):
        result, _ = self._run(f"```json\n{json.dumps(STRUCTURED_JSON)}\n```")

        assert result.title == "Applied AI Engineer"

    def test_invalid_json_returns_none(self):
        result, _ = self._run("not json at all")

        assert result is None

    def test_missing_content_returns_none(self):
        result, _ = self._run(None)

        assert result is None

    def test_api_failure_raises_provider_error(self):
        with pytest.raises(ProviderError, match="structuring failed"):
            self._run(side_effect=OpenAIError("bad gateway"))


@pytest.fixture
def mock_ocr():
    with (
        patch("resume_agent.core.ocr.extract_document_text") as mock_extract,
        patch("resume_agent.core.ocr.structure_resume_text") as mock_structure,
    ):
        mock_extract.return_value = "Brendan\nExperience"
        mock_structure.return_value = StructuredResume.model_validate(STRUCTURED_JSON)
        yield {"extract": mock_extract, "structure": mock_structure}


class TestOcrEndpoint:
    def test_upload_pdf(self, mock_ocr):
        response = client.post(
            "/v1/ocr", files={"file": ("resume.pdf", PDF_BYTES, "application/pdf")}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["extractedText"] == "Brendan\nExperience"
        assert data["structuredContent"]["name"] == "Brendan"
        mock_ocr["extract"].assert_called_once_with(PDF_BYTES, "resume.pdf", "application/pdf")
        mock_ocr["structure"].assert_called_once_with("Brendan\nExperience")

    def test_structuring_failure_still_returns_text(self, mock_ocr):
        mock_ocr["structure"].return_value = None

        response = client.post(
            "/v1/ocr", files={"file": ("resume.pdf", PDF_BYTES, "application/pdf")}
        )

        assert response.status_code == 200
        assert response.json()["structuredContent"] is None

    def test_no_file_returns_400(self, mock_ocr):
        response = client.post("/v1/ocr")

        assert response.status_code == 400
        assert "No file provided" in response.json()["detail"]
        mock_ocr["extract"].assert_not_called()

    def test_empty_file_returns_400(self, mock_ocr):
        response = client.post("/v1/ocr", files={"file": ("resume.pdf", b"", "application/pdf")})

        assert response.status_code == 400
        assert response.json()["detail"] == "Uploaded file is empty"

    def test_oversized_file_returns_413(self, mock_ocr, monkeypatch):
        from resume_agent.core.config import get_settings

        monkeypatch.setenv("MAX_UPLOAD_BYTES", "8")
        get_settings.cache_clear()
        try:
            response = client.post(
                "/v1/ocr", files={"file": ("resume.pdf", PDF_BYTES, "application/pdf")}
            )
        finally:
            monkeypatch.delenv("MAX_UPLOAD_BYTES")
            get_settings.cache_clear()

        assert response.status_code == 413
        mock_ocr["extract"].assert_not_called()

    def test_unsupported_type_returns_415(self, mock_ocr):
        response = client.post("/v1/ocr", files={"file": ("notes.txt", b"hello", "text/plain")})

        assert response.status_code == 415
        mock_ocr["extract"].assert_not_called()

    def test_provider_failure_returns_500(self, mock_ocr):
        mock_ocr["extract"].side_effect = ProviderError("OCR returned no text", operation="ocr")

        response = client.post(
            "/v1/ocr", files={"file": ("resume.pdf", PDF_BYTES, "application/pdf")}
        )

        assert response.status_code == 500
        assert "OCR processing failed" in response.json()["detail"]
