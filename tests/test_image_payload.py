"""Tests for image payload classification and data URL conversion."""

import base64
import io
from types import SimpleNamespace

import pytest

from resume_agent.core.errors import UnsupportedPayloadError
from resume_agent.core.image_payload import (
    PayloadKind,
    classify_payload,
    extract_file_id,
    sniff_mime_type,
    to_image_data_url,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16
PNG_B64 = base64.b64encode(PNG_BYTES).decode("ascii")
PNG_DATA_URL = f"data:image/png;base64,{PNG_B64}"


class FakeBinaryResponse:
    """Mimics an SDK binary response: readable, with a .content attribute."""

    def __init__(self, data: bytes):
        self.content = data

    def read(self) -> bytes:
        return self.content


class TestClassifyPayload:
    @pytest.mark.parametrize(
        "value, kind",
        [
            (PNG_BYTES, PayloadKind.BYTES),
            (bytearray(PNG_BYTES), PayloadKind.BYTES),
            (memoryview(PNG_BYTES), PayloadKind.BYTES),
            (PNG_DATA_URL, PayloadKind.DATA_URL),
            (PNG_B64, PayloadKind.BASE64),
            (io.BytesIO(PNG_BYTES), PayloadKind.STREAM),
            (FakeBinaryResponse(PNG_BYTES), PayloadKind.STREAM),
            ({"data": PNG_BYTES}, PayloadKind.WRAPPER),
            (SimpleNamespace(content=PNG_B64), PayloadKind.WRAPPER),
        ],
    )
    def test_known_shapes(self, value, kind):
        assert classify_payload(value) is kind

    @pytest.mark.parametrize("value", [None, 42, {"other": 1}, SimpleNamespace(x=1)])
    def test_unknown_shapes_raise(self, value):
        with pytest.raises(UnsupportedPayloadError, match="Unsupported"):
            classify_payload(value)


class TestToImageDataUrl:
    def test_bytes(self):
        assert to_image_data_url(PNG_BYTES) == PNG_DATA_URL

    def test_data_url_passthrough(self):
        assert to_image_data_url(PNG_DATA_URL) is PNG_DATA_URL

    def test_base64_string(self):
        assert to_image_data_url(PNG_B64) == PNG_DATA_URL

    def test_stream(self):
        assert to_image_data_url(io.BytesIO(PNG_BYTES)) == PNG_DATA_URL

    def test_nested_wrapper(self):
        payload = {"data": SimpleNamespace(content=PNG_BYTES)}
        assert to_image_data_url(payload) == PNG_DATA_URL

    def test_jpeg_mime_type_detected(self):
        url = to_image_data_url(JPEG_BYTES)
        assert url.startswith("data:image/jpeg;base64,")

    @pytest.mark.parametrize("text", ["not an image!", "abc$$def", "data:text/plain,hello"])
    def test_non_base64_string_raises(self, text):
        with pytest.raises(UnsupportedPayloadError, match="not valid base64"):
            to_image_data_url(text)

    def test_wrapper_depth_is_bounded(self):
        payload = PNG_BYTES
        for _ in range(5):
            payload = {"data": payload}
        with pytest.raises(UnsupportedPayloadError, match="nested too deeply"):
            to_image_data_url(payload)


def test_sniff_mime_type_defaults_to_png():
    assert sniff_mime_type(b"unknown") == "image/png"
    assert sniff_mime_type(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"
    assert sniff_mime_type(b"GIF89a...") == "image/gif"


class TestExtractFileId:
    @pytest.mark.parametrize(
        "chunk, expected",
        [
            ({"type": "tool_file", "file_id": "f1"}, "f1"),
            ({"type": "tool_file", "fileId": "f2"}, "f2"),
            ({"type": "tool_file", "file": {"id": "f3"}}, "f3"),
            ({"type": "tool_file", "file": {"file_id": "f4"}}, "f4"),
            ({"type": "tool_file", "file": {"fileId": "f5"}}, "f5"),
            ({"type": "tool_file", "tool_file": {"file_id": "f6"}}, "f6"),
            ({"type": "tool_file", "tool_file": {"fileId": "f7"}}, "f7"),
            (SimpleNamespace(type="tool_file", file_id="f8"), "f8"),
        ],
    )
    def test_each_field(self, chunk, expected):
        assert extract_file_id(chunk) == expected

    def test_priority_order(self):
        chunk = {
            "fileId": "camel",
            "file": {"id": "nested"},
            "file_id": "snake",
            "tool_file": {"file_id": "tool"},
        }
        assert extract_file_id(chunk) == "snake"

        del chunk["file_id"]
        assert extract_file_id(chunk) == "camel"

        del chunk["fileId"]
        assert extract_file_id(chunk) == "nested"

    def test_empty_values_are_skipped(self):
        assert extract_file_id({"file_id": "", "file": {"id": "real"}}) == "real"

    def test_missing_returns_none(self):
        assert extract_file_id({"type": "tool_file", "name": "image.png"}) is None
