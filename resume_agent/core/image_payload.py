"""
Decoding of generated-image payloads.

Provider SDKs hand back downloaded files in several shapes depending on the
call and SDK version. Everything here funnels into one contract: image
payload in, ``data:image/...;base64,...`` URL out.

Payload kinds, checked in this order:

- BYTES:    bytes, bytearray or memoryview
- DATA_URL: a str that already is an image data URL (returned unchanged)
- BASE64:   any other str; it must be strict base64 or decoding fails
- STREAM:   an object with a callable ``read()`` (file-like or binary response)
- WRAPPER:  a dict or object carrying the real payload under ``content`` or ``data``

File references inside agent output chunks are resolved with
``extract_file_id``, which checks ``FILE_ID_FIELDS`` in order.
"""

import base64
import binascii
from enum import Enum
from typing import Any

from resume_agent.core.errors import UnsupportedPayloadError

DATA_URL_PREFIX = "data:image/"
DEFAULT_MIME_TYPE = "image/png"
MAX_WRAPPER_DEPTH = 3

WRAPPER_FIELDS = ("content", "data")

# Checked in order; the first non-empty string wins.
FILE_ID_FIELDS: tuple[tuple[str, ...], ...] = (
    ("file_id",),
    ("fileId",),
    ("file", "id"),
    ("file", "file_id"),
    ("file", "fileId"),
    ("tool_file", "file_id"),
    ("tool_file", "fileId"),
)

_MAGIC_NUMBERS: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


class PayloadKind(Enum):
    """Known shapes of a downloaded image payload."""
    BYTES = "bytes"
    DATA_URL = "data_url"
    BASE64 = "base64"
    STREAM = "stream"
    WRAPPER = "wrapper"


def _get_field(value: Any, name: str) -> Any:
    if isinstance(value, dict):
        return value.get(name)
    return getattr(value, name, None)


def _wrapped_value(value: Any) -> Any:
    for name in WRAPPER_FIELDS:
        inner = _get_field(value, name)
        if inner is not None:
            return inner
    return None


def classify_payload(value: Any) -> PayloadKind:
    """
    Classify a payload into one of the known kinds.

    Raises:
        UnsupportedPayloadError: If the payload matches none of them
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return PayloadKind.BYTES
    if isinstance(value, str):
        if value.startswith(DATA_URL_PREFIX):
            return PayloadKind.DATA_URL
        return PayloadKind.BASE64
    if callable(getattr(value, "read", None)):
        return PayloadKind.STREAM
    if value is not None and _wrapped_value(value) is not None:
        return PayloadKind.WRAPPER
    raise UnsupportedPayloadError(
        f"Unsupported file download payload: {type(value).__name__}",
        operation="decode_image",
    )


def sniff_mime_type(data: bytes) -> str:
    """Guess an image MIME type from magic bytes."""
    for magic, mime_type in _MAGIC_NUMBERS:
        if data.startswith(magic):
            return mime_type
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return DEFAULT_MIME_TYPE


def _decode_base64(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise UnsupportedPayloadError(
            "Payload string is not valid base64", operation="decode_image", cause=e
        ) from e


def image_bytes_to_data_url(data: bytes, mime_type: str | None = None) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or sniff_mime_type(data)};base64,{encoded}"


def to_image_data_url(value: Any, _depth: int = 0) -> str:
    """
    Convert any supported payload into an image data URL.

    Raises:
        UnsupportedPayloadError: If the payload shape is unknown or undecodable
    """
    kind = classify_payload(value)

    if kind is PayloadKind.DATA_URL:
        return value
    if kind is PayloadKind.BYTES:
        return image_bytes_to_data_url(bytes(value))
    if kind is PayloadKind.BASE64:
        return image_bytes_to_data_url(_decode_base64(value.strip()))
    if kind is PayloadKind.STREAM:
        data = value.read()
        if isinstance(data, str):
            data = data.encode("latin-1")
        return image_bytes_to_data_url(bytes(data))

    # WRAPPER
    if _depth >= MAX_WRAPPER_DEPTH:
        raise UnsupportedPayloadError(
            "Payload wrappers nested too deeply", operation="decode_image"
        )
    return to_image_data_url(_wrapped_value(value), _depth + 1)


def extract_file_id(chunk: Any) -> str | None:
    """Return the first file identifier found on a chunk, per FILE_ID_FIELDS."""
    for path in FILE_ID_FIELDS:
        value = chunk
        for name in path:
            value = _get_field(value, name)
            if value is None:
                break
        if isinstance(value, str) and value:
            return value
    return None
