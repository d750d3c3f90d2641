from __future__ import annotations

import base64
import binascii
import io
import urllib.request
from typing import Any

from ..shard import constants as C

_PNG_SIG = b"\x89PNG\r\n\x1a\x0a"
_JPEG_SIG = b"\xff\xd8\xff"
_GIF_SIGS = (b"GIF87a", b"GIF89a")


# --------------------------- source classifiers --------------------------- #
def is_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def is_data_url(value: str) -> bool:
    return value.startswith("data:")


# --------------------------- validation ---------------------------------- #
def sniff_image_mime(data: bytes) -> str | None:
    """Return the MIME type implied by the image magic number, if any."""
    if data.startswith(_PNG_SIG):
        return "image/png"
    if data.startswith(_JPEG_SIG):
        return "image/jpeg"
    if data.startswith(_GIF_SIGS):
        return "image/gif"
    if data.startswith(b"RIFF") and b"WEBP" in data[:32]:
        return "image/webp"
    return None


def validate_image_bytes(data: bytes) -> str:
    """Ensure the bytes look like a PNG/JPEG/GIF/WEBP image and return its MIME type.

    Raises ValueError if validation fails.
    """
    if not data or len(data) < 16:
        raise ValueError("Image data is empty or too small")
    mime = sniff_image_mime(data)
    if mime is None:
        raise ValueError("Unsupported or corrupt image data; expected PNG/JPEG/GIF/WEBP")
    return mime


# --------------------------- IO + conversion ------------------------------ #
def read_image_bytes_and_mime(source: str, *, timeout: float | None = None) -> tuple[bytes, str]:
    """Resolve a string image reference into raw bytes.

    Accepts http(s) URLs (fetched), data URLs, or bare base64. The bytes are
    always validated so a URL is never mistaken for encoded image data.
    Returns (bytes, mime_type).
    """
    if is_url(source):
        with urllib.request.urlopen(source, timeout=timeout) as resp:  # nosec - provider-supplied URL
            data = resp.read()
        return data, validate_image_bytes(data)

    if is_data_url(source):
        try:
            _, payload = source.split(",", 1)
            data = base64.b64decode(payload, validate=True)
        except (ValueError, binascii.Error) as e:
            raise ValueError("Invalid data URL for image") from e
        return data, validate_image_bytes(data)

    try:
        data = base64.b64decode(source.strip(), validate=True)
    except (ValueError, binascii.Error) as e:
        raise ValueError("Unsupported image string: must be an http(s) URL, data URL, or base64") from e
    return data, validate_image_bytes(data)


def pil_image_to_bytes(image: Any) -> tuple[bytes, str]:
    """Encode a PIL image as PNG."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue(), C.DEFAULT_MIME


def encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


__all__ = [
    "is_url",
    "is_data_url",
    "sniff_image_mime",
    "validate_image_bytes",
    "read_image_bytes_and_mime",
    "pil_image_to_bytes",
    "encode_base64",
]
