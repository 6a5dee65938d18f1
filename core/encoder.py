"""Image encoding: user-selected file to base64 payload plus MIME type."""

from __future__ import annotations

import base64
import io
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# File picker filter (png, jpeg and webp). Drag-and-drop only checks the image/* prefix.
ACCEPTED_EXTENSIONS: tuple[str, ...] = ("png", "jpg", "jpeg", "webp")

DEFAULT_MIME_TYPE = "application/octet-stream"


def is_image_mime(mime_type: str | None) -> bool:
    return bool(mime_type) and mime_type.startswith("image/")


def strip_data_url(value: str) -> str:
    """Return the payload of a ``data:`` URL; other strings pass through."""
    if value.startswith("data:") and "," in value:
        return value.split(",", 1)[1]
    return value


def read_bytes(file: Any) -> bytes:
    """Read the whole content of a path, bytes buffer or file-like object."""
    if isinstance(file, (bytes, bytearray)):
        return bytes(file)
    if isinstance(file, (str, Path)):
        return Path(file).read_bytes()
    if hasattr(file, "getvalue"):
        return file.getvalue()
    if hasattr(file, "read"):
        if hasattr(file, "seek"):
            file.seek(0)
        return file.read()
    raise TypeError(f"Cannot read image from {type(file).__name__}")


def sniff_mime_type(data: bytes) -> str:
    """Detect the MIME type from the image header bytes."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
    except (UnidentifiedImageError, OSError):
        return DEFAULT_MIME_TYPE
    return Image.MIME.get(fmt, DEFAULT_MIME_TYPE) if fmt else DEFAULT_MIME_TYPE


def resolve_mime_type(file: Any, data: bytes, declared: str | None = None) -> str:
    declared = declared or getattr(file, "type", None)
    if declared:
        return declared
    name = getattr(file, "name", None) or (str(file) if isinstance(file, (str, Path)) else None)
    if name:
        guessed, _ = mimetypes.guess_type(name)
        if guessed:
            return guessed
    return sniff_mime_type(data)


def encode(file: Any) -> str:
    """Read ``file`` and return its base64 payload (no data-URL prefix)."""
    return base64.b64encode(read_bytes(file)).decode("ascii")


@dataclass(frozen=True)
class UploadedImage:
    """A selected photo. Encoded payload and preview come from the same bytes."""

    data: bytes
    mime_type: str
    name: str = ""

    @classmethod
    def from_file(cls, file: Any, mime_type: str | None = None) -> UploadedImage:
        data = read_bytes(file)
        resolved = resolve_mime_type(file, data, mime_type)
        name = getattr(file, "name", "") or (Path(file).name if isinstance(file, (str, Path)) else "")
        logger.info("Loaded image name=%s type=%s size=%d bytes", name, resolved, len(data))
        return cls(data=data, mime_type=resolved, name=name)

    @property
    def base64(self) -> str:
        return encode(self.data)

    @property
    def preview_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64}"
