"""Media type resolution and sniffing."""

from enum import Enum
from typing import Optional, Union

from dataurl_converter.core.constants import (
    CANVAS_FALLBACK_MIME,
    CANVAS_MIME_TYPES,
    DEFAULT_EXTENSION,
    LOSSY_MIME_TYPES,
    MAGIC_SNIFF_BYTES,
    MIME_AVIF,
    MIME_BMP,
    MIME_EXTENSIONS,
    MIME_GIF,
    MIME_HEIF,
    MIME_JPEG,
    MIME_OCTET_STREAM,
    MIME_PNG,
    MIME_SVG,
    MIME_TIFF,
    MIME_WEBP,
    OPAQUE_MIME_TYPES,
    PASSTHROUGH_TARGETS,
    SVG_MIME_TYPES,
    TARGET_FORMAT_MIME,
)


def _format_key(target: Union[str, Enum, None]) -> Optional[str]:
    if target is None:
        return None
    if isinstance(target, Enum):
        return str(target.value)
    return str(target)


def resolve_target_mime(
    source_mime: str, target_format: Union[str, Enum, None] = None
) -> str:
    """Map a requested target format to a concrete media type.

    Unset, ``original`` and ``base64`` keep the source type; unknown
    formats fall back to it as well.
    """
    fallback = source_mime or MIME_OCTET_STREAM
    key = _format_key(target_format)
    if not key or key in PASSTHROUGH_TARGETS:
        return fallback
    return TARGET_FORMAT_MIME.get(key, fallback)


def is_passthrough_target(target_format: Union[str, Enum, None]) -> bool:
    """True for an unset, ``original`` or ``base64`` target."""
    key = _format_key(target_format)
    return not key or key in PASSTHROUGH_TARGETS


def is_svg_mime(mime: Optional[str]) -> bool:
    return mime in SVG_MIME_TYPES


def is_image_mime(mime: Optional[str]) -> bool:
    return bool(mime) and mime.startswith("image/")


def clamp_canvas_mime(requested: str) -> str:
    """Restrict a render target to a type every surface can serialize."""
    return requested if requested in CANVAS_MIME_TYPES else CANVAS_FALLBACK_MIME


def is_opaque_mime(mime: str) -> bool:
    return mime in OPAQUE_MIME_TYPES


def is_lossy_mime(mime: str) -> bool:
    return mime in LOSSY_MIME_TYPES


def mime_to_extension(mime: str) -> str:
    return MIME_EXTENSIONS.get(mime, DEFAULT_EXTENSION)


def detect_mime(data: bytes) -> Optional[str]:
    """Detect a media type by checking magic bytes."""
    if len(data) < MAGIC_SNIFF_BYTES:
        return None

    # Check common formats first (most likely)
    if data[0:2] == b"\xff\xd8":
        return MIME_JPEG
    elif data[0:8] == b"\x89PNG\r\n\x1a\n":
        return MIME_PNG
    elif data[0:4] == b"RIFF" and data[8:12] == b"WEBP":
        return MIME_WEBP
    elif data[0:6] in (b"GIF87a", b"GIF89a"):
        return MIME_GIF
    elif data[0:2] == b"BM":
        return MIME_BMP
    elif data[0:4] in (b"II*\x00", b"MM\x00*"):
        return MIME_TIFF

    # HEIF and AVIF share the ftyp box
    if data[4:8] == b"ftyp":
        brand = data[8:12]
        if brand in (b"avif", b"avis"):
            return MIME_AVIF
        elif brand in (b"heic", b"heix", b"hevc", b"hevx", b"mif1", b"msf1"):
            return MIME_HEIF

    # SVG is text; look for the root element near the start
    head = data[:1024].lstrip().lower()
    if head.startswith(b"<svg") or (
        head.startswith((b"<?xml", b"<!doctype svg", b"<!--")) and b"<svg" in head
    ):
        return MIME_SVG

    return None
