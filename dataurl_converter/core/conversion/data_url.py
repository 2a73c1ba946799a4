"""Data URL framing and size estimation."""

import base64

from dataurl_converter.core.constants import (
    BASE64_PAD,
    DATA_URL_BASE64_MARKER,
    DATA_URL_SCHEME,
    DATA_URL_SEPARATOR,
    MIME_OCTET_STREAM,
)


def encode_data_url(data: bytes, mime: str) -> str:
    """Wrap raw bytes in a base64 data URL carrying ``mime``."""
    encoded = base64.b64encode(data).decode("ascii")
    header = f"{DATA_URL_SCHEME}{mime or MIME_OCTET_STREAM}{DATA_URL_BASE64_MARKER}"
    return f"{header}{DATA_URL_SEPARATOR}{encoded}"


def extract_mime_from_data_url(data_url: str) -> str:
    """Return the media type declared in a data URL header.

    Anything that is not a ``data:<mime>;...`` URL yields
    ``application/octet-stream``.
    """
    semi = data_url.find(";")
    if data_url.startswith(DATA_URL_SCHEME) and semi > len(DATA_URL_SCHEME):
        return data_url[len(DATA_URL_SCHEME) : semi]
    return MIME_OCTET_STREAM


def estimate_base64_size_bytes(data_url: str) -> int:
    """Compute the decoded byte length of a base64 payload.

    Accepts a full data URL or bare base64 text; the header up to the first
    comma is ignored. Exact for well-formed, unwrapped base64.
    """
    _, separator, payload = data_url.partition(DATA_URL_SEPARATOR)
    if not separator:
        payload = data_url

    if payload.endswith(BASE64_PAD * 2):
        padding = 2
    elif payload.endswith(BASE64_PAD):
        padding = 1
    else:
        padding = 0
    return len(payload) * 3 // 4 - padding
