"""Image decoding with a primary Pillow path and an optional libvips fallback."""

import contextlib
import os
import tempfile
from dataclasses import dataclass
from io import BytesIO
from typing import Callable, Iterator, Optional

import structlog
from PIL import Image, ImageOps

from dataurl_converter.core.capabilities import RuntimeCapabilities
from dataurl_converter.core.conversion.formats import mime_to_extension
from dataurl_converter.core.exceptions import DecodeError
from dataurl_converter.core.processing import vips_ops

logger = structlog.get_logger()


@dataclass(frozen=True)
class DecodeAttempt:
    """Tagged outcome of one decode strategy: an image or an error."""

    strategy: str
    image: Optional[Image.Image] = None
    error: Optional[DecodeError] = None
    # Rejections no other strategy may retry (decompression bombs)
    final: bool = False

    @property
    def ok(self) -> bool:
        return self.image is not None


def _decode_error(
    message: str,
    cause: Exception,
    strategy: str,
    declared_mime: str,
    input_size: int,
    error_type: Optional[str] = None,
) -> DecodeError:
    details = {
        "strategy": strategy,
        "mime_type": declared_mime,
        "input_size": input_size,
        "error": str(cause),
    }
    if error_type:
        details["error_type"] = error_type
    error = DecodeError(message, details=details)
    # Chain the underlying exception even though the error is not raised here
    error.__cause__ = cause
    return error


class PillowDecodeStrategy:
    """Decode straight from the in-memory buffer."""

    name = "pillow"

    def decode(self, data: bytes, declared_mime: str) -> DecodeAttempt:
        try:
            with BytesIO(data) as buffer:
                with Image.open(buffer) as img:
                    img.load()
                    # Honor EXIF orientation; the returned image owns its pixels
                    image = ImageOps.exif_transpose(img)
                    if image is img:
                        image = img.copy()
            return DecodeAttempt(strategy=self.name, image=image)
        except Image.DecompressionBombError as e:
            return DecodeAttempt(
                strategy=self.name,
                error=_decode_error(
                    f"Image exceeds pixel limit: {e}",
                    e,
                    self.name,
                    declared_mime,
                    len(data),
                    error_type="decompression_bomb",
                ),
                final=True,
            )
        except Exception as e:
            return DecodeAttempt(
                strategy=self.name,
                error=_decode_error(
                    f"Failed to decode image: {e}", e, self.name, declared_mime, len(data)
                ),
            )


@contextlib.contextmanager
def temporary_source(data: bytes, suffix: str = "") -> Iterator[str]:
    """Expose ``data`` as a file path for the duration of the block.

    The file is removed on every exit path, including loader failures.
    """
    fd, path = tempfile.mkstemp(prefix="dataurl-", suffix=suffix)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        yield path
    finally:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(path)


class VipsFileDecodeStrategy:
    """Load through libvips from a temporary file.

    Covers formats Pillow has no decoder for (notably SVG, via librsvg).
    """

    name = "vips"

    def __init__(self, loader: Optional[Callable[[str], Image.Image]] = None) -> None:
        self._loader = loader or vips_ops.load_from_file

    def decode(self, data: bytes, declared_mime: str) -> DecodeAttempt:
        suffix = f".{mime_to_extension(declared_mime)}"
        try:
            with temporary_source(data, suffix=suffix) as path:
                image = self._loader(path)
            return DecodeAttempt(strategy=self.name, image=image)
        except Exception as e:
            return DecodeAttempt(
                strategy=self.name,
                error=_decode_error(
                    f"Failed to decode image through libvips: {e}",
                    e,
                    self.name,
                    declared_mime,
                    len(data),
                ),
            )


class ImageDecoder:
    """Two-step decoder: primary strategy, then an optional fallback."""

    def __init__(self, primary=None, fallback=None) -> None:
        self.primary = primary or PillowDecodeStrategy()
        self.fallback = fallback

    @classmethod
    def for_capabilities(cls, capabilities: RuntimeCapabilities) -> "ImageDecoder":
        fallback = VipsFileDecodeStrategy() if capabilities.vips_decode else None
        return cls(fallback=fallback)

    def decode(self, data: bytes, declared_mime: str) -> Image.Image:
        """Decode bytes into a raster image.

        Raises:
            DecodeError: No available strategy could read the data. Without a
                fallback, or when the primary rejection is final, the primary
                error is raised as is.
        """
        attempt = self.primary.decode(data, declared_mime)
        if attempt.ok:
            return attempt.image

        if attempt.final:
            logger.warning(
                "Decode rejected without fallback",
                strategy=attempt.strategy,
                error_type=attempt.error.details.get("error_type"),
            )
            raise attempt.error
        if self.fallback is None:
            raise attempt.error

        logger.info(
            "Primary decode failed, trying fallback",
            primary=attempt.strategy,
            fallback=self.fallback.name,
            mime_type=declared_mime,
        )
        fallback_attempt = self.fallback.decode(data, declared_mime)
        if fallback_attempt.ok:
            return fallback_attempt.image
        raise fallback_attempt.error from attempt.error
