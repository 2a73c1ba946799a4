"""Serialize render surfaces to data URLs."""

from typing import Optional

import structlog

from dataurl_converter.core.constants import DEFAULT_QUALITY
from dataurl_converter.core.conversion.data_url import encode_data_url
from dataurl_converter.core.conversion.formats import clamp_canvas_mime, is_lossy_mime
from dataurl_converter.core.conversion.surfaces.base import RenderSurface
from dataurl_converter.core.exceptions import EncodeError

logger = structlog.get_logger()


def quality_to_percent(quality: float) -> int:
    """Map a 0.1-1.0 canvas quality onto the encoders' 1-100 scale."""
    return max(1, min(100, int(quality * 100 + 0.5)))


class Encoder:
    """Turns a surface into a self-describing payload."""

    def serialize(
        self,
        surface: RenderSurface,
        mime: str,
        quality: Optional[float] = None,
    ) -> str:
        """Encode ``surface`` as a data URL.

        Requested types outside jpeg/webp are clamped to png. Quality is
        applied to lossy types only and defaults to 0.92.

        Raises:
            EncodeError: The surface could not be written as the clamped type.
        """
        output_mime = clamp_canvas_mime(mime)
        percent = None
        if is_lossy_mime(output_mime):
            percent = quality_to_percent(
                quality if quality is not None else DEFAULT_QUALITY
            )

        if output_mime != mime:
            logger.debug("Clamped output type", requested=mime, output=output_mime)

        try:
            data = surface.to_bytes(output_mime, percent)
        except Exception as e:
            raise EncodeError(
                f"Failed to encode image as {output_mime}: {e}",
                details={
                    "output_format": output_mime,
                    "requested_format": mime,
                    "dimensions": surface.size,
                    "error": str(e),
                },
            ) from e

        return encode_data_url(data, output_mime)
