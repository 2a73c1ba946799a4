"""Headless in-memory surface backed by Pillow."""

from io import BytesIO
from typing import Optional

from PIL import Image, ImageColor

from dataurl_converter.core.constants import LOSSY_MIME_TYPES, MIME_JPEG, PIL_SAVE_FORMATS
from dataurl_converter.core.conversion.geometry import Rect
from dataurl_converter.core.conversion.surfaces.base import RenderSurface

TRANSPARENT = (0, 0, 0, 0)


class MemorySurface(RenderSurface):
    """RGBA Pillow canvas, transparent until drawn on."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(width, height)
        self.image = Image.new("RGBA", (width, height), TRANSPARENT)

    def composite_background(self, color: str) -> None:
        red, green, blue = ImageColor.getrgb(color)[:3]
        self.image.paste((red, green, blue, 255), (0, 0, self.width, self.height))

    def draw_region(self, raster: Image.Image, src: Rect, dst: Rect) -> None:
        source = raster if raster.mode == "RGBA" else raster.convert("RGBA")
        # Resampling must not read outside the source rect
        region = source.crop(src.box).resize(
            (dst.width, dst.height), Image.Resampling.LANCZOS
        )
        self.image.alpha_composite(region, dest=(dst.x, dst.y))

    def to_bytes(self, mime: str, quality: Optional[int] = None) -> bytes:
        save_format = PIL_SAVE_FORMATS[mime]
        image = self.image
        save_params = {}

        if mime == MIME_JPEG:
            # JPEG has no alpha; callers composite a background first
            image = image.convert("RGB")
        if mime in LOSSY_MIME_TYPES and quality is not None:
            save_params["quality"] = quality

        with BytesIO() as buffer:
            image.save(buffer, format=save_format, **save_params)
            return buffer.getvalue()
