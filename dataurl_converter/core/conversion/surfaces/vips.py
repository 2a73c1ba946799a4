"""Surface backed by libvips."""

from typing import Optional

from PIL import Image, ImageColor

from dataurl_converter.core.capabilities import pyvips
from dataurl_converter.core.constants import LOSSY_MIME_TYPES, MIME_JPEG, VIPS_SAVE_SUFFIXES
from dataurl_converter.core.conversion.geometry import Rect
from dataurl_converter.core.conversion.surfaces.base import RenderSurface
from dataurl_converter.core.processing import vips_ops


class VipsSurface(RenderSurface):
    """RGBA libvips canvas with the same drawing contract as MemorySurface."""

    def __init__(self, width: int, height: int) -> None:
        super().__init__(width, height)
        self.image = self._solid(0, 0, 0, 0)

    def _solid(self, red: int, green: int, blue: int, alpha: int):
        canvas = pyvips.Image.black(self.width, self.height) + [red, green, blue, alpha]
        return canvas.cast("uchar").copy(interpretation="srgb")

    def composite_background(self, color: str) -> None:
        red, green, blue = ImageColor.getrgb(color)[:3]
        self.image = self._solid(red, green, blue, 255)

    def draw_region(self, raster: Image.Image, src: Rect, dst: Rect) -> None:
        region = vips_ops.pil_to_vips(raster).crop(src.x, src.y, src.width, src.height)
        region = region.resize(
            dst.width / src.width,
            vscale=dst.height / src.height,
            kernel="lanczos3",
        )
        if (region.width, region.height) != (dst.width, dst.height):
            # libvips may round the scaled size differently by a pixel
            region = region.crop(
                0, 0, min(region.width, dst.width), min(region.height, dst.height)
            ).embed(0, 0, dst.width, dst.height, extend="copy")
        self.image = (
            self.image.composite2(region, "over", x=dst.x, y=dst.y)
            .cast("uchar")
            .copy(interpretation="srgb")
        )

    def to_bytes(self, mime: str, quality: Optional[int] = None) -> bytes:
        suffix = VIPS_SAVE_SUFFIXES[mime]
        image = self.image
        save_params = {}

        if mime == MIME_JPEG:
            image = image.flatten(background=[255, 255, 255])
        if mime in LOSSY_MIME_TYPES and quality is not None:
            save_params["Q"] = quality

        return image.write_to_buffer(suffix, **save_params)
