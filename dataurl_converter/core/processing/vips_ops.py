"""
libvips helpers shared by the fallback decoder and the vips surface.
Moves pixels between libvips and Pillow as 8-bit sRGB(A).
"""

from typing import Any

import numpy as np
from PIL import Image

from dataurl_converter.core.capabilities import VIPS_AVAILABLE, pyvips

RGB_BANDS = 3
RGBA_BANDS = 4


def _require_vips() -> None:
    if not VIPS_AVAILABLE:
        raise RuntimeError("libvips is not available in this runtime")


def load_from_file(path: str) -> Image.Image:
    """Load any format libvips understands into a Pillow image.

    Pixels are copied into memory before returning, so the file may be
    removed as soon as this call completes.
    """
    _require_vips()
    image = pyvips.Image.new_from_file(path, access="sequential")
    return vips_to_pil(image)


def vips_to_pil(image: Any) -> Image.Image:
    """Convert a libvips image to an RGB or RGBA Pillow image."""
    _require_vips()
    image = image.colourspace("srgb")
    if image.format != "uchar":
        image = image.cast("uchar")
    if image.bands > RGBA_BANDS:
        image = image.extract_band(0, n=RGBA_BANDS)
    elif image.bands < RGB_BANDS:
        image = pyvips.Image.bandjoin([image] * RGB_BANDS)

    array = np.ndarray(
        buffer=image.write_to_memory(),
        dtype=np.uint8,
        shape=[image.height, image.width, image.bands],
    )
    return Image.fromarray(array.copy())


def pil_to_vips(image: Image.Image) -> Any:
    """Convert a Pillow image to an RGBA libvips image."""
    _require_vips()
    rgba = image.convert("RGBA")
    vips_image = pyvips.Image.new_from_memory(
        rgba.tobytes(), rgba.width, rgba.height, RGBA_BANDS, "uchar"
    )
    return vips_image.copy(interpretation="srgb")
