"""Pytest fixtures for data URL converter tests."""

import os
from io import BytesIO

import pytest
from PIL import Image

# Set test environment variables BEFORE any package imports
os.environ["DATAURL_CONVERTER_ENV"] = "testing"
os.environ["DATAURL_CONVERTER_ENABLE_VIPS_FALLBACK"] = "false"
os.environ["DATAURL_CONVERTER_ENABLE_VIPS_SURFACE"] = "false"
os.environ["DATAURL_CONVERTER_LOGGING_ENABLED"] = "false"

from dataurl_converter.core.capabilities import RuntimeCapabilities  # noqa: E402
from dataurl_converter.core.conversion.pipeline import ConversionPipeline  # noqa: E402

SVG_DOCUMENT = (
    b'<?xml version="1.0" encoding="UTF-8"?>\n'
    b'<svg xmlns="http://www.w3.org/2000/svg" width="40" height="20" viewBox="0 0 40 20">'
    b'<rect width="40" height="20" fill="#3366ff"/></svg>\n'
)


def encode_image(image: Image.Image, format: str, **params) -> bytes:
    buffer = BytesIO()
    image.save(buffer, format=format, **params)
    return buffer.getvalue()


@pytest.fixture
def make_image_bytes():
    """Factory producing encoded test images."""

    def _make(
        size=(64, 32), format="PNG", mode="RGB", color="red", **params
    ) -> bytes:
        return encode_image(Image.new(mode, size, color), format, **params)

    return _make


@pytest.fixture
def png_bytes(make_image_bytes):
    return make_image_bytes((64, 32), "PNG")


@pytest.fixture
def jpeg_bytes(make_image_bytes):
    return make_image_bytes((64, 32), "JPEG", color="blue")


@pytest.fixture
def gif_bytes(make_image_bytes):
    return make_image_bytes((24, 24), "GIF", mode="P", color=1)


@pytest.fixture
def transparent_png_bytes(make_image_bytes):
    return make_image_bytes((20, 20), "PNG", mode="RGBA", color=(0, 0, 0, 0))


@pytest.fixture
def split_png_bytes():
    """400x200 image: left half red, right half blue."""
    image = Image.new("RGB", (400, 200), "red")
    image.paste((0, 0, 255), (200, 0, 400, 200))
    return encode_image(image, "PNG")


@pytest.fixture
def svg_bytes():
    return SVG_DOCUMENT


@pytest.fixture
def memory_capabilities():
    """Capabilities forcing the Pillow-only path."""
    return RuntimeCapabilities(vips_decode=False, vips_surface=False)


@pytest.fixture
def pipeline(memory_capabilities):
    return ConversionPipeline(capabilities=memory_capabilities)
