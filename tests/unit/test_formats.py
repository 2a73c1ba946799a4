"""Unit tests for media type resolution."""

import pytest

from dataurl_converter.core.conversion.formats import (
    clamp_canvas_mime,
    detect_mime,
    is_image_mime,
    is_opaque_mime,
    is_passthrough_target,
    is_svg_mime,
    mime_to_extension,
    resolve_target_mime,
)
from dataurl_converter.models.conversion import TargetFormat


class TestResolveTargetMime:
    """Test suite for target format resolution."""

    @pytest.mark.parametrize("target", [None, "", "original", "base64"])
    def test_passthrough_targets_keep_source_type(self, target):
        assert resolve_target_mime("image/gif", target) == "image/gif"

    @pytest.mark.parametrize("target", [None, "original", "base64", "png"])
    def test_empty_source_type_becomes_octet_stream(self, target):
        expected = "image/png" if target == "png" else "application/octet-stream"
        assert resolve_target_mime("", target) == expected

    @pytest.mark.parametrize(
        "target,expected",
        [
            ("png", "image/png"),
            ("jpeg", "image/jpeg"),
            ("webp", "image/webp"),
            ("svg", "image/svg+xml"),
        ],
    )
    def test_known_targets(self, target, expected):
        assert resolve_target_mime("image/bmp", target) == expected

    def test_accepts_enum_members(self):
        assert resolve_target_mime("image/png", TargetFormat.WEBP) == "image/webp"
        assert resolve_target_mime("image/png", TargetFormat.ORIGINAL) == "image/png"

    def test_unknown_target_falls_back_to_source(self):
        assert resolve_target_mime("image/png", "tiff") == "image/png"
        assert resolve_target_mime("", "tiff") == "application/octet-stream"

    def test_is_passthrough_target(self):
        assert is_passthrough_target(None)
        assert is_passthrough_target(TargetFormat.BASE64)
        assert is_passthrough_target("original")
        assert not is_passthrough_target(TargetFormat.SVG)
        assert not is_passthrough_target("png")


class TestMimeHelpers:
    """Test suite for media type predicates."""

    def test_svg_mime(self):
        assert is_svg_mime("image/svg+xml")
        assert is_svg_mime("image/svg")
        assert not is_svg_mime("image/png")
        assert not is_svg_mime(None)

    def test_image_mime(self):
        assert is_image_mime("image/x-icon")
        assert not is_image_mime("application/octet-stream")
        assert not is_image_mime("")

    @pytest.mark.parametrize(
        "requested,expected",
        [
            ("image/jpeg", "image/jpeg"),
            ("image/webp", "image/webp"),
            ("image/png", "image/png"),
            ("image/svg+xml", "image/png"),
            ("image/gif", "image/png"),
            ("application/octet-stream", "image/png"),
        ],
    )
    def test_clamp_canvas_mime(self, requested, expected):
        assert clamp_canvas_mime(requested) == expected

    def test_only_jpeg_is_opaque(self):
        assert is_opaque_mime("image/jpeg")
        assert not is_opaque_mime("image/png")
        assert not is_opaque_mime("image/webp")

    @pytest.mark.parametrize(
        "mime,extension",
        [
            ("image/png", "png"),
            ("image/jpeg", "jpg"),
            ("image/webp", "webp"),
            ("image/svg+xml", "svg"),
            ("image/svg", "svg"),
            ("image/gif", "gif"),
            ("image/bmp", "bmp"),
            ("image/tiff", "bin"),
            ("", "bin"),
        ],
    )
    def test_mime_to_extension(self, mime, extension):
        assert mime_to_extension(mime) == extension


class TestDetectMime:
    """Test suite for magic byte sniffing."""

    def test_detects_raster_formats(self, png_bytes, jpeg_bytes, gif_bytes, make_image_bytes):
        assert detect_mime(png_bytes) == "image/png"
        assert detect_mime(jpeg_bytes) == "image/jpeg"
        assert detect_mime(gif_bytes) == "image/gif"
        assert detect_mime(make_image_bytes(format="WEBP")) == "image/webp"
        assert detect_mime(make_image_bytes(format="BMP")) == "image/bmp"
        assert detect_mime(make_image_bytes(format="TIFF")) == "image/tiff"

    def test_detects_svg(self, svg_bytes):
        assert detect_mime(svg_bytes) == "image/svg+xml"
        assert detect_mime(b'<svg xmlns="http://www.w3.org/2000/svg"></svg>') == "image/svg+xml"

    def test_detects_avif_brand(self):
        header = b"\x00\x00\x00\x1cftypavif\x00\x00\x00\x00"
        assert detect_mime(header) == "image/avif"

    def test_unknown_or_short_data(self):
        assert detect_mime(b"") is None
        assert detect_mime(b"\x89PNG") is None
        assert detect_mime(b"plain text that is not an image") is None
