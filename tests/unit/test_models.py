"""Unit tests for conversion data models."""

import base64

import pytest
from pydantic import ValidationError

from dataurl_converter.models.conversion import (
    ConvertOptions,
    ConvertResult,
    FitMode,
    ResizeOptions,
    SourceFile,
    TargetFormat,
)


class TestConvertOptions:
    """Test suite for ConvertOptions validation."""

    def test_defaults(self):
        options = ConvertOptions()

        assert options.target_format is None
        assert options.quality is None
        assert options.resize is None
        assert options.background is None

    def test_target_format_from_string(self):
        options = ConvertOptions(target_format="webp")
        assert options.target_format is TargetFormat.WEBP

    def test_unknown_target_format_rejected(self):
        with pytest.raises(ValidationError):
            ConvertOptions(target_format="gif")

    @pytest.mark.parametrize("quality", [0.1, 0.5, 0.92, 1.0])
    def test_quality_in_range(self, quality):
        assert ConvertOptions(quality=quality).quality == quality

    @pytest.mark.parametrize("quality", [0.0, 0.05, 1.01, -1, 92])
    def test_quality_out_of_range(self, quality):
        with pytest.raises(ValidationError):
            ConvertOptions(quality=quality)

    @pytest.mark.parametrize("color", ["#fff", "#000000", "white", "rgb(10, 20, 30)"])
    def test_background_accepts_colours(self, color):
        assert ConvertOptions(background=color).background == color

    def test_background_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Unrecognized background colour"):
            ConvertOptions(background="not-a-colour")

    def test_options_are_frozen(self):
        options = ConvertOptions()
        with pytest.raises(ValidationError):
            options.quality = 0.5

    def test_nested_resize_from_dict(self):
        options = ConvertOptions(resize={"max_width": 100, "fit": "cover"})

        assert options.resize.max_width == 100
        assert options.resize.max_height is None
        assert options.resize.fit is FitMode.COVER


class TestResizeOptions:
    """Test suite for ResizeOptions validation."""

    def test_default_fit_is_contain(self):
        assert ResizeOptions(max_width=10).fit is FitMode.CONTAIN

    def test_both_bounds_optional(self):
        resize = ResizeOptions()
        assert resize.max_width is None and resize.max_height is None

    @pytest.mark.parametrize("field", ["max_width", "max_height"])
    @pytest.mark.parametrize("value", [0, -5])
    def test_bounds_must_be_positive(self, field, value):
        with pytest.raises(ValidationError):
            ResizeOptions(**{field: value})

    def test_unknown_fit_rejected(self):
        with pytest.raises(ValidationError):
            ResizeOptions(max_width=10, fit="stretch")


class TestSourceFile:
    """Test suite for SourceFile construction."""

    def test_from_path_uses_extension(self, tmp_path, png_bytes):
        path = tmp_path / "photo.png"
        path.write_bytes(png_bytes)

        source = SourceFile.from_path(path)

        assert source.data == png_bytes
        assert source.mime == "image/png"
        assert source.name == "photo.png"

    def test_from_path_svg(self, tmp_path, svg_bytes):
        path = tmp_path / "icon.svg"
        path.write_bytes(svg_bytes)

        assert SourceFile.from_path(str(path)).mime == "image/svg+xml"

    def test_from_path_sniffs_unknown_extension(self, tmp_path, jpeg_bytes):
        path = tmp_path / "upload.dat"
        path.write_bytes(jpeg_bytes)

        assert SourceFile.from_path(path).mime == "image/jpeg"

    def test_from_path_without_extension_or_signature(self, tmp_path):
        path = tmp_path / "blob"
        path.write_bytes(b"\x00\x01\x02 plain bytes here")

        assert SourceFile.from_path(path).mime == ""

    def test_defaults(self):
        source = SourceFile(data=b"abc")
        assert source.mime == ""
        assert source.name == ""


class TestConvertResult:
    """Test suite for ConvertResult helpers."""

    def make_result(self, payload=b"hello world", mime="image/webp", **kwargs):
        encoded = base64.b64encode(payload).decode("ascii")
        return ConvertResult(
            data_url=f"data:{mime};base64,{encoded}",
            mime=mime,
            size_bytes=len(payload),
            **kwargs,
        )

    def test_to_bytes(self):
        assert self.make_result(b"\x89PNG\x00\x01").to_bytes() == b"\x89PNG\x00\x01"

    def test_rendered_flag(self):
        assert not self.make_result().rendered
        assert self.make_result(width=10, height=5).rendered

    @pytest.mark.parametrize(
        "file_name,mime,expected",
        [
            ("photo.png", "image/webp", "photo.webp"),
            ("archive.tar.gz", "image/jpeg", "archive.tar.jpg"),
            ("", "image/png", "image.png"),
            ("logo.svg", "image/svg+xml", "logo.svg"),
            ("blob", "application/octet-stream", "blob.bin"),
        ],
    )
    def test_suggested_file_name(self, file_name, mime, expected):
        result = self.make_result(mime=mime, file_name=file_name)
        assert result.suggested_file_name() == expected

    def test_json_round_trip(self):
        result = self.make_result(width=3, height=4, file_name="a.png")
        assert ConvertResult.model_validate_json(result.model_dump_json()) == result
