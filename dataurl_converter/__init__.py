"""Convert images to self-describing data URLs with optional resize and re-encode."""

__version__ = "1.0.0"

from dataurl_converter.core.exceptions import (
    DecodeError,
    EncodeError,
    ImageConverterError,
)
from dataurl_converter.models.conversion import (
    ConvertOptions,
    ConvertResult,
    FitMode,
    ResizeOptions,
    SourceFile,
    TargetFormat,
)
from dataurl_converter.services.conversion_service import convert_file

__all__ = [
    "ConvertOptions",
    "ConvertResult",
    "DecodeError",
    "EncodeError",
    "FitMode",
    "ImageConverterError",
    "ResizeOptions",
    "SourceFile",
    "TargetFormat",
    "convert_file",
]
