from dataurl_converter.models.conversion import (
    ConvertOptions,
    ConvertResult,
    FitMode,
    ResizeOptions,
    SourceFile,
    TargetFormat,
)

__all__ = [
    "ConvertOptions",
    "ConvertResult",
    "FitMode",
    "ResizeOptions",
    "SourceFile",
    "TargetFormat",
]
