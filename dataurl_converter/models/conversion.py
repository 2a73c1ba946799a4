"""Data models for image conversion."""

import base64
import mimetypes
from enum import Enum
from pathlib import Path, PurePath
from typing import Optional, Union

from PIL import ImageColor
from pydantic import BaseModel, ConfigDict, Field, field_validator

from dataurl_converter.core.constants import (
    DATA_URL_SEPARATOR,
    MAX_QUALITY,
    MIN_QUALITY,
)
from dataurl_converter.core.conversion.formats import detect_mime, mime_to_extension


class TargetFormat(str, Enum):
    """Requested output format."""

    BASE64 = "base64"
    ORIGINAL = "original"
    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"
    SVG = "svg"


class FitMode(str, Enum):
    """How a resize fits the source into its bounds."""

    CONTAIN = "contain"
    COVER = "cover"


class ResizeOptions(BaseModel):
    """Bounds for a resize pass."""

    model_config = ConfigDict(frozen=True)

    max_width: Optional[int] = Field(
        default=None, ge=1, description="Maximum output width in pixels"
    )
    max_height: Optional[int] = Field(
        default=None, ge=1, description="Maximum output height in pixels"
    )
    fit: FitMode = Field(
        default=FitMode.CONTAIN, description="'contain' scales down, 'cover' crops"
    )


class ConvertOptions(BaseModel):
    """Options for a single conversion. Every field is optional."""

    model_config = ConfigDict(frozen=True)

    target_format: Optional[TargetFormat] = Field(
        default=None, description="Output format; unset means passthrough"
    )
    quality: Optional[float] = Field(
        default=None,
        ge=MIN_QUALITY,
        le=MAX_QUALITY,
        description="Quality for jpeg/webp output (0.1-1.0)",
    )
    resize: Optional[ResizeOptions] = Field(
        default=None, description="Resize bounds; presence forces a render pass"
    )
    background: Optional[str] = Field(
        default=None,
        description="Colour under opaque (jpeg) output; unset uses the default",
    )

    @field_validator("background")
    @classmethod
    def validate_background(cls, v: Optional[str]) -> Optional[str]:
        """Ensure the colour is one the renderer can parse."""
        if v is None:
            return v
        try:
            ImageColor.getrgb(v)
        except ValueError as e:
            raise ValueError(f"Unrecognized background colour: {v!r}") from e
        return v


class SourceFile(BaseModel):
    """Raw input bytes with the declared media type and original name."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(description="Raw file content")
    mime: str = Field(default="", description="Declared media type, may be empty")
    name: str = Field(default="", description="Original file name")

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SourceFile":
        """Read a file, declaring its type from the extension or its content."""
        path = Path(path)
        data = path.read_bytes()
        mime, _ = mimetypes.guess_type(path.name)
        if not mime or not mime.startswith("image/"):
            mime = detect_mime(data) or mime or ""
        return cls(data=data, mime=mime, name=path.name)


class ConvertResult(BaseModel):
    """Outcome of a conversion."""

    model_config = ConfigDict(frozen=True)

    data_url: str = Field(description="Self-describing base64 data URL")
    mime: str = Field(description="Media type carried by the payload")
    size_bytes: int = Field(description="Decoded size of the payload in bytes")
    width: Optional[int] = Field(
        default=None, description="Output width, set only when a render occurred"
    )
    height: Optional[int] = Field(
        default=None, description="Output height, set only when a render occurred"
    )
    file_name: str = Field(default="", description="Name of the source file")

    @property
    def rendered(self) -> bool:
        return self.width is not None and self.height is not None

    def to_bytes(self) -> bytes:
        """Decode the payload back to raw bytes."""
        _, _, encoded = self.data_url.partition(DATA_URL_SEPARATOR)
        return base64.b64decode(encoded)

    def suggested_file_name(self) -> str:
        """File name for saving the payload, e.g. ``photo.webp``."""
        stem = PurePath(self.file_name).stem or "image"
        return f"{stem}.{mime_to_extension(self.mime)}"
