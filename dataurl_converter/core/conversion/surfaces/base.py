"""Base render surface interface."""

from abc import ABC, abstractmethod
from typing import Optional

from PIL import Image

from dataurl_converter.core.conversion.geometry import Rect


class RenderSurface(ABC):
    """Abstract base class for drawable, serializable raster surfaces."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    @abstractmethod
    def composite_background(self, color: str) -> None:
        """Fill the whole surface with an opaque colour."""

    @abstractmethod
    def draw_region(self, raster: Image.Image, src: Rect, dst: Rect) -> None:
        """Sample ``src`` from ``raster`` and draw it scaled into ``dst``."""

    @abstractmethod
    def to_bytes(self, mime: str, quality: Optional[int] = None) -> bytes:
        """Serialize the surface.

        Args:
            mime: One of the canvas media types (png, jpeg, webp)
            quality: 1-100, used by lossy encoders only
        """

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)
