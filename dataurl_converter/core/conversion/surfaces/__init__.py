"""Render surfaces and runtime-based selection."""

from dataurl_converter.core.capabilities import RuntimeCapabilities
from dataurl_converter.core.conversion.surfaces.base import RenderSurface
from dataurl_converter.core.conversion.surfaces.memory import MemorySurface
from dataurl_converter.core.conversion.surfaces.vips import VipsSurface


def create_surface(
    width: int, height: int, capabilities: RuntimeCapabilities
) -> RenderSurface:
    """Create a surface of the variant the runtime supports."""
    if capabilities.vips_surface:
        return VipsSurface(width, height)
    return MemorySurface(width, height)


__all__ = ["RenderSurface", "MemorySurface", "VipsSurface", "create_surface"]
