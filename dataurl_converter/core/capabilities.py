"""Runtime capability probe for optional libvips support."""

from dataclasses import dataclass
from typing import Optional

import structlog

from dataurl_converter.config import settings

try:
    import pyvips

    VIPS_AVAILABLE = True
except (ImportError, OSError):
    # OSError: the binding is installed but libvips itself is missing
    VIPS_AVAILABLE = False
    pyvips = None

logger = structlog.get_logger()


@dataclass(frozen=True)
class RuntimeCapabilities:
    """What the current runtime can do beyond plain Pillow.

    Attributes:
        vips_decode: Failed Pillow decodes may be retried through libvips
        vips_surface: Rendering uses libvips-backed surfaces
    """

    vips_decode: bool = False
    vips_surface: bool = False

    @classmethod
    def probe(
        cls,
        enable_vips_fallback: Optional[bool] = None,
        enable_vips_surface: Optional[bool] = None,
    ) -> "RuntimeCapabilities":
        """Detect capabilities, honoring the settings switches."""
        if enable_vips_fallback is None:
            enable_vips_fallback = settings.enable_vips_fallback
        if enable_vips_surface is None:
            enable_vips_surface = settings.enable_vips_surface

        capabilities = cls(
            vips_decode=VIPS_AVAILABLE and enable_vips_fallback,
            vips_surface=VIPS_AVAILABLE and enable_vips_surface,
        )
        logger.debug(
            "Runtime capabilities probed",
            vips_available=VIPS_AVAILABLE,
            vips_decode=capabilities.vips_decode,
            vips_surface=capabilities.vips_surface,
        )
        return capabilities
