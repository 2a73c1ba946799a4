"""Conversion pipeline orchestrating decode, geometry, render and encode."""

import asyncio
from typing import Optional

import structlog
from PIL import Image

from dataurl_converter.core.capabilities import RuntimeCapabilities
from dataurl_converter.core.constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_QUALITY,
    MIME_JPEG,
    MIME_OCTET_STREAM,
)
from dataurl_converter.core.conversion.data_url import (
    encode_data_url,
    estimate_base64_size_bytes,
    extract_mime_from_data_url,
)
from dataurl_converter.core.conversion.decoder import ImageDecoder
from dataurl_converter.core.conversion.encoder import Encoder
from dataurl_converter.core.conversion.formats import (
    clamp_canvas_mime,
    is_image_mime,
    is_opaque_mime,
    is_passthrough_target,
    is_svg_mime,
    resolve_target_mime,
)
from dataurl_converter.core.conversion.geometry import Geometry, compute_resize
from dataurl_converter.core.conversion.surfaces import create_surface
from dataurl_converter.models.conversion import (
    ConvertOptions,
    ConvertResult,
    FitMode,
    SourceFile,
    TargetFormat,
)

logger = structlog.get_logger()


class ConversionPipeline:
    """Converts one source per call; holds no per-call state."""

    def __init__(
        self,
        capabilities: Optional[RuntimeCapabilities] = None,
        decoder: Optional[ImageDecoder] = None,
        encoder: Optional[Encoder] = None,
        default_quality: float = DEFAULT_QUALITY,
        default_background: str = DEFAULT_BACKGROUND,
    ) -> None:
        self.capabilities = capabilities or RuntimeCapabilities()
        self.decoder = decoder or ImageDecoder.for_capabilities(self.capabilities)
        self.encoder = encoder or Encoder()
        self.default_quality = default_quality
        self.default_background = default_background

    async def convert(
        self, source: SourceFile, options: Optional[ConvertOptions] = None
    ) -> ConvertResult:
        """
        Convert a source file according to ``options``.

        Args:
            source: Raw bytes with declared media type and name
            options: Target format, quality, resize and background

        Returns:
            ConvertResult with the data URL and its metadata

        Raises:
            DecodeError: The source could not be read as an image
            EncodeError: The rendered image could not be serialized
        """
        options = options or ConvertOptions()
        source_mime = source.mime or MIME_OCTET_STREAM
        target_mime = resolve_target_mime(source_mime, options.target_format)

        if is_svg_mime(source_mime) and (
            is_passthrough_target(options.target_format)
            or options.target_format is TargetFormat.SVG
        ):
            logger.debug("SVG passthrough", mime_type=source_mime)
            return await self._passthrough(source, source_mime)

        if self._wants_passthrough(options, source_mime, target_mime):
            logger.debug("Raw passthrough", mime_type=source_mime)
            return await self._passthrough(source, source_mime)

        return await self._render(source, source_mime, target_mime, options)

    def _wants_passthrough(
        self, options: ConvertOptions, source_mime: str, target_mime: str
    ) -> bool:
        explicit_keep = options.target_format in (
            TargetFormat.ORIGINAL,
            TargetFormat.BASE64,
        )
        implicit_keep = options.target_format is None and is_image_mime(source_mime)
        if not (explicit_keep or implicit_keep):
            return False

        needs_jpeg_encode = target_mime == MIME_JPEG and source_mime != MIME_JPEG
        return options.resize is None and not needs_jpeg_encode

    async def _passthrough(self, source: SourceFile, source_mime: str) -> ConvertResult:
        loop = asyncio.get_running_loop()
        data_url = await loop.run_in_executor(
            None, encode_data_url, source.data, source_mime
        )
        return ConvertResult(
            data_url=data_url,
            mime=extract_mime_from_data_url(data_url),
            size_bytes=estimate_base64_size_bytes(data_url),
            file_name=source.name,
        )

    async def _render(
        self,
        source: SourceFile,
        source_mime: str,
        target_mime: str,
        options: ConvertOptions,
    ) -> ConvertResult:
        loop = asyncio.get_running_loop()

        raster = await loop.run_in_executor(
            None, self.decoder.decode, source.data, source_mime
        )
        source_size = raster.size
        try:
            resize = options.resize
            geometry = compute_resize(
                raster.width,
                raster.height,
                resize.max_width if resize else None,
                resize.max_height if resize else None,
                resize.fit if resize else FitMode.CONTAIN,
            )
            quality = (
                options.quality if options.quality is not None else self.default_quality
            )
            background = options.background or self.default_background
            data_url = await loop.run_in_executor(
                None,
                self._draw_and_encode,
                raster,
                geometry,
                target_mime,
                background,
                quality,
            )
        finally:
            raster.close()

        logger.debug(
            "Rendered conversion",
            source_size=source_size,
            output_size=(geometry.width, geometry.height),
            requested=target_mime,
        )
        return ConvertResult(
            data_url=data_url,
            mime=extract_mime_from_data_url(data_url),
            size_bytes=estimate_base64_size_bytes(data_url),
            width=geometry.width,
            height=geometry.height,
            file_name=source.name,
        )

    def _draw_and_encode(
        self,
        raster: Image.Image,
        geometry: Geometry,
        target_mime: str,
        background: str,
        quality: float,
    ) -> str:
        surface = create_surface(geometry.width, geometry.height, self.capabilities)
        output_mime = clamp_canvas_mime(target_mime)
        if is_opaque_mime(output_mime):
            surface.composite_background(background)
        surface.draw_region(raster, geometry.source_rect, geometry.output_rect)
        return self.encoder.serialize(surface, output_mime, quality)
