"""Service layer for image conversion operations."""

import time
import uuid
from typing import Optional

import structlog

from dataurl_converter.config import settings
from dataurl_converter.core.capabilities import RuntimeCapabilities
from dataurl_converter.core.conversion.pipeline import ConversionPipeline
from dataurl_converter.core.exceptions import ImageConverterError
from dataurl_converter.models.conversion import ConvertOptions, ConvertResult, SourceFile
from dataurl_converter.utils.logging import LoggingContext

logger = structlog.get_logger()


class ConversionService:
    """Service layer for handling image conversions."""

    def __init__(self, pipeline: Optional[ConversionPipeline] = None):
        """Initialize conversion service."""
        self.pipeline = pipeline or ConversionPipeline(
            capabilities=RuntimeCapabilities.probe(),
            default_quality=settings.default_quality,
            default_background=settings.default_background,
        )

    async def convert(
        self, source: SourceFile, options: Optional[ConvertOptions] = None
    ) -> ConvertResult:
        """
        Convert a file into a data URL.

        Args:
            source: Raw file bytes with declared media type and name
            options: Conversion options; defaults apply when omitted

        Returns:
            ConvertResult

        Raises:
            DecodeError: If the input cannot be decoded
            EncodeError: If the output cannot be encoded
        """
        options = options or ConvertOptions()

        with LoggingContext(correlation_id=str(uuid.uuid4())):
            start_time = time.time()
            logger.info(
                "Conversion started",
                mime_type=source.mime,
                input_size=len(source.data),
                target_format=(
                    options.target_format.value if options.target_format else None
                ),
            )
            try:
                result = await self.pipeline.convert(source, options)
            except ImageConverterError as e:
                logger.warning(
                    "Conversion failed",
                    error_code=e.error_code,
                    error=e.message,
                    processing_time=round(time.time() - start_time, 4),
                )
                raise

            logger.info(
                "Conversion completed",
                output_mime=result.mime,
                output_size=result.size_bytes,
                rendered=result.rendered,
                processing_time=round(time.time() - start_time, 4),
            )
            return result


conversion_service = ConversionService()


async def convert_file(
    source: SourceFile, options: Optional[ConvertOptions] = None
) -> ConvertResult:
    """Convert ``source`` with the shared service instance."""
    return await conversion_service.convert(source, options)
