from typing import Dict, List, Optional, TypedDict, Union


class DecodeDetails(TypedDict, total=False):
    """Type-safe details for decode errors."""

    strategy: str
    mime_type: str
    input_size: int
    error: str
    error_type: str


class EncodeDetails(TypedDict, total=False):
    """Type-safe details for encode errors."""

    output_format: str
    requested_format: str
    dimensions: tuple[int, int]
    quality: int
    error: str


# Union type for all possible error details
ErrorDetails = Union[
    DecodeDetails,
    EncodeDetails,
    Dict[str, Union[str, int, float, bool, List[str]]],  # Fallback for edge cases
]


class ImageConverterError(Exception):
    """Base exception for all converter errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[ErrorDetails] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class DecodeError(ImageConverterError):
    """Raised when input bytes cannot be interpreted as an image."""

    def __init__(self, message: str, details: Optional[DecodeDetails] = None):
        super().__init__(message=message, error_code="CONV101", details=details)


class EncodeError(ImageConverterError):
    """Raised when a surface cannot be serialized to the requested type."""

    def __init__(self, message: str, details: Optional[EncodeDetails] = None):
        super().__init__(message=message, error_code="CONV103", details=details)
