import logging
import logging.handlers
import os
import re
import sys
import uuid
from typing import Any, Dict, Optional

import structlog

SENSITIVE_KEYS = {
    "file_name",
    "filename",
    "file_path",
    "path",
    "name",
    "data",
    "data_url",
    "payload",
    "content",
    "image_data",
    "exif",
    "metadata",
    "directory",
}

_PATH_PATTERN = re.compile(r"^(/|[A-Za-z]:\\|\\\\)")
_DATA_URL_PATTERN = re.compile(r"^data:[^,]*,", re.IGNORECASE)
_FILENAME_PATTERN = re.compile(
    r"\.(jpg|jpeg|png|gif|webp|svg|bmp|tiff|avif|heic|heif)$", re.IGNORECASE
)


def filter_sensitive_data(_, __, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Remove or mask file names, paths and payloads from logs."""

    def _recursive_filter(obj: Any, depth: int = 0) -> Any:
        if depth > 10:
            return "***DEPTH_LIMIT***"

        if isinstance(obj, dict):
            filtered = {}
            for key, value in obj.items():
                key_lower = str(key).lower()
                if any(
                    sensitive == key_lower
                    or f"_{sensitive}" in key_lower
                    or f"{sensitive}_" in key_lower
                    for sensitive in SENSITIVE_KEYS
                ):
                    filtered[key] = "***REDACTED***"
                else:
                    filtered[key] = _recursive_filter(value, depth + 1)
            return filtered
        elif isinstance(obj, list):
            return [_recursive_filter(item, depth + 1) for item in obj]
        elif isinstance(obj, (bytes, bytearray)):
            return f"***{len(obj)} BYTES***"
        elif isinstance(obj, str):
            if _DATA_URL_PATTERN.match(obj):
                return "***PAYLOAD_REDACTED***"
            if _PATH_PATTERN.match(obj):
                return "***PATH_REDACTED***"
            if _FILENAME_PATTERN.search(obj):
                return "***FILENAME_REDACTED***"
        return obj

    return _recursive_filter(event_dict)


def add_correlation_id(_, __, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add correlation ID to log entries."""
    if "correlation_id" not in event_dict:
        event_dict["correlation_id"] = structlog.contextvars.get_contextvars().get(
            "correlation_id", str(uuid.uuid4())
        )
    return event_dict


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = False,
    enable_file_logging: bool = False,
    log_dir: str = "./logs",
    max_log_size_mb: int = 10,
    backup_count: int = 3,
) -> None:
    """Configure structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Use JSON format for logs
        enable_file_logging: Also write logs to a rotating file
        log_dir: Directory for log files
        max_log_size_mb: Maximum size of each log file in MB
        backup_count: Number of backup files to keep
    """
    level = getattr(logging, log_level.upper())
    handlers = []

    # Console output always goes to stderr so stdout stays free for payloads
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    handlers.append(console_handler)

    if enable_file_logging:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(log_dir, "converter.log"),
            maxBytes=max_log_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        handlers.append(file_handler)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        add_correlation_id,
        filter_sensitive_data,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=level,
        force=True,
    )

    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.getLogger("pyvips").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


class LoggingContext:
    """Context manager for adding context to logs."""

    def __init__(self, **kwargs) -> None:
        self.context = kwargs
        self._tokens = None

    def __enter__(self) -> "LoggingContext":
        self._tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)
