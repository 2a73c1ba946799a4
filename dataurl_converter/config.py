from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dataurl_converter.core.constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_QUALITY,
    MAX_QUALITY,
    MIN_QUALITY,
)


class Settings(BaseSettings):
    # Application
    app_name: str = Field(default="Data URL Converter", description="Application name")
    env: str = Field(
        default="development", description="Environment (development/production)"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    # Conversion defaults
    default_quality: float = Field(
        default=DEFAULT_QUALITY,
        description="Quality for lossy encodings when a request sets none (0.1-1.0)",
    )
    default_background: str = Field(
        default=DEFAULT_BACKGROUND,
        description="Background colour for opaque targets when a request sets none",
    )

    # Runtime capabilities
    enable_vips_fallback: bool = Field(
        default=True,
        description="Retry failed decodes through libvips when it is installed",
    )
    enable_vips_surface: bool = Field(
        default=False,
        description="Render on libvips-backed surfaces when libvips is installed",
    )

    # Logging Configuration
    logging_enabled: bool = Field(
        default=False, description="Enable file logging in addition to stderr"
    )
    log_dir: str = Field(default="./logs", description="Directory for log files")
    max_log_size_mb: int = Field(
        default=10, description="Maximum size of each log file in MB"
    )
    log_backup_count: int = Field(
        default=3, description="Number of backup log files to keep"
    )

    @field_validator("env")
    @classmethod
    def validate_env(cls, v):
        allowed = ["development", "production", "testing"]
        if v not in allowed:
            raise ValueError(f"env must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @field_validator("default_quality")
    @classmethod
    def validate_default_quality(cls, v):
        if not MIN_QUALITY <= v <= MAX_QUALITY:
            raise ValueError(
                f"default_quality must be between {MIN_QUALITY} and {MAX_QUALITY}"
            )
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="DATAURL_CONVERTER_",
        extra="ignore",
    )


settings = Settings()
