"""
Configuration Management for Perevod.

Provides type-safe settings loaded with Pydantic Settings from environment
variables (prefix ``PEREVOD_``), a ``.env`` file, or defaults.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import codecs
from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class PerevodSettings(BaseSettings):
    """
    Runtime settings for message extraction.

    Configuration is loaded with the following priority (highest to lowest):
    1. System environment variables (``PEREVOD_LOG_LEVEL`` etc.)
    2. .env file in the working directory
    3. Hardcoded default values

    Example:
        ```python
        from perevod_core.config import settings

        print(settings.log_level)  # 'INFO'
        print(settings.source_encoding)  # 'utf-8'
        ```
    """

    # ========================================
    # LOGGING CONFIGURATION
    # ========================================

    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_format: str = Field(default="json", description="Log format (json, console)")

    # ========================================
    # SOURCE FILES
    # ========================================

    source_encoding: str = Field(
        default="utf-8", description="Encoding used to decode source files"
    )

    max_file_size_bytes: int = Field(
        default=5_000_000,
        ge=1,
        le=500_000_000,
        description="Source files larger than this are rejected",
    )

    # ========================================
    # VALIDATORS
    # ========================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate log level is one of allowed values.

        Raises:
            ValueError: If log level not in allowed values
        """
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got '{v}'")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """
        Validate log format is one of allowed values.

        Raises:
            ValueError: If log format not in allowed values
        """
        allowed = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got '{v}'")
        return v_lower

    @field_validator("source_encoding")
    @classmethod
    def validate_source_encoding(cls, v: str) -> str:
        """Ensure the encoding name is known to the codecs registry."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown source_encoding '{v}'") from e
        return v

    # ========================================
    # PYDANTIC CONFIGURATION
    # ========================================

    model_config = {
        "env_prefix": "PEREVOD_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "validate_assignment": True,
        "extra": "ignore",
    }


def get_config_summary(settings: PerevodSettings) -> Dict[str, Any]:
    """
    Get configuration summary for logging/debugging.

    Args:
        settings: PerevodSettings instance

    Returns:
        Configuration summary grouped by category
    """
    return {
        "logging": {
            "level": settings.log_level,
            "format": settings.log_format,
        },
        "sources": {
            "encoding": settings.source_encoding,
            "max_file_size_bytes": settings.max_file_size_bytes,
        },
    }


# Singleton instance - instantiated once at module import
settings = PerevodSettings()
