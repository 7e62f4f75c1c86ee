"""
Logger Factory - Convenience wrapper for LoggingService.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Optional

import structlog

from perevod_core.config import settings
from perevod_core.logging_service import LoggingService


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a module/component-specific logger.

    Unlike LoggingService.get_logger(), this configures logging from
    settings on first use, so library entry points can log without the
    caller having to set anything up.

    Args:
        name: Logger name (typically module path or __name__)

    Returns:
        Cached BoundLogger instance

    Raises:
        ValueError: If name is empty or exceeds maximum length (200 chars)

    Example:
        ```python
        from perevod_core.utils import get_logger

        logger = get_logger(__name__)
        logger.info("file_extracted", file_path="src/app.js", messages=3)
        ```
    """
    if not LoggingService.is_configured():
        configure_logging()
    return LoggingService.get_logger(name)


def configure_logging(level: Optional[str] = None, format: Optional[str] = None) -> None:
    """
    Configure structured logging infrastructure.

    Falls back to settings.log_level and settings.log_format when the
    arguments are omitted.

    Raises:
        ValueError: If level or format is invalid
        RuntimeError: If called after logging already configured
    """
    if level is None:
        level = settings.log_level
    if format is None:
        format = settings.log_format

    LoggingService.configure_logging(level=level, format=format)
