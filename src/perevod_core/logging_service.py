"""
Structured logging for Perevod.

Log events go to stderr so that catalogs written to stdout by callers stay
clean. Extraction emits one ``performance_metric`` event per file and one
``error_occurred`` event per dropped call site.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging
import sys
import traceback
from dataclasses import dataclass, field
from typing import Any, Optional, TextIO

import structlog
from structlog.types import Processor

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "console")
MAX_LOGGER_NAME = 200
ROOT_LOGGER = "perevod"


@dataclass
class LoggingConfig:
    """Level, renderer and stream; tests pass a buffer as ``output_stream``."""

    level: str = "INFO"
    format: str = "json"
    output_stream: TextIO = field(default_factory=lambda: sys.stderr)


class LoggingService:
    """
    Process-wide structlog setup with a logger cache.

    ``configure_logging`` may run once; ``utils.get_logger`` calls it with
    the values from settings when a library module logs first.
    """

    _configured: bool = False
    _log_level: str = "INFO"
    _config: Optional[LoggingConfig] = None
    _loggers: dict[str, structlog.BoundLogger] = {}

    @classmethod
    def configure_logging(
        cls, level: str = "INFO", format: str = "json", config: Optional[LoggingConfig] = None
    ) -> None:
        """
        Install the structlog pipeline.

        Raises:
            ValueError: Unknown level or format.
            RuntimeError: Logging is already configured.
        """
        if cls._configured:
            raise RuntimeError("Logging already configured")

        cfg = config or LoggingConfig(level=level.upper(), format=format.lower())
        if cfg.level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {level}. Must be one of: {', '.join(LOG_LEVELS)}")
        if cfg.format not in LOG_FORMATS:
            raise ValueError(f"Invalid format: {format}. Must be 'json' or 'console'")

        cls._config = cfg
        cls._log_level = cfg.level
        structlog.configure(
            processors=cls._processors(cfg.format),
            wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, cfg.level)),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=cfg.output_stream),
            cache_logger_on_first_use=True,
        )
        cls._configured = True

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured

    @classmethod
    def get_logger(cls, name: str) -> structlog.BoundLogger:
        """
        Cached logger for ``name``.

        Raises:
            RuntimeError: Logging is not configured.
            ValueError: Empty name, or longer than MAX_LOGGER_NAME.
        """
        if not cls._configured:
            raise RuntimeError("Logging not configured. Call configure_logging() first.")
        if not name:
            raise ValueError("Logger name cannot be empty")
        if len(name) > MAX_LOGGER_NAME:
            raise ValueError(f"Logger name exceeds maximum length ({MAX_LOGGER_NAME})")

        if name not in cls._loggers:
            cls._loggers[name] = structlog.get_logger(name)
        return cls._loggers[name]

    @classmethod
    def log_error(
        cls,
        error: Exception,
        correlation_id: str,
        context: Optional[dict[str, Any]] = None,
        logger_name: str = ROOT_LOGGER,
        include_stack_trace: bool = True,
    ) -> None:
        """Emit ``error_occurred`` with the error type, message and code."""
        if not correlation_id:
            raise ValueError("correlation_id cannot be empty")

        fields: dict[str, Any] = {
            "error_type": type(error).__name__,
            "error_message": str(error),
            "correlation_id": correlation_id,
        }
        error_code = getattr(error, "error_code", None)
        if error_code:
            fields["error_code"] = error_code
        fields.update(context or {})
        if include_stack_trace:
            fields["stack_trace"] = traceback.format_exc()

        cls.get_logger(logger_name).error("error_occurred", **fields)

    @classmethod
    def log_performance(
        cls,
        operation: str,
        duration_ms: float,
        correlation_id: str,
        metadata: Optional[dict[str, Any]] = None,
        logger_name: str = ROOT_LOGGER,
    ) -> None:
        """Emit ``performance_metric`` for one timed operation, e.g. a file."""
        if not operation:
            raise ValueError("operation cannot be empty")
        if not correlation_id:
            raise ValueError("correlation_id cannot be empty")
        if duration_ms < 0:
            raise ValueError("duration_ms cannot be negative")

        fields = dict(metadata or {})
        fields.update(operation=operation, duration_ms=duration_ms, correlation_id=correlation_id)
        cls.get_logger(logger_name).info("performance_metric", **fields)

    @staticmethod
    def _processors(output_format: str) -> list[Processor]:
        renderer: Processor
        if output_format == "console":
            renderer = structlog.dev.ConsoleRenderer(colors=True)
        else:
            renderer = structlog.processors.JSONRenderer()
        return [
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ]
