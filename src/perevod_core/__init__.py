"""
Perevod Core.

Extracts translatable messages from call expressions. Contains:
- Exception hierarchy
- Configuration management
- Logging service
- Message extraction core (argument role matching, comment flattening)
- Tree-sitter front end for JavaScript/TypeScript

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from .config import PerevodSettings, get_config_summary, settings
from .exceptions import PerevodError, ProcessingError, ValidationError
from .logging_service import LoggingConfig, LoggingService
from .messages import (
    ArgumentMapping,
    CommentOptions,
    ContentOptions,
    ExtractedMessage,
    ExtractionConfigError,
    ExtractorOptions,
    LiteralArgument,
    MalformedCommentError,
    match_message,
)


def __getattr__(name):
    """Lazy import for the file-level extractors (they set up logging on import)."""
    if name == "CallExpressionExtractor":
        from .extractor import CallExpressionExtractor

        return CallExpressionExtractor
    elif name == "JsExtractor":
        from .extractor import JsExtractor

        return JsExtractor
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Exceptions
    "PerevodError",
    "ValidationError",
    "ProcessingError",
    "ExtractionConfigError",
    "MalformedCommentError",
    # Configuration
    "PerevodSettings",
    "settings",
    "get_config_summary",
    # Logging
    "LoggingService",
    "LoggingConfig",
    # Messages
    "ArgumentMapping",
    "CommentOptions",
    "ContentOptions",
    "ExtractorOptions",
    "LiteralArgument",
    "ExtractedMessage",
    "match_message",
    # Extractors
    "CallExpressionExtractor",
    "JsExtractor",
]
