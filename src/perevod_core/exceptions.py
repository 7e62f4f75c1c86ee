"""
Error types shared by every Perevod layer.

Each error carries a code, a details dict for structured logs and a
correlation id. Configuration problems derive from ValidationError,
problems with a source or a call site from ProcessingError.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import uuid
from typing import Any, Dict, Optional


class PerevodError(Exception):
    """
    Base exception for all Perevod errors.

    Subclasses set ``default_code`` and ``default_message`` instead of
    overriding the constructor when they add no attributes.
    """

    default_code = "ERR_UNKNOWN"
    default_message = "Perevod error"

    def __init__(
        self,
        message: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.error_code = error_code or self.default_code
        self.details = dict(details or {})
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.original_exception = original_exception

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form for structured logs."""
        original = self.original_exception
        return {
            "error": type(self).__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "correlation_id": self.correlation_id,
            "original_error": None if original is None else str(original),
        }


class ValidationError(PerevodError):
    """Invalid options or arguments, detected before any source is read."""

    default_code = "VAL_001"
    default_message = "Validation failed"


class ProcessingError(PerevodError):
    """A source file or a call site could not be processed."""

    default_code = "PROC_001"
    default_message = "Processing failed"


__all__ = [
    "PerevodError",
    "ValidationError",
    "ProcessingError",
]
