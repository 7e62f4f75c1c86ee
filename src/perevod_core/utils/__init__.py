"""
Utilities for Perevod Core.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from .logger_factory import configure_logging, get_logger

__all__ = [
    "get_logger",
    "configure_logging",
]
