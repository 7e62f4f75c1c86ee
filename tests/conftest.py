"""
Pytest configuration and fixtures for all tests.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import pytest

from perevod_core.logging_service import LoggingService
from perevod_core.treesitter.parser import ParserFactory


def pytest_configure(config):
    """Configure logging before any tests are collected."""
    LoggingService.configure_logging(level="DEBUG", format="json")


@pytest.fixture(autouse=True)
def reset_logging_service():
    """Reset LoggingService state before each test."""
    LoggingService._configured = False
    LoggingService._log_level = "INFO"
    LoggingService._config = None
    LoggingService._loggers = {}

    LoggingService.configure_logging(level="DEBUG", format="json")

    yield

    LoggingService._configured = False
    LoggingService._loggers = {}


@pytest.fixture(autouse=True)
def reset_parser_factory():
    """Drop cached parsers between tests."""
    ParserFactory.reset()
    yield
    ParserFactory.reset()
