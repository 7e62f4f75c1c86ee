"""
Unit test fixtures.

Isolates unit tests from environment variables (.env file)
to ensure tests verify actual default values.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import os

import pytest


# Environment variables that affect PerevodSettings defaults
CONFIG_ENV_VARS = [
    "PEREVOD_LOG_LEVEL",
    "PEREVOD_LOG_FORMAT",
    "PEREVOD_SOURCE_ENCODING",
    "PEREVOD_MAX_FILE_SIZE_BYTES",
]


@pytest.fixture(autouse=True)
def clean_env_for_unit_tests(monkeypatch, tmp_path):
    """
    Remove all config-related environment variables and change working
    directory to avoid loading .env file.
    """
    for var in CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    original_dir = os.getcwd()
    os.chdir(tmp_path)
    yield
    os.chdir(original_dir)
