"""Unit tests for logging module."""

from unittest.mock import patch

import pytest
import structlog

from app.core.logging import setup_logging


@pytest.fixture(autouse=True)
def _restore_structlog_defaults():
    """Keep this module's stdout configuration from leaking into later tests."""
    yield
    structlog.reset_defaults()


def _configure(level: str, record_format: str) -> None:
    with patch("app.core.logging.get_settings") as mock_settings:
        mock_settings.return_value.app.log_level.value = level
        mock_settings.return_value.observability.log_record_format = record_format
        setup_logging()


def test_setup_logging_json():
    _configure("INFO", "json")
    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.processors.JSONRenderer)


def test_setup_logging_console():
    _configure("DEBUG", "console")
    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
