"""Tests for core logging module."""

import logging
from io import StringIO

import pytest

from .lib import get_logger, resolve_level, setup_logging


class TestLogging:
    """Test core logging API."""

    @pytest.mark.unit
    def test_get_logger(self) -> None:
        """Verify logger instance creation."""
        logger = get_logger("test")
        assert logger.name == "test"
        assert isinstance(logger, logging.Logger)

    @pytest.mark.unit
    def test_get_logger_default_name(self) -> None:
        """Verify default logger name."""
        logger = get_logger()
        assert logger.name == "uixc"

    @pytest.mark.unit
    def test_setup_logging(self) -> None:
        """Verify logging setup accepts level names."""
        stream = StringIO()
        setup_logging(level="debug", stream=stream)
        logger = get_logger("test_setup")
        logger.debug("test message")

        # basicConfig is a no-op once logging is configured, so only the
        # API contract is checked here.
        assert logger.level == logging.NOTSET


class TestResolveLevel:
    """Tests for level name resolution."""

    @pytest.mark.unit
    def test_names_are_case_insensitive(self) -> None:
        assert resolve_level("warning") == logging.WARNING
        assert resolve_level(" DEBUG ") == logging.DEBUG

    @pytest.mark.unit
    def test_numeric_level_passes_through(self) -> None:
        assert resolve_level(logging.ERROR) == logging.ERROR

    @pytest.mark.unit
    def test_unknown_name_falls_back_to_default(self) -> None:
        assert resolve_level("chatty") == logging.INFO
        assert resolve_level(None, default=logging.WARNING) == logging.WARNING
