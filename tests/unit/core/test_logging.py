"""
Unit Tests for Centralized Logging.

Tests that setup_logging wires handlers according to logging.yaml and
its keyword overrides.
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from notedesk.core.config import get_app_config
from notedesk.core.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Put the root logger's handlers back after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    get_app_config.cache_clear()
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_override(self):
        setup_logging(level="DEBUG", enable_file_logging=False)
        assert logging.getLogger().level == logging.DEBUG

    def test_console_handler_only(self):
        setup_logging(enable_console=True, enable_file_logging=False)
        handlers = logging.getLogger().handlers

        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)

    def test_console_disabled(self):
        setup_logging(enable_console=False, enable_file_logging=False)
        assert logging.getLogger().handlers == []

    def test_file_handler_writes_under_project_root(self, tmp_path, monkeypatch):
        import notedesk.core.logging as logging_module

        monkeypatch.setattr(logging_module, "_resolve_log_path", lambda p: tmp_path / p)
        setup_logging(enable_console=False, enable_file_logging=True)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RotatingFileHandler)
        assert (tmp_path / "logs").is_dir()

    def test_noisy_loggers_quietened(self):
        setup_logging(level="DEBUG", enable_file_logging=False)
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


class TestGetLogger:
    """Tests for get_logger."""

    def test_returns_usable_logger(self):
        logger = get_logger("notedesk.test")
        logger.info("hello", extra={"note_id": "abc"})
