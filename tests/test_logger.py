"""Tests for the logging helpers."""

import logging
from unittest.mock import patch

import pytest

import confquery.logger as logger_module
from confquery.logger import Logger, resolve_level, setup_global_logging
from confquery.settings import settings


@pytest.fixture
def unconfigured():
    """Reset the module-level configured flag around a test."""
    original = logger_module._configured
    logger_module._configured = False
    yield
    logger_module._configured = original


class TestSetupGlobalLogging:
    @pytest.mark.parametrize(
        "level,expected",
        [("INFO", logging.INFO), ("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("bogus", logging.INFO)],
    )
    def test_level(self, unconfigured, level, expected):
        with patch("logging.basicConfig") as mock_basicconfig:
            setup_global_logging(level)
            mock_basicconfig.assert_called_once()
            assert mock_basicconfig.call_args.kwargs["level"] == expected

    def test_configures_once(self, unconfigured):
        with patch("logging.basicConfig") as mock_basicconfig:
            setup_global_logging("INFO")
            setup_global_logging("DEBUG")
            mock_basicconfig.assert_called_once()

    def test_resolve_level_none(self):
        assert resolve_level(None) == logging.INFO


class TestLogger:
    def test_namespaced_names(self):
        assert Logger("QueryConfigManager").name == "confquery.QueryConfigManager"
        assert Logger("confquery.stores").name == "confquery.stores"
        assert Logger().name == "confquery"

    def test_message_at_info(self, monkeypatch, caplog):
        monkeypatch.setattr(settings, "LOG_LEVEL", "INFO")
        with caplog.at_level(logging.DEBUG, logger="confquery"):
            Logger("test").message("hello %s", "world")
        assert caplog.records[-1].levelno == logging.INFO
        assert caplog.records[-1].getMessage() == "hello world"

    def test_message_at_debug(self, monkeypatch, caplog):
        monkeypatch.setattr(settings, "LOG_LEVEL", "DEBUG")
        with caplog.at_level(logging.DEBUG, logger="confquery"):
            Logger("test").message("details")
        assert caplog.records[-1].levelno == logging.DEBUG
