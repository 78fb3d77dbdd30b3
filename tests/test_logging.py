"""
Tests for logging configuration.
"""

import logging
import pytest
from py_wavesphere.config import SimulationSettings
from py_wavesphere.utils import log


class TestConfigureLogging:
    """Test logging picks its level and format from settings."""

    @pytest.fixture(autouse=True)
    def restore_root_level(self):
        root = logging.getLogger()
        level = root.level
        yield
        root.setLevel(level)

    def test_uses_settings_when_omitted(self, monkeypatch):
        monkeypatch.setattr(log, "settings", SimulationSettings(log_level="WARNING", log_format="plain"))

        log.configure_logging()

        assert logging.getLogger().level == logging.WARNING

    def test_environment_reaches_logging(self, monkeypatch):
        monkeypatch.setenv("WAVESPHERE_LOG_LEVEL", "DEBUG")
        s = SimulationSettings()

        log.configure_logging(s.log_level, s.log_format)

        assert logging.getLogger().level == logging.DEBUG

    def test_explicit_arguments_win(self, monkeypatch):
        monkeypatch.setattr(log, "settings", SimulationSettings(log_level="ERROR"))

        log.configure_logging("INFO", "json")

        assert logging.getLogger().level == logging.INFO
