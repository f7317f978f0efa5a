"""Tests for the console log filter."""

from mempro_client import log_config
from mempro_client.log_config import logger


def _record(level: str, **extra):
    return {"level": logger.level(level), "extra": extra}


class TestConsoleFilter:

    def test_records_below_level_are_dropped(self, monkeypatch):
        monkeypatch.setattr(log_config, "_console_log_level", "WARNING")

        assert log_config._log_filter(_record("INFO")) is False
        assert log_config._log_filter(_record("ERROR")) is True

    def test_announcements_ignore_level(self, monkeypatch):
        monkeypatch.setattr(log_config, "_console_log_level", "WARNING")

        assert log_config._log_filter(_record("INFO", announce=True)) is True

    def test_unknown_level_name_lets_records_through(self, monkeypatch):
        monkeypatch.setattr(log_config, "_console_log_level", "CHATTY")

        assert log_config._log_filter(_record("DEBUG")) is True
