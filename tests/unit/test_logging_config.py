"""Unit tests for mealbrowser.logging_config."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import platformdirs
import pytest
import structlog

from mealbrowser import logging_config
from mealbrowser.config import STDERR, LoggingSettings
from mealbrowser.logging_config import close_log_file, configure_logging

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    close_log_file()
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_json_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "mealbrowser.log"
        configure_logging(LoggingSettings(format="json", file=str(log_file)))

        structlog.get_logger().info("categories_fetched", count=3)

        record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert record["event"] == "categories_fetched"
        assert record["count"] == 3
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_level_filters_lower_events(self, tmp_path: Path) -> None:
        log_file = tmp_path / "mealbrowser.log"
        configure_logging(LoggingSettings(level="WARNING", format="json", file=str(log_file)))

        logger = structlog.get_logger()
        logger.info("dropped")
        logger.warning("kept")

        events = [
            json.loads(line)["event"]
            for line in log_file.read_text(encoding="utf-8").splitlines()
        ]
        assert events == ["kept"]

    def test_text_format(self, tmp_path: Path) -> None:
        log_file = tmp_path / "mealbrowser.log"
        configure_logging(LoggingSettings(format="text", file=str(log_file)))

        structlog.get_logger().warning("meal_fetch_failed", category="Goat")

        content = log_file.read_text(encoding="utf-8")
        assert "meal_fetch_failed" in content
        assert "category=Goat" in content

    def test_default_settings_write_to_file_not_stderr(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capfd: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(platformdirs, "user_log_path", lambda appname: tmp_path / appname)
        configure_logging(LoggingSettings())

        structlog.get_logger().info("pipeline_ready", categories=3)

        assert "pipeline_ready" not in capfd.readouterr().err
        content = (tmp_path / "mealbrowser" / "mealbrowser.log").read_text(encoding="utf-8")
        assert "pipeline_ready" in content

    def test_dash_writes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(LoggingSettings(file=STDERR))

        structlog.get_logger().warning("meal_fetch_failed", category="Goat")

        assert "meal_fetch_failed" in capsys.readouterr().err


class TestLogFileLifecycle:
    def test_reconfigure_closes_previous_file(self, tmp_path: Path) -> None:
        configure_logging(LoggingSettings(file=str(tmp_path / "first.log")))
        first = logging_config._log_file
        assert first is not None

        configure_logging(LoggingSettings(file=str(tmp_path / "second.log")))

        assert first.closed
        assert logging_config._log_file is not first

    def test_close_log_file(self, tmp_path: Path) -> None:
        configure_logging(LoggingSettings(file=str(tmp_path / "mealbrowser.log")))
        handle = logging_config._log_file
        assert handle is not None

        close_log_file()

        assert handle.closed
        assert logging_config._log_file is None

    def test_switching_to_stderr_closes_file(self, tmp_path: Path) -> None:
        configure_logging(LoggingSettings(file=str(tmp_path / "mealbrowser.log")))
        handle = logging_config._log_file
        assert handle is not None

        configure_logging(LoggingSettings(file=STDERR))

        assert handle.closed
        assert logging_config._log_file is None
