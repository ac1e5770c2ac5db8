"""Tests for the shared logging setup."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from insights.config import Settings
from insights.logging_config import JsonLineFormatter, configure_logging


@pytest.fixture()
def restore_root_logger():
    """Put the root logger's handlers and level back after the test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def _raise_and_log(logger: logging.Logger) -> None:
    try:
        raise ValueError('bad "quoted" value\nsecond line')
    except ValueError:
        logger.exception("Unhandled error extracting %s", 'https://x.example/"q"')


class TestJsonLineFormatter:
    def test_message_with_quotes_is_valid_json(self) -> None:
        record = logging.LogRecord(
            "insights.test", logging.WARNING, __file__, 1,
            'fetched "%s"', ("https://x.example/a\"b",), None,
        )
        entry = json.loads(JsonLineFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "insights.test"
        assert entry["message"] == 'fetched "https://x.example/a"b"'
        assert "exc_info" not in entry

    def test_traceback_stays_on_one_line(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "insights.test", logging.ERROR, __file__, 1, "failed", (), None,
            )
            record.exc_info = sys.exc_info()

        line = JsonLineFormatter().format(record)
        entry = json.loads(line)

        assert "\n" not in line
        assert entry["exc_info"].startswith("Traceback")
        assert "RuntimeError: boom" in entry["exc_info"]


class TestConfigureLogging:
    def test_json_mode_emits_one_object_per_line(self, capsys, restore_root_logger) -> None:
        configure_logging(Settings(log_level="INFO", log_json=True))
        logger = logging.getLogger("insights.api.routers.fetch")

        logger.info("Extracting %s", "https://blog.example.com/posts/my-post")
        _raise_and_log(logger)

        lines = capsys.readouterr().err.splitlines()
        entries = [json.loads(line) for line in lines]

        assert len(entries) == 2
        assert entries[0]["message"] == "Extracting https://blog.example.com/posts/my-post"
        assert entries[1]["level"] == "ERROR"
        assert entries[1]["message"] == 'Unhandled error extracting https://x.example/"q"'
        assert 'ValueError: bad "quoted" value' in entries[1]["exc_info"]

    def test_plain_mode(self, capsys, restore_root_logger) -> None:
        configure_logging(Settings(log_level="WARNING", log_json=False))
        logger = logging.getLogger("insights.scraper.pipeline")

        logger.info("hidden")
        logger.warning("Extraction failed")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert err.startswith("WARNING ")
        assert "insights.scraper.pipeline Extraction failed" in err
