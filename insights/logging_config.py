"""Logging setup shared by the HTTP app and the CLI.

Both entry points call :func:`configure_logging` once at start-up.  Library
modules only ever do ``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import json
import logging
from logging.config import dictConfig
from typing import Any, Dict

from insights.config import Settings

_PLAIN_FORMAT = "%(levelname)s %(asctime)s %(name)s %(message)s"


class JsonLineFormatter(logging.Formatter):
    """Serialise each record as one JSON object on a single line.

    Tracebacks and stack info become string fields, so a ``logger.exception``
    call still yields exactly one parseable line.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "level": record.levelname,
            "time": self.formatTime(record, self.datefmt),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        elif record.exc_text:
            entry["exc_info"] = record.exc_text
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)
        return json.dumps(entry, ensure_ascii=False)


def configure_logging(settings: Settings) -> None:
    """Route every logger through one stderr handler on the root logger."""
    formatter = "json" if settings.log_json else "plain"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {"format": _PLAIN_FORMAT},
                "json": {"()": JsonLineFormatter},
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": formatter,
                }
            },
            "root": {"level": settings.log_level, "handlers": ["stderr"]},
        }
    )

    # uvicorn configures its own loggers; keep its error channel in step.
    logging.getLogger("uvicorn.error").setLevel(settings.log_level)
