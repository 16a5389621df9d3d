"""structlog setup driven by ``LoggingSettings``."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import structlog

from mealbrowser.config import STDERR

if TYPE_CHECKING:
    from mealbrowser.config import LoggingSettings

# File handle owned by the current configuration; closed on reconfigure
_log_file: TextIO | None = None


def close_log_file() -> None:
    """Close the log file opened by the last ``configure_logging`` call, if any."""
    global _log_file
    if _log_file is not None:
        _log_file.close()
        _log_file = None


def _open_log_target(path: str) -> TextIO:
    global _log_file
    close_log_file()
    if path == STDERR:
        return sys.stderr
    log_path = Path(path).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    _log_file = log_path.open("a", encoding="utf-8")
    return _log_file


def configure_logging(settings: LoggingSettings) -> None:
    """Configure structlog once at startup."""
    if settings.format == "json":
        renderer: structlog.typing.Processor = structlog.processors.JSONRenderer()
        exc_processor: structlog.typing.Processor = structlog.processors.format_exc_info
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)
        exc_processor = structlog.processors.StackInfoRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            exc_processor,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(settings.level)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=_open_log_target(settings.file)),
    )
