"""Process-wide logging setup for the MCP server.

Two outputs:

1. Human-readable, ANSI-coloured records on **stderr** (stdout carries
   the MCP protocol and must stay clean).
2. JSON lines in a daily-rotating file under ``settings.LOG_DIR`` when
   the directory can be created.

If the log directory cannot be created (read-only filesystem, no home
directory) logging falls back to stderr only.
"""

from __future__ import annotations

import json
import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from ghcid_mcp.config import settings

LOG_FILENAME = "ghcid-mcp.log"

# Attributes every LogRecord has; anything else was passed via ``extra=``.
_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class ColorFormatter(logging.Formatter):
    """Terminal formatter: level-coloured, logger shown relative to the package."""

    # SGR parameters per level name
    _LEVEL_STYLE = {
        "DEBUG": "2",
        "INFO": "34",
        "WARNING": "1;33",
        "ERROR": "1;31",
        "CRITICAL": "97;41",
    }

    def __init__(self) -> None:
        super().__init__(datefmt="%H:%M:%S")

    @staticmethod
    def _paint(text: str, style: str) -> str:
        return f"\033[{style}m{text}\033[0m" if style else text

    def format(self, record: logging.LogRecord) -> str:
        style = self._LEVEL_STYLE.get(record.levelname, "")
        source = record.name.removeprefix("ghcid_mcp.")
        text = " ".join((
            self.formatTime(record, self.datefmt),
            self._paint(record.levelname.ljust(8), style),
            self._paint(source, "2"),
            record.getMessage(),
        ))
        if record.exc_info:
            text += "\n" + self.formatException(record.exc_info)
        return text


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for the rotating file log."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "target": record.name,
            "message": record.getMessage(),
            "thread_id": record.thread,
            "thread_name": record.threadName,
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _file_handler(log_dir: Path) -> logging.Handler:
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = TimedRotatingFileHandler(
        str(log_dir / LOG_FILENAME),
        when="midnight",
        backupCount=7,
        encoding="utf-8",
    )
    handler.setFormatter(JsonFormatter())
    return handler


def init(
    *,
    level: str | None = None,
    log_dir: Path | None = None,
    to_file: bool | None = None,
) -> Path | None:
    """Configure root logging.  Returns the log directory in use, or None.

    Arguments default to the corresponding ``settings`` fields.
    """
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)
    log_dir = log_dir or settings.LOG_DIR
    to_file = settings.LOG_TO_FILE if to_file is None else to_file

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(ColorFormatter())
    handlers: list[logging.Handler] = [stderr_handler]

    active_dir: Path | None = None
    if to_file:
        try:
            handlers.append(_file_handler(log_dir))
            active_dir = log_dir
        except OSError as exc:
            print(
                f"Failed to create logs directory at {log_dir}, "
                f"using stderr only: {exc}",
                file=sys.stderr,
            )

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    # The MCP SDK logs every request at INFO
    logging.getLogger("mcp").setLevel(logging.WARNING)

    if active_dir is not None:
        print(f"Logging initialized with file output to {active_dir}", file=sys.stderr)
    return active_dir
