"""Logging setup shared by the CLI entry points."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

from rich.console import Console
from rich.logging import RichHandler

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


def configure_logging(level: str = "info", fmt: str = "text") -> logging.Handler:
    """Route ``reclaim_core`` and ``reclaim`` loggers to stderr.

    Replaces any handler installed by an earlier call, so calling it again
    with new settings is safe.
    """
    if fmt == "json":
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonLineFormatter())
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))

    for name in ("reclaim_core", "reclaim"):
        log = logging.getLogger(name)
        for old in [h for h in log.handlers if getattr(h, "_reclaim", False)]:
            log.removeHandler(old)
        handler._reclaim = True  # type: ignore[attr-defined]
        log.addHandler(handler)
        log.setLevel(_LEVELS.get(level, logging.INFO))
    return handler
