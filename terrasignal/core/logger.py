"""
Logging setup for terrasignal.

Provider clients and services attach context to their records through
``extra`` (``provider``, ``project_id``, ``source``, ``attempt``). Text output
renders it as a ``[key=value ...]`` suffix; JSON output adds the fields as
top-level keys so portfolio runs can be filtered per project or provider.
"""

import json
import logging
import os
from datetime import datetime, timezone

CONTEXT_FIELDS = ("provider", "project_id", "source", "attempt")
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s%(context)s"


def record_context(record: logging.LogRecord) -> dict:
    """Return the context fields set on ``record``, in declaration order."""
    return {
        key: getattr(record, key)
        for key in CONTEXT_FIELDS
        if getattr(record, key, None) is not None
    }


class ContextFilter(logging.Filter):
    """Expose the record context as ``%(context)s`` for text formats."""

    def filter(self, record):
        ctx = record_context(record)
        record.context = (
            " [" + " ".join(f"{k}={v}" for k, v in ctx.items()) + "]" if ctx else ""
        )
        return True


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record: timestamp (ISO8601, UTC), level, name,
    message, any context fields and the formatted exception if present.
    """

    def format(self, record):
        payload = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        payload.update(record_context(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class Logger:
    """Process-wide logging configuration."""

    _configured = False

    @staticmethod
    def setup(
        level: int | None = None,
        fmt: str | None = None,
        datefmt: str = "%Y-%m-%d %H:%M:%S",
    ) -> None:
        """
        Configure the root logger once.

        The level defaults to TERRASIGNAL_LOG_LEVEL (INFO when unset);
        TERRASIGNAL_LOG_FMT=json selects :class:`JSONFormatter`, any other
        value is used as a text format string.
        """
        if Logger._configured:
            return
        if level is None:
            env_level = os.getenv("TERRASIGNAL_LOG_LEVEL", "INFO").upper()
            level = getattr(logging, env_level, logging.INFO)
        fmt_mode = fmt if fmt is not None else os.getenv("TERRASIGNAL_LOG_FMT", "")

        handler = logging.StreamHandler()
        handler.addFilter(ContextFilter())
        if fmt_mode.lower() == "json":
            handler.setFormatter(JSONFormatter(datefmt=datefmt))
        else:
            handler.setFormatter(
                logging.Formatter(fmt_mode or DEFAULT_FORMAT, datefmt=datefmt)
            )

        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)
        Logger._configured = True

    @staticmethod
    def get_logger(
        name: str = "terrasignal", *, level: int | None = None, fmt: str | None = None
    ) -> logging.Logger:
        """Return the named logger, configuring logging on first use."""
        Logger.setup(level=level, fmt=fmt)
        return logging.getLogger(name)
