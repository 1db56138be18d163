"""Structured logging configuration.

Provides JSON-formatted logs with:
- Category detection (gemini, tool, rpc, http, system)
- request_id context when a JSON-RPC request is being handled
- Human-readable format for development

Logs always go to stderr because stdout carries the JSON-RPC stream.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import TextIO


class StructuredFormatter(logging.Formatter):
    """JSON formatter, one object per line."""

    # Map logger names to categories
    CATEGORY_MAP = {
        "gemini_image_creator.gemini": "gemini",
        "gemini_image_creator.tool_server": "tool",
        "gemini_image_creator.use_case": "tool",
        "gemini_image_creator.dispatcher": "rpc",
        "gemini_image_creator.transport": "rpc",
        "gemini_image_creator.config": "system",
        "gemini_image_creator.cli": "system",
        "httpx": "http",
        "httpcore": "http",
    }

    # Standard LogRecord fields to exclude from 'extra'
    STANDARD_FIELDS = {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
        # Handled explicitly
        "request_id",
    }

    def _get_category(self, logger_name: str) -> str:
        for prefix, cat in self.CATEGORY_MAP.items():
            if logger_name.startswith(prefix):
                return cat
        return "system"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_record: dict = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "category": self._get_category(record.name),
            "logger": record.name,
            "message": record.getMessage(),
        }

        # JSON-RPC ids may legitimately be 0 or ""
        if getattr(record, "request_id", None) is not None:
            log_record["request_id"] = record.request_id

        extra = {}
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_FIELDS and not key.startswith("_"):
                try:
                    json.dumps(value)
                    extra[key] = value
                except (TypeError, ValueError):
                    extra[key] = str(value)
        if extra:
            log_record["extra"] = extra

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


def configure_logging(
    *,
    json_format: bool = False,
    log_level: int | str = logging.INFO,
    log_file: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """Configure application logging.

    Args:
        json_format: Use JSON formatting instead of the plain development format
        log_level: Minimum log level (int or level name)
        log_file: Path to a rotating log file (None for stderr only)
        stream: Stream to write to (default: sys.stderr)
    """
    import sys

    if isinstance(log_level, str):
        log_level = logging.getLevelName(log_level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter: logging.Formatter
    if json_format:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)5s [%(name)s] %(message)s",
            datefmt="%H:%M:%S",
        )

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Silence noisy loggers
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
