"""Centralized logging configuration for the Gmail quickstart."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"
DEBUG_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

NOISY_LOGGERS = (
    "googleapiclient",
    "google.auth",
    "google_auth_httplib2",
    "google_auth_oauthlib",
    "requests_oauthlib",
    "urllib3",
)


class JSONFormatter(logging.Formatter):
    """JSON log formatter, one object per line (NDJSON).

    Fields: timestamp, level, logger, message, and optionally exception.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def _build_formatter(log_format: str, level: int) -> logging.Formatter:
    if log_format == "json":
        return JSONFormatter()
    # Timestamps only clutter the interactive prompt unless debugging
    return logging.Formatter(DEBUG_TEXT_FORMAT if level <= logging.DEBUG else TEXT_FORMAT)


def configure_logging(
    level_override: Optional[str] = None, stream: Optional[TextIO] = None
) -> None:
    """Configure the root logger from environment variables.

    Log records go to stderr so they never interleave with the message
    listing and prompts printed on stdout.

    Args:
        level_override: If set, takes precedence over LOG_LEVEL env var.
        stream: Destination stream. Defaults to sys.stderr.

    Environment variables:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR).
            Defaults to INFO.
        LOG_FORMAT: "json" for JSON lines, anything else for
            human-readable text. Defaults to "text".
    """
    level_name = (level_override or os.getenv("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_build_formatter(os.getenv("LOG_FORMAT", "text").lower(), level))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
