"""Logging setup with JSON formatting and PII filtering.

Card numbers and emails must never reach log output. Every formatted message,
extra field and traceback passes through filter_pii().
"""

import json
import logging
import re
import sys

from hsa.config import settings

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# PII patterns to filter from logs
PII_PATTERNS = [
    # Card numbers (13-19 digits, with or without spaces/dashes)
    (re.compile(r"\b\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{1,7}\b"), "[CARD]"),
    # CVV values in key/value form
    (re.compile(r"(cvv[\"']?\s*[:=]\s*[\"']?)\d{3,4}", re.I), r"\1[CVV]"),
    # Email addresses
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[EMAIL]"),
]

# Attributes every LogRecord has; anything else came in through ``extra=``.
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


def filter_pii(text: str) -> str:
    """Remove PII from text using regex patterns.

    Args:
        text: Input text that may contain PII

    Returns:
        Text with PII replaced by placeholders
    """
    if not text:
        return text

    filtered = text
    for pattern, replacement in PII_PATTERNS:
        filtered = pattern.sub(replacement, filtered)

    return filtered


class JSONLogFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": filter_pii(record.getMessage()),
        }

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            if isinstance(value, str):
                value = filter_pii(value)
            log_data[key] = value

        if record.exc_info:
            log_data["exception"] = filter_pii(self.formatException(record.exc_info))

        return json.dumps(log_data, default=str)


class PIIFilteringFormatter(logging.Formatter):
    """Plain text formatter that still scrubs PII."""

    def format(self, record: logging.LogRecord) -> str:
        return filter_pii(super().format(record))


def setup_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """
    Configure the root logger with a single stdout handler.

    Args:
        level: Log level name; defaults to settings.log_level
        json_output: Emit JSON lines; defaults to settings.log_json
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    if json_output is None:
        json_output = settings.log_json

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if json_output:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(PIIFilteringFormatter(PLAIN_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    # Avoid duplicate handlers if setup_logging is called more than once
    root_logger.handlers = [handler]

    # SQL echo is controlled by DB_ECHO; keep the engine logger quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
