"""Wordbox logging setup.

Upstream API keys travel in query strings and headers, and bearer tokens
stay valid until expiry, so every handler installed here masks them.
"""

import json
import logging
import re
import sys
from typing import Literal

DEV_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_SECRET_PATTERNS = [
    re.compile(r"(?P<prefix>[?&]key=)[^&\s'\"]+"),
    re.compile(r"(?P<prefix>DeepL-Auth-Key\s+)\S+"),
    re.compile(r"(?P<prefix>Bearer\s+)[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+"),
]

# Record attributes that are not user-supplied extras
_RESERVED_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def redact(message: str) -> str:
    """Mask API keys and bearer tokens in a log message."""
    for pattern in _SECRET_PATTERNS:
        message = pattern.sub(r"\g<prefix>***", message)
    return message


class RedactingFilter(logging.Filter):
    """Rewrites each record's message with secrets masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact(record.getMessage())
        record.args = None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Values passed through ``extra=`` are emitted as additional keys.
    """

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_entry.setdefault(key, value)
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = redact(self.formatException(record.exc_info))
        return json.dumps(log_entry, default=str)


def _build_handler(format_type: Literal["structured", "dev"]) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if format_type == "structured":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEV_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.addFilter(RedactingFilter())
    return handler


def setup_logging(
    level: str = "INFO",
    format_type: Literal["structured", "dev"] = "dev",
) -> None:
    """
    Configure application logging.

    Args:
        level: Log level name; unknown names fall back to INFO
        format_type: 'structured' for JSON lines, 'dev' for readable text
    """
    resolved_level = logging.getLevelName(level.upper())
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO

    logging.root.handlers = [_build_handler(format_type)]
    logging.root.setLevel(resolved_level)

    noisy = {
        "uvicorn": logging.WARNING,
        "uvicorn.access": logging.WARNING,
        # httpx logs every request URL at INFO
        "httpx": logging.WARNING,
        "httpcore": logging.WARNING,
        "sqlalchemy.engine": logging.INFO if resolved_level == logging.DEBUG else logging.WARNING,
        "aiosqlite": logging.WARNING,
    }
    for logger_name, logger_level in noisy.items():
        logging.getLogger(logger_name).setLevel(logger_level)

    logging.getLogger("wordbox").info(
        "Logging configured: level=%s, format=%s",
        logging.getLevelName(resolved_level),
        format_type,
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the wordbox namespace."""
    return logging.getLogger(f"wordbox.{name}")
