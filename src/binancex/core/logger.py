"""
Logging for binancex.

Console output is colored by level. A rotating file log is attached only on
request (``log_file`` argument or ``BINANCEX_LOG_FILE``). Every handler
carries ``SignatureRedactor`` so a signed URL can never leak its signature
into a log line.
"""

import logging
import os
import re
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_ENV = "BINANCEX_LOG_FILE"
LOG_LEVEL_ENV = "LOG_LEVEL"

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_RESET = "\033[0m"

LEVEL_COLORS = {
    logging.DEBUG: "\033[90m",
    logging.INFO: "\033[92m",
    logging.WARNING: "\033[93m",
    logging.ERROR: "\033[91m",
    logging.CRITICAL: "\033[91m\033[1m",
}

_SIGNATURE = re.compile(r"(signature=)[0-9a-fA-F]+")


class ColoredFormatter(logging.Formatter):
    """Wraps each formatted record in its level's ANSI color."""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno, _RESET)
        return f"{color}{super().format(record)}{_RESET}"


class SignatureRedactor(logging.Filter):
    """Replaces ``signature=<hex>`` in the rendered message with ``signature=***``."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _SIGNATURE.sub(r"\1***", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def _file_handler(log_file: str | Path, level: int) -> RotatingFileHandler:
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    return handler


def setup_logger(
    name: str,
    level: int | str | None = None,
    log_file: str | Path | None = None,
) -> logging.Logger:
    """
    Configure and return the logger ``name``.

    A logger that already has handlers is returned untouched.

    Args:
        name: Logger name, usually ``__name__``
        level: Level name or number. Defaults to $LOG_LEVEL, then INFO
        log_file: Rotating log file. Defaults to $BINANCEX_LOG_FILE; no file when unset

    Example:
        >>> logger = setup_logger("binancex.api.spot", level="DEBUG")
        >>> logger.debug("GET /api/v3/ping")
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = _resolve_level(level)
    logger.setLevel(level)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(ColoredFormatter(LOG_FORMAT, DATE_FORMAT))
    handlers: list[logging.Handler] = [console]

    log_file = log_file or os.getenv(LOG_FILE_ENV) or None
    if log_file:
        handlers.append(_file_handler(log_file, level))

    redactor = SignatureRedactor()
    for handler in handlers:
        handler.addFilter(redactor)
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return logger ``name``, configuring it with defaults on first use."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        return setup_logger(name)
    return logger
