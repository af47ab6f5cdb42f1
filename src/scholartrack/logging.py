"""Logging setup for ScholarTrack.

All components log under the ``scholartrack`` logger. ``setup_logging`` sends
those records to a size-rotated file (and optionally the console) with
credentials scrubbed from every message.
"""

from __future__ import annotations

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "scholartrack"

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "scholartrack.log"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_BACKUP_COUNT = 5

LOG_DIR_ENV = "SCHOLARTRACK_LOG_DIR"
LOG_LEVEL_ENV = "SCHOLARTRACK_LOG_LEVEL"

# 2026-01-28 16:30:45 | INFO     | scholartrack.remote | message
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# (pattern, replacement) pairs applied by sanitize_for_log
REDACTIONS = (
    (re.compile(r"Bearer [a-zA-Z0-9._-]+"), "Bearer [REDACTED]"),
    (re.compile(r"(ApperPublicKey[\"']?\s*[:=]\s*[\"']?)[\w.-]+"), r"\1[REDACTED]"),
    (re.compile(r"token=[a-zA-Z0-9._-]+"), "token=[REDACTED]"),
)


class RedactingFilter(logging.Filter):
    """Scrubs credentials from the rendered message of each record."""

    def __init__(self, secrets: tuple[str, ...] = ()) -> None:
        super().__init__()
        self.secrets = secrets

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        clean = sanitize_for_log(message, self.secrets)
        if clean != message:
            record.msg, record.args = clean, None
        return True


def setup_logging(
    log_dir: str | Path | None = None,
    log_file: str = DEFAULT_LOG_FILE,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    level: str | None = None,
    console: bool = True,
    secrets: tuple[str, ...] = (),
) -> logging.Logger:
    """Configure the scholartrack logger. Safe to call more than once.

    Args:
        log_dir: Directory for log files. Falls back to $SCHOLARTRACK_LOG_DIR, then 'logs'.
        log_file: Log file name.
        max_bytes: Size at which the file is rotated.
        backup_count: Rotated files to keep.
        level: DEBUG, INFO, WARNING or ERROR. Falls back to $SCHOLARTRACK_LOG_LEVEL, then INFO.
        console: Also log to stderr.
        secrets: Literal values (e.g. the configured public key) to redact.

    Returns:
        The scholartrack root logger.
    """
    if log_dir is None:
        log_dir = os.environ.get(LOG_DIR_ENV, DEFAULT_LOG_DIR)
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    level = level or os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    log_path = log_dir / log_file
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    redactor = RedactingFilter(secrets)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler.addFilter(redactor)
        logger.addHandler(handler)

    logger.info("ScholarTrack logging initialized (level=%s, file=%s)", level, log_path)
    return logger


def truncate_output(output: str, max_length: int = 2000) -> str:
    """Shorten long text such as response bodies before logging it."""
    if len(output) <= max_length:
        return output
    return output[:max_length] + f"\n... [truncated, {len(output) - max_length} more chars]"


def sanitize_for_log(text: str, secrets: tuple[str, ...] = ()) -> str:
    """Remove credentials from text.

    Args:
        text: Text that may contain sensitive data.
        secrets: Literal values to redact wherever they appear.

    Returns:
        Sanitized text safe for logging.
    """
    for pattern, replacement in REDACTIONS:
        text = pattern.sub(replacement, text)
    for secret in secrets:
        if secret:
            text = text.replace(secret, "[REDACTED]")
    return text
