"""
================================================================================
Autotest Tools Common Utilities
================================================================================

Shared logging setup for the test suites and the runner.

Exports:
    - init_logger: Initialize the loguru logger with standard settings
    - safe_json_serialize: `default=` hook for json.dumps on log payloads

Usage:
    from autotest_tools.common import init_logger

    init_logger(level="DEBUG")

================================================================================
"""

import os
import sys
from datetime import date, datetime
from typing import Any, Optional

from loguru import logger


DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level. Defaults to LOG_LEVEL env var, then INFO.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to (LOG_FILE env var).

    Example:
        init_logger()
        init_logger(level="DEBUG", log_file="reports/logs/api.log")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    logger.remove()

    level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    format_string = format_string or DEFAULT_FORMAT

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    log_file = log_file or os.environ.get("LOG_FILE")
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation="10 MB",
            retention="7 days",
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


def safe_json_serialize(obj: Any) -> Any:
    """
    Safely serializes an object to JSON-compatible format.

    Handles datetime, bytes and enum-like objects.
    """
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, bytes):
        return obj.decode("utf-8", errors="replace")
    if hasattr(obj, "value"):
        return obj.value
    return str(obj)


__all__ = [
    "init_logger",
    "safe_json_serialize",
]
