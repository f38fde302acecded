"""
================================================================================
UIFlow Tools Common Utilities
================================================================================

Logging setup and small helpers shared by the run-level tools.

Exports:
    - init_logger: Initialize loguru with the standard console/file sinks
    - ensure_directory: Create a directory if missing
    - format_duration: Human-readable duration ("1m 5s", "42s")

Usage:
    from uiflow_tools.common import init_logger

    init_logger(level="DEBUG", log_file="logs/ui_tests.log")

================================================================================
"""

import os
import sys
from typing import Optional

from loguru import logger


# ============================================================
# Logging Setup
# ============================================================

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Calling it more than once has no effect.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL or INFO.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.
        rotation: File sink rotation policy.
        retention: File sink retention policy.

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="logs/ui_tests.log")
    """
    global _logger_initialized

    if _logger_initialized:
        return

    # Remove default handler
    logger.remove()

    level = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    format_string = format_string or DEFAULT_LOG_FORMAT

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation=rotation,
            retention=retention,
            enqueue=True,
        )

    _logger_initialized = True
    logger.debug("Logger initialized successfully")


# ============================================================
# Common Utilities
# ============================================================

def ensure_directory(path: str) -> str:
    """
    Ensures a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        The path (for chaining)
    """
    os.makedirs(path, exist_ok=True)
    return path


def format_duration(milliseconds: float) -> str:
    """
    Format a duration for humans.

    Examples:
        >>> format_duration(65000)
        '1m 5s'
        >>> format_duration(42000)
        '42s'
    """
    seconds = int(max(milliseconds, 0) // 1000)
    minutes, seconds = divmod(seconds, 60)
    if minutes:
        return f"{minutes}m {seconds}s"
    return f"{seconds}s"


__all__ = [
    "init_logger",
    "ensure_directory",
    "format_duration",
]
