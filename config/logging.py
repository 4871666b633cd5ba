"""
Centralized logging configuration for chinook_reports.

Usage:
    from config import setup_logging
    setup_logging("logs/run_reports.log")

Modules log through the loguru singleton:
    from loguru import logger
"""

import inspect
import logging
import sys

from loguru import logger

# File format with module, function, and line number for tracing
DEFAULT_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {module}:{function}:{line} | {message}"
)

# Compact format for console output
CONSOLE_FORMAT = "{time:HH:mm:ss} | {level: <8} | {message}"

# Standard-library loggers of the database drivers
DRIVER_LOGGERS = ("mysql.connector", "sqlalchemy")


class InterceptHandler(logging.Handler):
    """Forward records from standard-library loggers to loguru."""

    def emit(self, record: logging.LogRecord):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        # Find the caller that issued the record, outside the logging module
        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(
    log_file: str = None,
    level: str = "DEBUG",
    rotation: str = "10 MB",
    retention: str = "7 days",
    console: bool = True,
    console_level: str = None,
):
    """
    Configure logging for a report run.

    Args:
        log_file: Path to log file. If None, only console logging is enabled.
        level: Minimum log level for file output (DEBUG, INFO, WARNING, ERROR).
        rotation: When to rotate log files (e.g., "10 MB", "1 day").
        retention: How long to keep old log files (e.g., "7 days").
        console: Whether to output to console (stderr).
        console_level: Console log level. Defaults to same as file level.

    Example:
        setup_logging("logs/run_reports.log")
        setup_logging(console_level="WARNING")  # Console warnings only, no file
    """
    # Remove default handler to avoid duplicates
    logger.remove()

    if console:
        logger.add(sys.stderr, level=console_level or level, format=CONSOLE_FORMAT, colorize=True)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format=DEFAULT_FORMAT,
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
        )

    for name in DRIVER_LOGGERS:
        driver_logger = logging.getLogger(name)
        driver_logger.handlers = [InterceptHandler()]
        driver_logger.propagate = False

    logger.debug(f"Logging configured: file={log_file}, level={level}")


def get_logger(name: str = None):
    """
    Return the loguru logger, bound to ``name`` when one is given.
    """
    if name:
        return logger.bind(name=name)
    return logger
