"""Structured logging configuration for tapcalc."""

import logging
import sys
from datetime import datetime
from typing import Optional


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs structured log entries with timestamp, module, level, and message."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        return f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"


def setup_logging(
    level: str = "WARNING", log_file: Optional[str] = None
) -> logging.Logger:
    """Set up structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs (if None, logs to stderr)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("tapcalc_pkg")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Remove existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "tapcalc_pkg") -> logging.Logger:
    """Get a logger instance for a module.

    Args:
        name: Logger name (typically module name)

    Returns:
        Logger instance
    """
    if name.startswith("tapcalc_pkg"):
        return logging.getLogger(name)
    return logging.getLogger(f"tapcalc_pkg.{name}")


def safe_log(
    module_name: str, level: str, message: str, *args, exc_info: bool = False
) -> None:
    """Log a message without letting a broken handler interrupt the caller.

    Used on teardown paths (subscription release, REPL shutdown) where a
    closed stream must not mask the original exit.

    Args:
        module_name: Module name for the logger
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        message: Log message format string
        *args: Arguments for message formatting
        exc_info: If True, include exception traceback
    """
    logger = get_logger(module_name)
    log_func = getattr(logger, level.lower(), logger.info)
    try:
        log_func(message, *args, exc_info=exc_info)
    except (OSError, ValueError):
        # Stream already closed during interpreter or session shutdown
        pass
