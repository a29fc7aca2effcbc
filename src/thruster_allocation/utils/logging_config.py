"""
Logging Configuration for Thruster Allocation

Provides standardized logging setup with consistent formatting across the
package. Supports console and file output with configurable levels.

Key features:
- Centralized logging configuration
- Console and file output options
- Timestamped log messages with module names
- Structured logging support (JSON format)
- Context manager for temporary log level changes

Usage:
    from thruster_allocation.utils.logging_config import setup_logging

    logger = setup_logging("thruster_allocation", level=logging.DEBUG)
    logger.info("Controller initialized")

    # Structured logging
    logger.info("Allocation solved", extra={"solve_time": 0.002, "thrusters": 8})
"""

import json
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Formats log records as JSON for easy parsing and analysis.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data["stack"] = self.formatStack(record.stack_info)

        return json.dumps(log_data, default=str)


def setup_logging(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    console: bool = True,
    simple_format: bool = False,
    structured: bool = False,
) -> logging.Logger:
    """
    Set up standardized logging.

    Args:
        name: Logger name (typically the package name)
        level: Logging level
        log_file: Log file path (None for no file logging)
        console: Enable console output
        simple_format: Use simplified format (timestamp only, no level/name)
        structured: Use JSON structured format (for file logging)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    readable = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if structured:
        formatter: logging.Formatter = StructuredFormatter()
    elif simple_format:
        formatter = logging.Formatter(fmt="%(asctime)s, %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = readable

    # Console handler (always readable)
    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(readable if structured else formatter)
        logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


@contextmanager
def temporary_log_level(logger_name: str, level: int):
    """
    Context manager for temporarily changing log level.

    Usage:
        with temporary_log_level("thruster_allocation.control", logging.DEBUG):
            controller.update(state, layout, body)
    """
    logger = logging.getLogger(logger_name)
    original_level = logger.level
    try:
        logger.setLevel(level)
        yield
    finally:
        logger.setLevel(original_level)
