"""Logging configuration for the Date Range Slicer."""

import logging
import sys
from collections import deque
from pathlib import Path
from datetime import datetime
from typing import List, Optional

from config.constants import DEBUG_LOG_CAPACITY

ROOT_LOGGER_NAME = "date_slicer"


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        log_to_console: Whether to also log to console

    Returns:
        Configured logger instance
    """
    # Create logger
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper()))

    # Clear any existing handlers
    logger.handlers.clear()

    # Create formatter
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler
    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, log_level.upper()))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, log_level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (will be prefixed with 'date_slicer.')

    Returns:
        Logger instance
    """
    if name == ROOT_LOGGER_NAME:
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


class DebugLogFormatter(logging.Formatter):
    """Formats records as ``[LEVEL] HH:MM:SS: message`` for the debug panel."""

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        return f"[{record.levelname}] {stamp}: {record.getMessage()}"


class DebugLogBuffer(logging.Handler):
    """
    Keeps the most recent log lines in memory.

    One buffer is attached per widget instance so its debug panel only shows
    that instance's entries.
    """

    def __init__(self, capacity: int = DEBUG_LOG_CAPACITY, level: int = logging.DEBUG):
        super().__init__(level)
        self.capacity = capacity
        self._lines: deque = deque(maxlen=capacity)
        self.setFormatter(DebugLogFormatter())

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._lines.append(self.format(record))
        except Exception:
            self.handleError(record)

    def get_lines(self) -> List[str]:
        """Get buffered lines, oldest first."""
        return list(self._lines)

    def get_formatted(self) -> str:
        """Get buffered lines joined for display."""
        return "\n".join(self._lines)

    def clear(self) -> None:
        """Drop all buffered lines."""
        self._lines.clear()
