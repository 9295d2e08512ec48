"""Centralized logging configuration using loguru."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[name]}:{function}:{line} - {message}"

# Records logged without get_logger() still render {extra[name]}
logger.configure(extra={"name": "pitchscout"})

_console_handler_id: Optional[int] = None


def set_console_level(level: str) -> None:
    """Replace the console handler, keeping the file handlers.

    Args:
        level: Minimum level for console output (e.g. "DEBUG", "WARNING")
    """
    global _console_handler_id
    if _console_handler_id is not None:
        logger.remove(_console_handler_id)
    _console_handler_id = logger.add(
        sys.stderr,
        level=level.upper(),
        format=CONSOLE_FORMAT,
        colorize=True,
    )


def configure_logging(
    console_level: str = "INFO",
    log_dir: Optional[Union[str, Path]] = "logs",
) -> None:
    """(Re)install the console and file handlers.

    Args:
        console_level: Minimum level for console output
        log_dir: Directory for rotating log files; None disables file logging
    """
    global _console_handler_id
    logger.remove()
    _console_handler_id = None

    set_console_level(console_level)

    if log_dir is None:
        return

    logs_dir = Path(log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    # Full debug trail
    logger.add(
        logs_dir / "pitchscout_{time}.log",
        rotation="10 MB",
        retention="10 days",
        level="DEBUG",
        format=FILE_FORMAT,
    )

    # Errors only
    logger.add(
        logs_dir / "errors_{time}.log",
        rotation="10 MB",
        retention="30 days",
        level="ERROR",
        format=FILE_FORMAT,
    )


def get_logger(name: Optional[str] = None):
    """Get a logger instance with the given name.

    Args:
        name: Module name for the logger (usually __name__)

    Returns:
        Configured logger instance
    """
    if name:
        return logger.bind(name=name)
    return logger


configure_logging()


__all__ = ["configure_logging", "get_logger", "logger", "set_console_level"]
