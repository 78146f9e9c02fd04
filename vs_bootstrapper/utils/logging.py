"""Logging configuration and utilities."""

import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER_NAME = "vs_bootstrapper"

_loggers: dict[str, logging.Logger] = {}


def setup_logging(
    level: str = "INFO",
    log_format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    log_file: Path | None = None,
    rich_console: bool = True,
) -> None:
    """
    Configure logging for the bootstrapper.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Format string for log messages
        log_file: Optional file path for logging
        rich_console: Use rich console handler for prettier output
    """
    root_logger = logging.getLogger(_ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper()))

    # Clear existing handlers
    root_logger.handlers.clear()

    if rich_console:
        console = Console(stderr=True)
        console_handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(log_format))
    console_handler.setLevel(getattr(logging, level.upper()))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Loggers are children of the ``vs_bootstrapper`` logger so a single
    ``setup_logging`` call controls all of them. Handlers are not installed
    here: a host embedding the bootstrapper keeps its own logging setup.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    if name not in _loggers:
        if name.startswith(_ROOT_LOGGER_NAME):
            logger = logging.getLogger(name)
        else:
            logger = logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")
        _loggers[name] = logger

    return _loggers[name]
