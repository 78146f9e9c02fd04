"""Utility modules for logging and JSON handling."""

from vs_bootstrapper.utils.logging import setup_logging, get_logger
from vs_bootstrapper.utils.json_utils import JsonHandler

__all__ = [
    "setup_logging",
    "get_logger",
    "JsonHandler",
]
