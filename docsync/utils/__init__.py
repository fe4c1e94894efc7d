"""
Utility functions
"""

from docsync.utils.logger import JsonFormatter, get_logger, logger, setup_logging
from docsync.utils.text import to_snake_case

__all__ = [
    # Logger
    "setup_logging",
    "get_logger",
    "logger",
    "JsonFormatter",
    # Text
    "to_snake_case",
]
