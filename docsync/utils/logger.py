"""
Logging helpers

Structured logging for the docsync package
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from docsync.core.config import get_settings

# Attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


def setup_logging(
    level: Optional[str] = None,
    format_type: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging

    Args:
        level: log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: log format (json, text)

    Returns:
        the package root logger
    """
    settings = get_settings()
    log_level = (level or settings.log_level).upper()
    log_format = format_type or settings.log_format

    logger = logging.getLogger("docsync")
    logger.setLevel(getattr(logging, log_level))

    # drop handlers from earlier calls
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, log_level))

    if log_format == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


class JsonFormatter(logging.Formatter):
    """JSON formatter"""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as one JSON line"""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger

    Args:
        name: logger name below the package root

    Returns:
        logger instance
    """
    return logging.getLogger(f"docsync.{name}")


# default logger
logger = get_logger("main")
