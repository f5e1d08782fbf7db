"""
Logging configuration for the application.

One stdout handler, either pipe-separated text or one JSON object
per line for log shippers. Error handlers log through module
loggers; request bodies and upstream payloads are never logged.
"""

import json
import logging
import sys
from typing import Literal

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = ("uvicorn.access", "uvicorn.error")


class JsonFormatter(logging.Formatter):
    """Render each record as a single-line JSON object.

    Tracebacks go under ``exc_info`` as formatted text.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record, LOG_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def build_formatter(log_format: Literal["text", "json"] = "text") -> logging.Formatter:
    if log_format == "json":
        return JsonFormatter()
    return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def configure_logging(level: str = "INFO", log_format: Literal["text", "json"] = "text") -> None:
    """Configure application logging.

    Unknown level names fall back to INFO. Replaces any handlers
    already installed on the root logger.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
        log_format: "text" or "json".
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(log_format))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
