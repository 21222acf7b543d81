"""Logging configuration.

Environment variables:
- LEDGERLINE_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
- LEDGERLINE_LOG_FORMAT: "console" or "json" (default: console)

Logs go to stderr so they never mix with statements printed on stdout.
"""

import json
import logging
import logging.config
import os
from datetime import datetime, UTC
from typing import Optional

LOG_LEVEL_ENV = "LEDGERLINE_LOG_LEVEL"
LOG_FORMAT_ENV = "LEDGERLINE_LOG_FORMAT"


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def get_logging_config(
    level: Optional[str] = None, log_format: Optional[str] = None
) -> dict:
    """Build a logging.config.dictConfig dictionary for the ledgerline loggers.

    Args:
        level: Log level name; defaults to LEDGERLINE_LOG_LEVEL or WARNING
        log_format: "console" or "json"; defaults to LEDGERLINE_LOG_FORMAT

    Returns:
        dictConfig dictionary
    """
    level = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    log_format = (log_format or os.environ.get(LOG_FORMAT_ENV) or "console").lower()

    formatters = {
        "console": {"format": "%(levelname)s %(name)s: %(message)s"},
        "json": {"()": JsonFormatter},
    }
    if log_format not in formatters:
        log_format = "console"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {log_format: formatters[log_format]},
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": log_format,
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "ledgerline": {
                "handlers": ["stderr"],
                "level": level,
                "propagate": True,
            },
        },
    }


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Apply the ledgerline logging configuration."""
    logging.config.dictConfig(get_logging_config(level, log_format))
