"""
Logging configuration for the podexec command line.

Log records go to stderr; stdout is reserved for the result line.
"""

import logging
import logging.config
import re
from typing import Any, Dict

BEARER_TOKEN = re.compile(r"(Bearer\s+)[A-Za-z0-9\-._~+/]+=*", re.IGNORECASE)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class TokenRedactionFilter(logging.Filter):
    """Filter that masks bearer tokens leaked into log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if "bearer" in message.lower():
            record.msg = BEARER_TOKEN.sub(r"\1[REDACTED]", message)
            record.args = None
        return True  # Never drop records, only rewrite them


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with token redaction."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "token_redaction": {
                "()": TokenRedactionFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
                "filters": ["token_redaction"]
            }
        },
        "loggers": {
            "podexec": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "kubernetes": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            },
            "urllib3": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            },
            "websocket": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the podexec logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
