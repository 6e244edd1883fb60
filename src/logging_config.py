"""JSON structured logging configuration."""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")

# Third-party loggers held at WARNING unless the service runs at DEBUG
_CHATTY_LOGGERS = ("asyncio", "httpx", "httpcore")


def _json_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "logger",
            },
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    return handler


def setup_logging(log_level: str = "INFO") -> None:
    """Send every log record to stdout as one JSON object per line.

    Module loggers pass request context (url, profile, error_type, ...)
    through ``extra``; those keys become top-level JSON fields.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    handler = _json_handler()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in _UVICORN_LOGGERS:
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.addHandler(handler)
        uv_logger.propagate = False

    if level > logging.DEBUG:
        for name in _CHATTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
