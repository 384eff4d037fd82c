"""
Logging configuration for the contact relay using loguru.

Every stdlib ``logging`` call is routed through loguru and rendered as one
JSON object per line on stderr. The current request_id (set by the request
middleware) is attached to each record through a context variable.
"""

import json
import logging
import sys
import traceback
from contextvars import ContextVar
from types import FrameType
from typing import Optional

from loguru import logger

from mcbays_contact.core.config import settings

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class InterceptHandler(logging.Handler):
    """Handler that redirects standard logging records to loguru."""

    def emit(self, record: logging.LogRecord):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logging call originated
        frame: Optional[FrameType] = sys._getframe(settings.LOGGING_FRAME_DEPTH)
        depth: int = settings.LOGGING_FRAME_DEPTH

        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def context_filter(record):
    """Attach the current request_id to the loguru record, if one is set."""
    request_id = request_id_var.get()
    if request_id and request_id != "-":
        record["extra"]["request_id"] = request_id
    return record


def build_simplified_json_record(record) -> dict:
    """
    Build a simplified JSON log record from a loguru record.

    Fields: timestamp, level, logger, message, request_id (if present),
    exception (or null) and process info.
    """
    log_record = {
        "timestamp": record["time"].strftime("%Y-%m-%d %H:%M:%S"),
        "level": record["level"].name,
        "logger": record["name"],
        "message": record["message"],
    }

    if "request_id" in record["extra"]:
        log_record["request_id"] = record["extra"]["request_id"]

    if record["exception"]:
        traceback_text = None
        if record["exception"].traceback:
            try:
                traceback_text = "".join(
                    traceback.format_exception(
                        record["exception"].type,
                        record["exception"].value,
                        record["exception"].traceback,
                    )
                ).strip()
            except Exception:
                traceback_text = str(record["exception"].traceback)

        log_record["exception"] = {
            "type": (
                record["exception"].type.__name__ if record["exception"].type else None
            ),
            "value": (
                str(record["exception"].value) if record["exception"].value else None
            ),
            "traceback": traceback_text,
        }
    else:
        log_record["exception"] = None

    log_record["process"] = {
        "id": record["process"].id,
        "name": record["process"].name,
    }

    return log_record


def custom_json_sink(message):
    """Sink writing each record to stderr as a single JSON line."""
    log_record = build_simplified_json_record(message.record)
    sys.stderr.write(json.dumps(log_record) + "\n")


def configure_logging():
    """
    Configure logging for the application using loguru.

    This function:
    1. Removes the default loguru handler
    2. Adds the JSON sink at settings.LOG_LEVEL with the request_id filter
    3. Intercepts all standard logging calls to redirect to loguru
    """
    logger.remove()

    log_level = settings.LOG_LEVEL

    logger.add(
        custom_json_sink,
        level=log_level,
        backtrace=True,
        diagnose=False,
        filter=context_filter,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Quiet down chatty libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger.info("Logging configured successfully with loguru")


def set_request_id(request_id: str):
    """Set the request_id for the current context."""
    request_id_var.set(request_id)


def clear_request_id():
    """Clear the request_id from the current context."""
    request_id_var.set("-")


def get_request_id() -> str:
    """Get the current request_id from context."""
    return request_id_var.get()
