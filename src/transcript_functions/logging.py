"""Structured JSON logging shared by the HTTP server and the pipeline."""

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Routes all application and Uvicorn logs to stdout as JSON lines.

    Every record carries the trace and span ids injected by ddtrace, so
    progress transitions of a transcript can be followed across requests.
    Fields passed through ``extra`` become top-level JSON keys.

    Args:
        level: Log level name or number for the root and Uvicorn loggers.

    Returns:
        The configured root logger.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    for name in UVICORN_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.setLevel(level)
        server_logger.handlers = [handler]
        server_logger.propagate = False

    return root_logger
