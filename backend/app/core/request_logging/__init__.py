"""
Request logging: access-line formats, sinks and the ASGI middleware.
"""

from app.core.request_logging.formats import (
    COMBINED,
    COMBINED_FORMAT,
    DEV,
    DEV_FORMAT,
    LogFormat,
    RequestInfo,
    ResponseInfo,
    format_line,
)
from app.core.request_logging.sinks import LogSink, LoggerSink, StreamSink
from app.core.request_logging.middleware import (
    RequestLoggerConfig,
    RequestLoggerMiddleware,
)

__all__ = [
    "COMBINED",
    "COMBINED_FORMAT",
    "DEV",
    "DEV_FORMAT",
    "LogFormat",
    "RequestInfo",
    "ResponseInfo",
    "format_line",
    "LogSink",
    "LoggerSink",
    "StreamSink",
    "RequestLoggerConfig",
    "RequestLoggerMiddleware",
]
