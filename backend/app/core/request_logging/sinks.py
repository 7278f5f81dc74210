"""
Destinations for access-log lines.
"""

import logging
import sys
from typing import Optional, Protocol, TextIO

from app.core.logging import ACCESS_LOGGER_NAME, get_logger


logger = get_logger(__name__)


class LogSink(Protocol):
    """Anything that accepts a formatted log line."""

    def write(self, message: str) -> None:
        ...


class LoggerSink:
    """
    Writes lines to a stdlib logger at INFO level.

    The trailing newline is stripped since the logging handler adds its own.
    """

    def __init__(self, target: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.target = target or get_logger(ACCESS_LOGGER_NAME)
        self.level = level

    def write(self, message: str) -> None:
        self.target.log(self.level, message.rstrip("\r\n"))


class StreamSink:
    """Writes lines verbatim to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout

    def write(self, message: str) -> None:
        try:
            self.stream.write(message)
            self.stream.flush()
        except (OSError, ValueError) as exc:
            # write failures are not reported to the caller
            logger.debug("Access log write failed: %s", exc)
