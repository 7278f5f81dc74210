"""
HTTP request logging middleware.

Writes one access line per request once the response body has been sent, so
lines come out in response-completion order. The reported time runs until
the response headers are ready. The format, skip predicate and sink
are fixed at startup in a ``RequestLoggerConfig`` and handed to the
middleware; nothing here reads the environment.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncIterator, Callable, Mapping, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from app.core.config import PRODUCTION, TEST
from app.core.request_logging.formats import (
    COMBINED,
    DEV,
    LogFormat,
    RequestInfo,
    ResponseInfo,
)
from app.core.request_logging.sinks import LogSink, LoggerSink


SkipPredicate = Callable[[RequestInfo, ResponseInfo], bool]
Clock = Callable[[], float]


def never_skip(request_info: RequestInfo, response_info: ResponseInfo) -> bool:
    return False


def always_skip(request_info: RequestInfo, response_info: ResponseInfo) -> bool:
    return True


@dataclass(frozen=True)
class RequestLoggerConfig:
    """Immutable request logger settings, built once per process."""
    log_format: LogFormat = DEV
    skip: SkipPredicate = never_skip
    sink: LogSink = field(default_factory=LoggerSink)
    clock: Clock = time.perf_counter

    @classmethod
    def for_environment(
        cls,
        environment: str,
        sink: Optional[LogSink] = None,
        clock: Optional[Clock] = None,
    ) -> "RequestLoggerConfig":
        """
        Select format and skip policy from the runtime mode.

        Args:
            environment: "production" selects the combined format, "test"
                suppresses every line, anything else uses the dev format
            sink: Destination for lines (defaults to the ``app.access`` logger)
            clock: Monotonic clock in seconds (defaults to ``time.perf_counter``)
        """
        return cls(
            log_format=COMBINED if environment == PRODUCTION else DEV,
            skip=always_skip if environment == TEST else never_skip,
            sink=sink or LoggerSink(),
            clock=clock or time.perf_counter,
        )

    @property
    def enabled(self) -> bool:
        return self.skip is not always_skip


def _lower_headers(headers: Mapping[str, str]) -> dict:
    return {key.lower(): value for key, value in headers.items()}


def request_info_from(request: Request) -> RequestInfo:
    """Capture the request fields used by log formats, keeping the URL as sent."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        url = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        url = request.scope["path"]
    query = request.scope.get("query_string", b"")
    if query:
        url = f"{url}?{query.decode('latin-1')}"
    return RequestInfo(
        method=request.method,
        url=url,
        http_version=request.scope.get("http_version", "1.1"),
        remote_addr=request.client.host if request.client else None,
        headers=_lower_headers(request.headers),
    )


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """Log every request/response cycle through the configured sink."""

    def __init__(self, app: ASGIApp, config: RequestLoggerConfig):
        super().__init__(app)
        self.config = config

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = self.config.clock()
        request_info = request_info_from(request)

        try:
            response = await call_next(request)
        except Exception:
            self._log(request_info, self._response_info(500, {}, started))
            raise

        response_info = self._response_info(response.status_code, response.headers, started)
        response.body_iterator = self._log_after_body(
            response.body_iterator, request_info, response_info
        )
        return response

    def _response_info(
        self,
        status_code: int,
        headers: Mapping[str, str],
        started: float,
    ) -> ResponseInfo:
        return ResponseInfo(
            status_code=status_code,
            headers=_lower_headers(headers),
            response_time_ms=(self.config.clock() - started) * 1000,
            timestamp=datetime.now(timezone.utc),
        )

    async def _log_after_body(
        self,
        body: AsyncIterator[bytes],
        request_info: RequestInfo,
        response_info: ResponseInfo,
    ) -> AsyncIterator[bytes]:
        try:
            async for chunk in body:
                yield chunk
        finally:
            self._log(request_info, response_info)

    def _log(self, request_info: RequestInfo, response_info: ResponseInfo) -> None:
        if self.config.skip(request_info, response_info):
            return
        line = self.config.log_format.render(request_info, response_info)
        self.config.sink.write(line + "\n")
