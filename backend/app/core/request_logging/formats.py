"""
Access-log line formatting.

A format string mixes literal text with ``:token`` or ``:token[arg]``
placeholders. Formats are compiled once into a ``LogFormat`` and rendered
per request from a ``RequestInfo`` / ``ResponseInfo`` pair.
"""

import base64
import binascii
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union


COMBINED_FORMAT = (
    ':remote-addr - :remote-user [:date[clf]] ":method :url HTTP/:http-version" '
    ':status :res[content-length] ":referrer" ":user-agent"'
)
DEV_FORMAT = ":method :url :status :res[content-length] - :response-time ms"

MISSING = "-"

TOKEN_PATTERN = re.compile(r":([-\w]{2,})(?:\[([^\]]+)\])?")

CLF_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class RequestInfo:
    """What the logger needs to know about an inbound request."""
    method: str
    url: str
    http_version: str = "1.1"
    remote_addr: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ResponseInfo:
    """What the logger needs to know about the finished response."""
    status_code: Optional[int]
    headers: Mapping[str, str] = field(default_factory=dict)
    response_time_ms: Optional[float] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


TokenFunction = Callable[[RequestInfo, ResponseInfo, Optional[str]], Optional[str]]


def _header(headers: Mapping[str, str], name: Optional[str]) -> Optional[str]:
    if not name:
        return None
    return headers.get(name.lower())


def _clf_date(moment: datetime) -> str:
    moment = moment.astimezone(timezone.utc)
    return "%02d/%s/%04d:%02d:%02d:%02d +0000" % (
        moment.day,
        CLF_MONTHS[moment.month - 1],
        moment.year,
        moment.hour,
        moment.minute,
        moment.second,
    )


def format_response_time(value: float, digits: Optional[int] = None) -> str:
    """
    Render milliseconds.

    Without ``digits`` the value is rounded to 3 decimals and rendered in its
    shortest form (``12.3``, ``0.25``). With ``digits`` it is fixed-point.
    """
    if digits is not None:
        return f"{value:.{digits}f}"
    return repr(round(value, 3))


def _token_method(request: RequestInfo, response: ResponseInfo, arg: Optional[str]) -> Optional[str]:
    return request.method


def _token_url(request: RequestInfo, response: ResponseInfo, arg: Optional[str]) -> Optional[str]:
    return request.url


def _token_status(request: RequestInfo, response: ResponseInfo, arg: Optional[str]) -> Optional[str]:
    if response.status_code is None:
        return None
    return str(response.status_code)


def _token_res(request: RequestInfo, response: ResponseInfo, arg: Optional[str]) -> Optional[str]:
    return _header(response.headers, arg)


def _token_req(request: RequestInfo, response: ResponseInfo, arg: Optional[str]) -> Optional[str]:
    return _header(request.headers, arg)


def _token_response_time(request: RequestInfo, response: ResponseInfo, arg: Optional[str]) -> Optional[str]:
    if response.response_time_ms is None:
        return None
    digits = int(arg) if arg is not None else None
    return format_response_time(response.response_time_ms, digits)


def _token_remote_addr(request: RequestInfo, response: ResponseInfo, arg: Optional[str]) -> Optional[str]:
    return request.remote_addr


def _token_remote_user(request: RequestInfo, response: ResponseInfo, arg: Optional[str]) -> Optional[str]:
    authorization = _header(request.headers, "authorization")
    if not authorization:
        return None
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() != "basic" or not credentials:
        return None
    try:
        decoded = base64.b64decode(credentials.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None
    user, sep, _ = decoded.partition(":")
    if not sep:
        return None
    return user or None


def _token_date(request: RequestInfo, response: ResponseInfo, arg: Optional[str]) -> Optional[str]:
    moment = response.timestamp.astimezone(timezone.utc)
    style = arg or "web"
    if style == "clf":
        return _clf_date(moment)
    if style == "iso":
        return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    if style == "web":
        return format_datetime(moment, usegmt=True)
    return None


def _token_http_version(request: RequestInfo, response: ResponseInfo, arg: Optional[str]) -> Optional[str]:
    return request.http_version


def _token_referrer(request: RequestInfo, response: ResponseInfo, arg: Optional[str]) -> Optional[str]:
    return _header(request.headers, "referer") or _header(request.headers, "referrer")


def _token_user_agent(request: RequestInfo, response: ResponseInfo, arg: Optional[str]) -> Optional[str]:
    return _header(request.headers, "user-agent")


TOKENS: Dict[str, TokenFunction] = {
    "method": _token_method,
    "url": _token_url,
    "status": _token_status,
    "res": _token_res,
    "req": _token_req,
    "response-time": _token_response_time,
    "remote-addr": _token_remote_addr,
    "remote-user": _token_remote_user,
    "date": _token_date,
    "http-version": _token_http_version,
    "referrer": _token_referrer,
    "user-agent": _token_user_agent,
}


Part = Union[str, Tuple[TokenFunction, Optional[str]]]


class LogFormat:
    """A format string compiled into literal and token parts."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        self._parts: List[Part] = self._compile(pattern)

    @staticmethod
    def _compile(pattern: str) -> List[Part]:
        parts: List[Part] = []
        position = 0
        for match in TOKEN_PATTERN.finditer(pattern):
            name, arg = match.group(1), match.group(2)
            token = TOKENS.get(name)
            if token is None:
                raise ValueError(f"Unknown log format token: :{name}")
            if match.start() > position:
                parts.append(pattern[position:match.start()])
            parts.append((token, arg))
            position = match.end()
        if position < len(pattern):
            parts.append(pattern[position:])
        return parts

    def render(self, request: RequestInfo, response: ResponseInfo) -> str:
        rendered = []
        for part in self._parts:
            if isinstance(part, str):
                rendered.append(part)
                continue
            token, arg = part
            value = token(request, response, arg)
            rendered.append(MISSING if value is None else value)
        return "".join(rendered)

    def __repr__(self) -> str:
        return f"LogFormat({self.pattern!r})"


COMBINED = LogFormat(COMBINED_FORMAT)
DEV = LogFormat(DEV_FORMAT)


def format_line(
    request_info: RequestInfo,
    response_info: ResponseInfo,
    log_format: Union[LogFormat, str],
) -> str:
    """Render one access-log line (without a trailing newline)."""
    if isinstance(log_format, str):
        log_format = LogFormat(log_format)
    return log_format.render(request_info, response_info)
