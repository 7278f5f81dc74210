"""
Access-line formatting tests.
"""

import base64
import io
from datetime import datetime, timedelta, timezone

import pytest

from app.core.request_logging import (
    COMBINED,
    DEV,
    LogFormat,
    RequestInfo,
    RequestLoggerConfig,
    ResponseInfo,
    format_line,
)
from app.core.request_logging.formats import format_response_time
from app.core.request_logging.sinks import LoggerSink, StreamSink


LOGGED_AT = datetime(2026, 10, 19, 8, 5, 3, 250000, tzinfo=timezone.utc)


def make_request(**overrides) -> RequestInfo:
    fields = {
        "method": "POST",
        "url": "/api/v1/auth/login",
        "http_version": "1.1",
        "remote_addr": "10.0.0.1",
        "headers": {"user-agent": "curl/8.0"},
    }
    fields.update(overrides)
    return RequestInfo(**fields)


def make_response(**overrides) -> ResponseInfo:
    fields = {
        "status_code": 201,
        "headers": {"content-length": "87"},
        "response_time_ms": 4.5,
        "timestamp": LOGGED_AT,
    }
    fields.update(overrides)
    return ResponseInfo(**fields)


def test_dev_format():
    line = format_line(make_request(), make_response(), DEV)
    assert line == "POST /api/v1/auth/login 201 87 - 4.5 ms"


def test_combined_format():
    credentials = base64.b64encode(b"alice:s3cret").decode()
    request = make_request(headers={
        "user-agent": "curl/8.0",
        "authorization": f"Basic {credentials}",
        "referer": "https://portal.example.com/login",
    })
    line = format_line(request, make_response(), COMBINED)
    assert line == (
        '10.0.0.1 - alice [19/Oct/2026:08:05:03 +0000] '
        '"POST /api/v1/auth/login HTTP/1.1" 201 87 '
        '"https://portal.example.com/login" "curl/8.0"'
    )


def test_combined_format_with_missing_values():
    request = make_request(remote_addr=None, headers={})
    response = make_response(headers={})
    line = format_line(request, response, COMBINED)
    assert line == (
        '- - - [19/Oct/2026:08:05:03 +0000] '
        '"POST /api/v1/auth/login HTTP/1.1" 201 - "-" "-"'
    )


def test_clf_date_is_rendered_in_utc():
    local = LOGGED_AT.astimezone(timezone(timedelta(hours=3)))
    line = format_line(make_request(), make_response(timestamp=local), ":date[clf]")
    assert line == "19/Oct/2026:08:05:03 +0000"


def test_other_date_styles():
    response = make_response()
    assert format_line(make_request(), response, ":date[iso]") == "2026-10-19T08:05:03.250Z"
    assert format_line(make_request(), response, ":date[web]") == "Mon, 19 Oct 2026 08:05:03 GMT"
    assert format_line(make_request(), response, ":date") == "Mon, 19 Oct 2026 08:05:03 GMT"
    assert format_line(make_request(), response, ":date[unix]") == "-"


def test_bearer_authorization_has_no_remote_user():
    request = make_request(headers={"authorization": "Bearer abc.def.ghi"})
    assert format_line(request, make_response(), ":remote-user") == "-"


def test_malformed_basic_credentials_have_no_remote_user():
    request = make_request(headers={"authorization": "Basic not-base64!"})
    assert format_line(request, make_response(), ":remote-user") == "-"


def test_request_and_response_header_tokens():
    request = make_request(headers={"x-request-id": "req-42"})
    response = make_response(headers={"content-type": "application/json"})
    line = format_line(request, response, ":req[X-Request-Id] :res[Content-Type] :res[etag]")
    assert line == "req-42 application/json -"


def test_missing_status_and_timing_render_placeholder():
    response = make_response(status_code=None, response_time_ms=None)
    assert format_line(make_request(), response, DEV) == "POST /api/v1/auth/login - 87 - - ms"


def test_response_time_digits_argument():
    response = make_response(response_time_ms=12.34567)
    assert format_line(make_request(), response, ":response-time[1]") == "12.3"
    assert format_line(make_request(), response, ":response-time[0]") == "12"
    assert format_line(make_request(), response, ":response-time") == "12.346"


@pytest.mark.parametrize("value, expected", [
    (12.3, "12.3"),
    (12.299999999999978, "12.3"),
    (0.25, "0.25"),
    (5.0, "5.0"),
    (1503.0004, "1503.0"),
])
def test_format_response_time(value, expected):
    assert format_response_time(value) == expected


def test_string_formats_are_compiled_on_demand():
    assert format_line(make_request(), make_response(), ":method :status") == "POST 201"


def test_unknown_token_is_rejected():
    with pytest.raises(ValueError, match="Unknown log format token"):
        LogFormat(":method :bogus-token")


def test_literal_text_is_kept():
    log_format = LogFormat("[access] :method done")
    assert log_format.render(make_request(), make_response()) == "[access] POST done"


def test_config_for_production():
    config = RequestLoggerConfig.for_environment("production")
    assert config.log_format is COMBINED
    assert config.enabled
    assert config.skip(make_request(), make_response()) is False
    assert isinstance(config.sink, LoggerSink)


def test_config_for_test_skips_every_request():
    config = RequestLoggerConfig.for_environment("test")
    assert config.log_format is DEV
    assert not config.enabled
    assert config.skip(make_request(), make_response()) is True
    assert config.skip(make_request(method="GET"), make_response(status_code=500)) is True


@pytest.mark.parametrize("environment", ["development", "staging", ""])
def test_config_for_other_modes(environment):
    config = RequestLoggerConfig.for_environment(environment)
    assert config.log_format is DEV
    assert config.enabled


def test_config_is_immutable():
    config = RequestLoggerConfig.for_environment("development")
    with pytest.raises(AttributeError):
        config.log_format = COMBINED


def test_stream_sink_writes_verbatim():
    stream = io.StringIO()
    StreamSink(stream).write("GET / 200 2 - 1.0 ms\n")
    assert stream.getvalue() == "GET / 200 2 - 1.0 ms\n"


def test_stream_sink_ignores_closed_stream():
    stream = io.StringIO()
    stream.close()
    StreamSink(stream).write("GET / 200 2 - 1.0 ms\n")
