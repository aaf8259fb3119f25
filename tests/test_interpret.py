"""Tests for status-code interpretation."""

from __future__ import annotations

import json
from typing import Any, Dict

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from fitbit_rest.errors import (
    ApiLimitError,
    BadRequestError,
    ErrorKind,
    FitbitHTTPError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from fitbit_rest.interpret import (
    Outcome,
    RateLimitInfo,
    _human_readable_duration,
    _reset_hhmmss,
    classify_status,
    interpret,
)


class FakeResponse:
    def __init__(
        self,
        status_code: int,
        text: str = "",
        *,
        headers: Dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.text = text
        self.headers = headers or {}
        self.url = "https://api.fitbit.com/1/test.json"

    def json(self) -> Any:
        return json.loads(self.text)


RATE_HEADERS = {
    "fitbit-rate-limit-limit": "150",
    "fitbit-rate-limit-remaining": "149",
    "fitbit-rate-limit-reset": "1800",
}


@pytest.mark.parametrize(
    "status, error_class",
    [
        (400, BadRequestError),
        (401, UnauthorizedError),
        (403, ForbiddenError),
        (404, NotFoundError),
        (429, ApiLimitError),
    ],
)
def test_client_error_statuses(status, error_class):
    with pytest.raises(FitbitHTTPError) as exc_info:
        interpret(FakeResponse(status, '{"errors": []}'))

    assert type(exc_info.value) is error_class
    assert exc_info.value.status_code == status


def test_every_5xx_is_server_error():
    for status in range(500, 600):
        with pytest.raises(FitbitHTTPError) as exc_info:
            interpret(FakeResponse(status))
        assert type(exc_info.value) is ServerError
        assert exc_info.value.kind is ErrorKind.SERVER_ERROR


@pytest.mark.parametrize("status", [100, 202, 302, 304, 405, 418, 499, 600])
def test_unknown_status_is_unexpected(status):
    with pytest.raises(UnexpectedStatusError) as exc_info:
        interpret(FakeResponse(status, "{}"))

    assert str(status) in str(exc_info.value)
    assert exc_info.value.kind is ErrorKind.UNEXPECTED


def test_created_ignores_body():
    assert interpret(FakeResponse(201, "not json at all")) == {}


def test_no_content_ignores_body():
    assert interpret(FakeResponse(204, "not json at all")) is None


def test_array_body_is_wrapped():
    body = [{"logId": 1}, {"logId": 2}]
    assert interpret(FakeResponse(200, json.dumps(body))) == {"body": body}


def test_object_body_merges_rate_limit_headers_only():
    headers = dict(RATE_HEADERS)
    headers["Content-Type"] = "application/json"
    headers["X-Request-Id"] = "abc"

    result = interpret(
        FakeResponse(200, '{"user": {"encodedId": "26FWFL"}}', headers=headers)
    )

    assert result == {
        "user": {"encodedId": "26FWFL"},
        "fitbit-rate-limit-limit": "150",
        "fitbit-rate-limit-remaining": "149",
        "fitbit-rate-limit-reset": "1800",
    }


def test_rate_limit_header_names_are_lowercased():
    result = interpret(
        FakeResponse(200, "{}", headers={"Fitbit-Rate-Limit-Remaining": "10"})
    )
    assert result == {"fitbit-rate-limit-remaining": "10"}


def test_unicode_body_is_preserved():
    result = interpret(FakeResponse(200, '{"unicode": "✓测试"}'))
    assert result == {"unicode": "✓测试"}


def test_malformed_json_propagates_decoder_error():
    with pytest.raises(json.JSONDecodeError):
        interpret(FakeResponse(200, '{"invalid": json}'))


def test_api_limit_error_carries_rate_limit_info():
    with pytest.raises(ApiLimitError) as exc_info:
        interpret(FakeResponse(429, headers=RATE_HEADERS))

    assert exc_info.value.rate_limit == RateLimitInfo(
        limit="150", remaining="149", reset_epoch="1800"
    )


def test_classify_status_order():
    assert classify_status(200) is Outcome.JSON
    assert classify_status(201) is Outcome.CREATED
    assert classify_status(204) is Outcome.NO_CONTENT
    assert classify_status(429) is ApiLimitError
    assert classify_status(500) is ServerError
    assert classify_status(599) is ServerError
    assert classify_status(302) is UnexpectedStatusError


@pytest.mark.parametrize(
    "reset_seconds, expected",
    [
        (600, "00:10:00"),
        (3600, "01:00:00"),
        (3599.2, "01:00:00"),
        (0.4, "00:00:01"),
        (-30, "00:00:00"),
    ],
)
def test_human_readable_duration_for_rate_limit_resets(reset_seconds, expected):
    assert _human_readable_duration(reset_seconds) == expected


def test_reset_hhmmss_tolerates_missing_or_bad_header():
    assert _reset_hhmmss("1800") == "00:30:00"
    assert _reset_hhmmss(None) is None
    assert _reset_hhmmss("soon") is None


def make_requests_response(
    status_code: int, body: bytes = b"", headers: Dict[str, str] | None = None
) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response._content = body
    response.encoding = "utf-8"
    response.headers = CaseInsensitiveDict(headers or {})
    response.url = "https://api.fitbit.com/1/user/-/profile.json"
    return response


def test_requests_response_success_merges_mixed_case_headers():
    response = make_requests_response(
        200,
        b'{"user": {"encodedId": "26FWFL"}}',
        headers={
            "Content-Type": "application/json",
            "Fitbit-Rate-Limit-Limit": "150",
            "Fitbit-Rate-Limit-Remaining": "149",
            "Fitbit-Rate-Limit-Reset": "1800",
        },
    )

    assert interpret(response) == {
        "user": {"encodedId": "26FWFL"},
        "fitbit-rate-limit-limit": "150",
        "fitbit-rate-limit-remaining": "149",
        "fitbit-rate-limit-reset": "1800",
    }


def test_requests_response_decode_error_is_not_a_transport_error():
    response = make_requests_response(200, b'{"invalid": json}')

    with pytest.raises(json.JSONDecodeError) as exc_info:
        interpret(response)

    assert not isinstance(exc_info.value, requests.RequestException)


def test_requests_response_rate_limited():
    response = make_requests_response(
        429,
        b'{"errors": [{"errorType": "request"}]}',
        headers={"Fitbit-Rate-Limit-Remaining": "0", "Fitbit-Rate-Limit-Reset": "900"},
    )

    with pytest.raises(ApiLimitError) as exc_info:
        interpret(response)

    assert exc_info.value.status_code == 429
    assert exc_info.value.rate_limit == RateLimitInfo(remaining="0", reset_epoch="900")


@pytest.mark.parametrize("body", [b"null", b"42", b'"ok"', b"true"])
def test_scalar_success_body_raises_type_error(body):
    with pytest.raises(TypeError, match="JSON object or array"):
        interpret(make_requests_response(200, body))
