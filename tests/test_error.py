import json
from types import SimpleNamespace

import pytest

from undrstnd.error import UndrstndErrorData, decode_error, failed_response_handler, parse_error_data
from undrstnd.exceptions import APICallError, ErrorSchemaMismatch


RATE_LIMITED = {
    "object": "error",
    "message": "rate limited",
    "type": "rate_limit",
    "param": None,
    "code": "429",
}


def test_decode_returns_message_verbatim():
    assert decode_error(RATE_LIMITED) == "rate limited"


def test_decode_accepts_json_text_and_bytes():
    assert decode_error(json.dumps(RATE_LIMITED)) == "rate limited"
    assert decode_error(json.dumps(RATE_LIMITED).encode("utf-8")) == "rate limited"


def test_param_and_code_may_be_absent():
    data = parse_error_data({"object": "error", "message": "m", "type": "t"})
    assert data.param is None
    assert data.code is None


@pytest.mark.parametrize(
    "body",
    [
        {"message": "x"},
        {"object": "list", "message": "x", "type": "t", "param": None, "code": None},
        {"object": "error", "message": 5, "type": "t", "param": None, "code": None},
        {"object": "error", "message": "x", "param": None, "code": None},
        {"object": "error", "message": "x", "type": "t", "param": None, "code": 429},
        ["not", "an", "object"],
        None,
        "<html>Bad Gateway</html>",
    ],
)
def test_shape_mismatch_is_signalled(body):
    with pytest.raises(ErrorSchemaMismatch):
        decode_error(body)


def test_error_data_is_frozen():
    data = parse_error_data(RATE_LIMITED)
    assert isinstance(data, UndrstndErrorData)
    with pytest.raises(Exception):
        data.message = "other"


def _response(status_code, body, reason):
    return SimpleNamespace(status_code=status_code, text=body, reason=reason, url="https://api.test/v1/chat/completions")


def test_failed_response_handler_uses_vendor_message():
    error = failed_response_handler(_response(429, json.dumps(RATE_LIMITED), "Too Many Requests"), request_body={"model": "m"})

    assert isinstance(error, APICallError)
    assert error.message == "rate limited"
    assert error.status_code == 429
    assert error.is_retryable is True
    assert error.data.type == "rate_limit"
    assert error.url == "https://api.test/v1/chat/completions"
    assert error.request_body == {"model": "m"}


def test_failed_response_handler_falls_back_to_reason():
    error = failed_response_handler(_response(400, '{"detail": "bad"}', "Bad Request"))

    assert error.message == "Bad Request"
    assert error.data is None
    assert error.response_body == '{"detail": "bad"}'
    assert error.is_retryable is False


def test_failed_response_handler_without_reason():
    error = failed_response_handler(_response(503, "", None))
    assert error.message == "HTTP 503"
    assert error.is_retryable is True
