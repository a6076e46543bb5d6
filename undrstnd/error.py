"""Decoding of Undrstnd error responses.

A failed call returns a JSON body of the form::

    {"object": "error", "message": "...", "type": "...",
     "param": null, "code": null}

:func:`decode_error` validates a body against that schema and returns the
``message``.  A body of any other shape raises
:class:`~undrstnd.exceptions.ErrorSchemaMismatch` so callers never surface
a half-parsed message.  :func:`failed_response_handler` turns a non-2xx
HTTP response into an :class:`~undrstnd.exceptions.APICallError`.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import APICallError, ErrorSchemaMismatch
from .utils.json_parse import safe_parse_json


class UndrstndErrorData(BaseModel):
    """Error payload returned by the API."""

    model_config = ConfigDict(frozen=True)

    object: Literal["error"]
    message: str
    type: str
    param: Optional[str] = None
    code: Optional[str] = None


def parse_error_data(raw: Any) -> UndrstndErrorData:
    """Validate *raw* (a parsed JSON value, or JSON text/bytes) as an error payload."""
    if isinstance(raw, (str, bytes, bytearray)):
        parsed = safe_parse_json(raw)
        if not parsed.success:
            raise ErrorSchemaMismatch(raw, f"body is not JSON ({parsed.error})")
        raw = parsed.value
    try:
        return UndrstndErrorData.model_validate(raw)
    except ValidationError as exc:
        raise ErrorSchemaMismatch(raw, str(exc)) from exc


def decode_error(raw: Any) -> str:
    """Return the vendor error message carried by *raw*, verbatim."""
    return parse_error_data(raw).message


def failed_response_handler(
    response: Any,
    url: Optional[str] = None,
    request_body: Any = None,
) -> APICallError:
    """Build the error for a non-2xx response.

    Parameters
    ----------
    response :
        A :class:`requests.Response` (or anything exposing ``status_code``,
        ``text`` and ``reason``).
    url : str, optional
        Request URL, defaults to ``response.url``.
    request_body : optional
        The JSON body that was sent.

    Returns
    -------
    APICallError
        Carrying the vendor ``message`` when the body conforms, otherwise
        the HTTP reason phrase.
    """
    status_code = response.status_code
    body = response.text or ""
    url = url or getattr(response, "url", None)

    data: Optional[UndrstndErrorData]
    try:
        data = parse_error_data(body)
        message = data.message
    except ErrorSchemaMismatch:
        data = None
        message = getattr(response, "reason", None) or f"HTTP {status_code}"

    return APICallError(
        message=message,
        url=url,
        request_body=request_body,
        status_code=status_code,
        response_body=body,
        data=data,
    )


__all__ = [
    "UndrstndErrorData",
    "parse_error_data",
    "decode_error",
    "failed_response_handler",
]
