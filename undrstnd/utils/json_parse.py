"""
JSON parsing utilities.

Helpers for parsing response bodies that may or may not be JSON.
"""

import json
from typing import Any, NamedTuple, Optional, Union


class ParseResult(NamedTuple):
    success: bool
    value: Any
    error: Optional[Exception]


def parse_json(json_str: Union[str, bytes]) -> Any:
    """Parse a JSON string (or UTF-8 bytes) into a Python object.

    Raises a ValueError if the input is not valid JSON.
    """
    if isinstance(json_str, (bytes, bytearray)):
        json_str = json_str.decode("utf-8")
    return json.loads(json_str)


def safe_parse_json(json_str: Union[str, bytes]) -> ParseResult:
    """Parse JSON without raising; the failure is carried in the result."""
    try:
        return ParseResult(True, parse_json(json_str), None)
    except (ValueError, UnicodeDecodeError) as exc:
        return ParseResult(False, None, exc)
