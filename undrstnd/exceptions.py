"""
Exceptions raised by the Undrstnd adapter.

All exceptions inherit from :class:`UndrstndError` so callers can catch
either the specific exception or the base class.  Unsupported tools and
settings are *not* exceptions; they are reported as
:class:`undrstnd.tools.CallWarning` records alongside the result.
"""

from typing import Any, Optional


class UndrstndError(Exception):
    """Base exception for all undrstnd errors."""
    pass


class InvalidPromptError(UndrstndError):
    """
    Raised when a value claiming to be a message matches none of the
    system, user, assistant or tool variants.

    Attributes:
        prompt: The offending value
        reason: Human-readable description of the mismatch
    """

    def __init__(self, prompt: Any, reason: str):
        self.prompt = prompt
        self.reason = reason
        super().__init__(f"Invalid prompt: {reason}")


class ErrorSchemaMismatch(UndrstndError):
    """
    Raised when a vendor error body does not match the expected error schema.

    This is distinct from a well-formed vendor error: the caller should fall
    back to a generic transport message instead of using the body.
    """

    def __init__(self, body: Any, reason: str = ""):
        self.body = body
        self.reason = reason
        message = "Error response does not match the expected schema"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class APICallError(UndrstndError):
    """
    Raised when a chat-completion call fails.

    Attributes:
        message: The vendor-reported message, or a generic transport message
        url: Request URL
        request_body: JSON body that was sent
        status_code: HTTP status, ``None`` when no response was received
        response_body: Raw response text
        data: Decoded vendor error payload, ``None`` on a schema mismatch
        is_retryable: Whether retrying the same request may succeed
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        request_body: Any = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        data: Any = None,
        is_retryable: Optional[bool] = None,
    ):
        self.message = message
        self.url = url
        self.request_body = request_body
        self.status_code = status_code
        self.response_body = response_body
        self.data = data
        if is_retryable is None:
            is_retryable = status_code is not None and (
                status_code in (408, 409, 429) or status_code >= 500
            )
        self.is_retryable = is_retryable
        super().__init__(message)

    def __repr__(self) -> str:
        return f"APICallError(status_code={self.status_code!r}, message={self.message!r})"


class UnsupportedToolChoiceError(UndrstndError):
    """
    Raised when a tool choice carries a tag this adapter does not know.

    This is a contract violation between caller and library versions and is
    never coerced to a default.
    """

    def __init__(self, choice_type: Any):
        self.choice_type = choice_type
        super().__init__(f"Unsupported tool choice type: {choice_type}")


class UnsupportedFunctionalityError(UndrstndError):
    """Raised when a requested feature is not available for this provider."""

    def __init__(self, functionality: str):
        self.functionality = functionality
        super().__init__(f"'{functionality}' functionality not supported.")


class LoadAPIKeyError(UndrstndError):
    """Raised when no API key is passed and the environment variable is unset."""

    def __init__(self, description: str, env_var: str):
        self.description = description
        self.env_var = env_var
        super().__init__(
            f"{description} API key is missing. Pass it using the 'api_key' "
            f"parameter or the {env_var} environment variable."
        )


__all__ = [
    "UndrstndError",
    "InvalidPromptError",
    "ErrorSchemaMismatch",
    "APICallError",
    "UnsupportedToolChoiceError",
    "UnsupportedFunctionalityError",
    "LoadAPIKeyError",
]
