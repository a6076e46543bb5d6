"""Provider facade.

:func:`create_undrstnd` resolves connection settings once and hands out
:class:`~undrstnd.chat_model.UndrstndChatLanguageModel` instances:

>>> from undrstnd import create_undrstnd
>>> provider = create_undrstnd(api_key="...")
>>> model = provider("mistral-small-latest")

The API key is read lazily, on every request, so a provider can be
created before the key is available.
"""

import warnings
from typing import Dict, Optional

import requests

from .chat_model import UndrstndChatConfig, UndrstndChatLanguageModel
from .env_api_keys import REQUIRED_KEYS, load_api_key
from .settings import UndrstndChatSettings
from .utils.url import without_trailing_slash

DEFAULT_BASE_URL = "https://api.undrstnd-labs.com/v1"
MISTRAL_BASE_URL = "https://api.mistral.ai/v1"


class UndrstndProvider:
    """Callable factory for Undrstnd chat models."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 300,
    ) -> None:
        self.base_url = without_trailing_slash(base_url) or DEFAULT_BASE_URL
        self.api_key = api_key
        self.headers = headers
        self.session = session
        self.timeout = timeout

    def _get_headers(self) -> Dict[str, str]:
        key = load_api_key(self.api_key, REQUIRED_KEYS["undrstnd"], "Undrstnd")
        return {"Authorization": f"Bearer {key}", **(self.headers or {})}

    def chat(
        self,
        model_id: str,
        settings: Optional[UndrstndChatSettings] = None,
    ) -> UndrstndChatLanguageModel:
        """Create a model for text generation."""
        config = UndrstndChatConfig(
            provider="undrstnd.chat",
            base_url=self.base_url,
            headers=self._get_headers,
            session=self.session,
            timeout=self.timeout,
        )
        return UndrstndChatLanguageModel(model_id, settings, config)

    language_model = chat

    def __call__(
        self,
        model_id: str,
        settings: Optional[UndrstndChatSettings] = None,
    ) -> UndrstndChatLanguageModel:
        return self.chat(model_id, settings)


def create_undrstnd(
    base_url: Optional[str] = None,
    api_key: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
    session: Optional[requests.Session] = None,
    timeout: float = 300,
) -> UndrstndProvider:
    """Create an Undrstnd provider instance.

    Parameters
    ----------
    base_url : str, optional
        URL prefix for API calls, e.g. to use a proxy server.  Defaults to
        ``https://api.undrstnd-labs.com/v1``.
    api_key : str, optional
        Sent as a bearer token.  Defaults to the ``UNDRSTND_API_KEY``
        environment variable.
    headers : dict, optional
        Extra headers for every request; they override the defaults.
    session : requests.Session, optional
        Custom HTTP session, e.g. to intercept requests in tests.
    timeout : float
        Per-request timeout in seconds.
    """
    return UndrstndProvider(
        base_url=base_url,
        api_key=api_key,
        headers=headers,
        session=session,
        timeout=timeout,
    )


class Undrstnd:
    """Class-based facade.

    .. deprecated::
        Use :func:`create_undrstnd` instead.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        warnings.warn(
            "Undrstnd is deprecated; use create_undrstnd() instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        self.base_url = without_trailing_slash(base_url) or MISTRAL_BASE_URL
        self.api_key = api_key
        self.headers = headers

    def _get_headers(self) -> Dict[str, str]:
        key = load_api_key(self.api_key, REQUIRED_KEYS["mistral"], "Undrstnd")
        return {"Authorization": f"Bearer {key}", **(self.headers or {})}

    def chat(
        self,
        model_id: str,
        settings: Optional[UndrstndChatSettings] = None,
    ) -> UndrstndChatLanguageModel:
        config = UndrstndChatConfig(
            provider="mistral.chat",
            base_url=self.base_url,
            headers=self._get_headers,
        )
        return UndrstndChatLanguageModel(model_id, settings, config)


# Default provider instance
undrstnd = create_undrstnd()

__all__ = ["UndrstndProvider", "create_undrstnd", "Undrstnd", "undrstnd"]
