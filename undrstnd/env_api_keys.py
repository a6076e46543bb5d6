"""Environment key helpers.

The provider facade reads its API key from the environment when one is
not passed explicitly.  A ``.env`` file in the working directory is
loaded on import so keys kept there are picked up too.
"""

import os
from typing import Optional

from dotenv import load_dotenv

from .exceptions import LoadAPIKeyError
from .logger import get_logger

if not load_dotenv():
    get_logger().debug("No .env file found or could not be loaded.")

# Mapping from facade identifier to the environment variable used
REQUIRED_KEYS = {
    "undrstnd": "UNDRSTND_API_KEY",
    # the deprecated class facade still targets the Mistral endpoint
    "mistral": "MISTRAL_API_KEY",
}


def load_api_key(
    api_key: Optional[str],
    environment_variable_name: str,
    description: str,
) -> str:
    """Return *api_key* if given, otherwise the value of the environment variable.

    Raises
    ------
    LoadAPIKeyError
        If neither is available, or the explicit key is not a string.
    """
    if isinstance(api_key, str):
        return api_key
    if api_key is not None:
        raise LoadAPIKeyError(description, environment_variable_name)
    value = os.getenv(environment_variable_name)
    if not value:
        raise LoadAPIKeyError(description, environment_variable_name)
    return value


__all__ = ["REQUIRED_KEYS", "load_api_key"]
