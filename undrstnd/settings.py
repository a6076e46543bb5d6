"""Model identifiers and per-model chat settings.

This module lists the model ids published by Undrstnd and the settings
that can be attached to a chat model.  Any other string is accepted as
a model id; the catalogue only documents the known ones.
"""

from dataclasses import dataclass

# Known chat model identifiers, grouped by tier
CHAT_MODELS = {
    "premier": [
        "ministral-3b-latest",
        "ministral-8b-latest",
        "mistral-large-latest",
        "mistral-small-latest",
    ],
    "free": [
        "pixtral-12b-2409",
    ],
    "legacy": [
        "open-mistral-7b",
        "open-mixtral-8x7b",
        "open-mixtral-8x22b",
    ],
}

DEFAULT_MODEL = "mistral-small-latest"


@dataclass(frozen=True)
class UndrstndChatSettings:
    """Settings for a chat model.

    safe_prompt:
        Whether to inject a safety prompt before all conversations.
        Defaults to ``False``.
    """
    safe_prompt: bool = False


def list_models():
    """Return every known chat model id, in catalogue order."""
    return [model for models in CHAT_MODELS.values() for model in models]


__all__ = ["CHAT_MODELS", "DEFAULT_MODEL", "UndrstndChatSettings", "list_models"]
