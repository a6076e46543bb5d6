import pytest

from undrstnd.env_api_keys import load_api_key
from undrstnd.exceptions import LoadAPIKeyError


def test_load_api_key_prefers_explicit_value(monkeypatch):
    monkeypatch.setenv("UNDRSTND_API_KEY", "env-key")
    assert load_api_key("explicit", "UNDRSTND_API_KEY", "Undrstnd") == "explicit"
    assert load_api_key(None, "UNDRSTND_API_KEY", "Undrstnd") == "env-key"


def test_load_api_key_rejects_non_string():
    with pytest.raises(LoadAPIKeyError):
        load_api_key(123, "UNDRSTND_API_KEY", "Undrstnd")
