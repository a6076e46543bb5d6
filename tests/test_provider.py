import pytest

from undrstnd import LoadAPIKeyError, Undrstnd, UndrstndChatLanguageModel, UndrstndChatSettings, create_undrstnd, undrstnd
from undrstnd.provider import DEFAULT_BASE_URL, MISTRAL_BASE_URL


def test_provider_call_and_aliases_build_chat_models():
    provider = create_undrstnd(api_key="k")
    for model in (provider("open-mistral-7b"), provider.chat("open-mistral-7b"), provider.language_model("open-mistral-7b")):
        assert isinstance(model, UndrstndChatLanguageModel)
        assert model.model_id == "open-mistral-7b"
        assert model.provider == "undrstnd.chat"
        assert model.specification_version == "v1"


def test_default_base_url_and_trailing_slash():
    assert create_undrstnd().base_url == DEFAULT_BASE_URL
    assert create_undrstnd(base_url="https://proxy.test/v1/").base_url == "https://proxy.test/v1"


def test_default_instance_exists():
    assert undrstnd.base_url == DEFAULT_BASE_URL


def test_settings_are_passed_through():
    model = create_undrstnd(api_key="k")("mistral-large-latest", UndrstndChatSettings(safe_prompt=True))
    assert model.settings.safe_prompt is True


def test_headers_read_key_from_env_lazily(monkeypatch):
    monkeypatch.delenv("UNDRSTND_API_KEY", raising=False)
    model = create_undrstnd(headers={"X-Custom": "1"})("mistral-small-latest")

    with pytest.raises(LoadAPIKeyError) as excinfo:
        model.config.headers()
    assert "UNDRSTND_API_KEY" in str(excinfo.value)

    monkeypatch.setenv("UNDRSTND_API_KEY", "env-key")
    assert model.config.headers() == {"Authorization": "Bearer env-key", "X-Custom": "1"}


def test_custom_headers_override_authorization():
    model = create_undrstnd(api_key="k", headers={"Authorization": "Token other"})("m")
    assert model.config.headers() == {"Authorization": "Token other"}


def test_class_facade_is_deprecated(monkeypatch):
    monkeypatch.setenv("MISTRAL_API_KEY", "mistral-key")
    with pytest.warns(DeprecationWarning):
        facade = Undrstnd()

    model = facade.chat("mistral-small-latest")
    assert facade.base_url == MISTRAL_BASE_URL
    assert model.provider == "mistral.chat"
    assert model.config.headers()["Authorization"] == "Bearer mistral-key"
