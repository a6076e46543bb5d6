import json
from types import SimpleNamespace

import pytest

from undrstnd import create_undrstnd


class FakeSession:
    """Stands in for requests.Session; records posts and replays responses."""

    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        return self._responses.pop(0)


def _build_http_response(status_code=200, body=None, reason="OK"):
    text = body if isinstance(body, str) else json.dumps(body)

    def _json():
        return json.loads(text)

    return SimpleNamespace(status_code=status_code, text=text, reason=reason, json=_json, url=None)


def _build_completion(content="ok", tool_calls=None, finish_reason="stop", usage=None):
    message = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    return {
        "id": "cmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "mistral-small-latest",
        "choices": [{"index": 0, "message": message, "finish_reason": finish_reason}],
        "usage": usage if usage is not None else {"prompt_tokens": 4, "completion_tokens": 2, "total_tokens": 6},
    }


@pytest.fixture
def http_response():
    return _build_http_response


@pytest.fixture
def completion():
    return _build_completion


@pytest.fixture
def make_model():
    """Return a factory for a chat model wired to a FakeSession."""

    def _make(*responses, model_id="mistral-small-latest", settings=None, **provider_kwargs):
        session = FakeSession(responses)
        provider = create_undrstnd(api_key="test-key", session=session, **provider_kwargs)
        return provider(model_id, settings), session

    return _make
