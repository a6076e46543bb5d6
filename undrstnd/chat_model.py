"""Undrstnd chat-completion model.

:class:`UndrstndChatLanguageModel` turns a prompt and a :class:`Mode`
into the JSON body of ``POST /chat/completions``, sends it, and maps the
reply back onto a :class:`GenerateResult`.  Non-2xx replies are decoded
with :func:`undrstnd.error.failed_response_handler` and raised.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import requests
from backoff import expo, on_exception

from .error import failed_response_handler
from .exceptions import APICallError, UnsupportedFunctionalityError
from .language_model import GenerateResult, LanguageModel, Mode
from .logger import get_logger
from .prepare_tools import prepare_tools
from .prompt import AssistantMessage, Message, ToolCall, prompt_to_wire
from .settings import UndrstndChatSettings
from .tools import CallWarning, ToolChoice
from .utils.http_proxy import get_session_with_proxy

logger = get_logger()

_FINISH_REASONS = {
    "stop": "stop",
    "length": "length",
    "model_length": "length",
    "tool_calls": "tool-calls",
}

# Call settings the API has no field for
_UNSUPPORTED_SETTINGS = ("top_k", "frequency_penalty", "presence_penalty", "stop_sequences")

# Seconds spent retrying transport failures before giving up
MAX_RETRY_TIME = 30


@dataclass
class UndrstndChatConfig:
    provider: str
    base_url: str
    headers: Callable[[], Dict[str, str]]
    session: Optional[requests.Session] = None
    timeout: float = 300


def map_finish_reason(finish_reason: Optional[str]) -> str:
    return _FINISH_REASONS.get(finish_reason, "unknown")


class UndrstndChatLanguageModel(LanguageModel):
    """Chat model backed by the Undrstnd ``/chat/completions`` endpoint."""

    default_object_generation_mode = "json"
    supports_image_urls = False

    def __init__(
        self,
        model_id: str,
        settings: Optional[UndrstndChatSettings] = None,
        config: Optional[UndrstndChatConfig] = None,
    ) -> None:
        if config is None:
            raise ValueError("UndrstndChatLanguageModel requires a config; use create_undrstnd().")
        self.model_id = model_id
        self.settings = settings or UndrstndChatSettings()
        self.config = config
        self.provider = config.provider
        self._session = config.session or get_session_with_proxy()

    def get_args(
        self,
        prompt: Sequence[Message],
        mode: Optional[Mode] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        top_p: Optional[float] = None,
        top_k: Optional[int] = None,
        frequency_penalty: Optional[float] = None,
        presence_penalty: Optional[float] = None,
        stop_sequences: Optional[List[str]] = None,
        response_format: Optional[Dict[str, Any]] = None,
        seed: Optional[int] = None,
    ) -> Tuple[Dict[str, Any], List[CallWarning]]:
        """Build the request body and the warnings for dropped settings."""
        mode = mode or Mode.regular()
        warnings: List[CallWarning] = []

        unsupported = {
            "top_k": top_k,
            "frequency_penalty": frequency_penalty,
            "presence_penalty": presence_penalty,
            "stop_sequences": stop_sequences,
        }
        for name in _UNSUPPORTED_SETTINGS:
            if unsupported[name] is not None:
                logger.unsupported("setting", name)
                warnings.append(CallWarning(type="unsupported-setting", setting=name))

        wants_json = response_format is not None and response_format.get("type") == "json"
        if wants_json and response_format.get("schema") is not None:
            logger.unsupported("setting", "response_format schema")
            warnings.append(
                CallWarning(
                    type="unsupported-setting",
                    setting="response_format",
                    details="JSON response format schema is not supported",
                )
            )

        args: Dict[str, Any] = {
            "model": self.model_id,
            "safe_prompt": self.settings.safe_prompt,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "top_p": top_p,
            "random_seed": seed,
            "response_format": {"type": "json_object"} if wants_json else None,
            "messages": prompt_to_wire(prompt),
        }

        if mode.type == "regular":
            prepared = prepare_tools(mode.tools, mode.tool_choice)
            args["tools"] = prepared.tools
            args["tool_choice"] = prepared.tool_choice
            warnings.extend(prepared.warnings)
        elif mode.type == "object-json":
            args["response_format"] = {"type": "json_object"}
        elif mode.type == "object-tool":
            prepared = prepare_tools([mode.tool], ToolChoice.required())
            args["tools"] = prepared.tools
            args["tool_choice"] = prepared.tool_choice
        else:
            raise UnsupportedFunctionalityError(f"mode {mode.type!r}")

        return {key: value for key, value in args.items() if value is not None}, warnings

    @on_exception(expo, requests.exceptions.RequestException, max_time=lambda: MAX_RETRY_TIME)
    def _send(self, url: str, body: Dict[str, Any], headers: Dict[str, str]) -> requests.Response:
        logger.request(url, self.model_id, len(body.get("messages", [])))
        return self._session.post(url, json=body, headers=headers, timeout=self.config.timeout)

    def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.config.base_url}/chat/completions"
        headers = {"Content-Type": "application/json", **self.config.headers()}
        try:
            response = self._send(url, body, headers)
        except requests.exceptions.RequestException as exc:
            logger.api_error(None, str(exc))
            raise APICallError(
                message=f"Request to {url} failed: {exc}",
                url=url,
                request_body=body,
            ) from exc

        if not 200 <= response.status_code < 300:
            error = failed_response_handler(response, url=url, request_body=body)
            logger.api_error(error.status_code, error.message)
            raise error

        try:
            payload = response.json()
        except ValueError as exc:
            raise APICallError(
                message="Invalid JSON response",
                url=url,
                request_body=body,
                status_code=response.status_code,
                response_body=response.text,
            ) from exc

        reason = _invalid_completion_reason(payload)
        if reason:
            logger.api_error(response.status_code, f"Invalid response body: {reason}")
            raise APICallError(
                message="Invalid response body",
                url=url,
                request_body=body,
                status_code=response.status_code,
                response_body=response.text,
            )
        return payload

    def do_generate(
        self,
        prompt: Sequence[Message],
        mode: Optional[Mode] = None,
        **call_settings: Any,
    ) -> GenerateResult:
        args, warnings = self.get_args(prompt, mode, **call_settings)
        body = self._post(args)

        choice = body["choices"][0]
        message = choice.get("message") or {}
        text = _extract_text(message.get("content"))

        # the API echoes an assistant prefix at the start of the reply
        last = prompt[-1] if prompt else None
        if (
            text is not None
            and isinstance(last, AssistantMessage)
            and last.prefix
            and text.startswith(last.content)
        ):
            text = text[len(last.content):]

        raw_settings = {key: value for key, value in args.items() if key != "messages"}
        return GenerateResult(
            text=text,
            tool_calls=_extract_tool_calls(message.get("tool_calls")),
            finish_reason=map_finish_reason(choice.get("finish_reason")),
            usage=_extract_usage(body.get("usage")),
            raw_call={"raw_prompt": args["messages"], "raw_settings": raw_settings},
            warnings=warnings,
            response={
                "id": body.get("id"),
                "model_id": body.get("model"),
                "created": body.get("created"),
            },
        )

    def do_stream(
        self,
        prompt: Sequence[Message],
        mode: Optional[Mode] = None,
        **call_settings: Any,
    ) -> Any:
        raise UnsupportedFunctionalityError("streaming")


def _invalid_completion_reason(payload: Any) -> Optional[str]:
    """Return why *payload* is not a usable completion, or ``None`` if it is."""
    if not isinstance(payload, dict):
        return "body is not an object"
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return "missing 'choices'"
    choice = choices[0]
    if not isinstance(choice, dict):
        return "choice is not an object"
    message = choice.get("message")
    if message is None:
        return None
    if not isinstance(message, dict):
        return "message is not an object"
    tool_calls = message.get("tool_calls")
    if tool_calls is not None and not (
        isinstance(tool_calls, list) and all(isinstance(call, dict) for call in tool_calls)
    ):
        return "malformed 'tool_calls'"
    return None


def _extract_text(content: Any) -> Optional[str]:
    if content is None or isinstance(content, str):
        return content
    if isinstance(content, list):
        # chunked content: keep the text chunks only
        return "".join(
            str(item.get("text") or "")
            for item in content
            if isinstance(item, dict) and item.get("type") == "text"
        )
    return str(content)


def _extract_tool_calls(raw_calls: Any) -> List[ToolCall]:
    calls: List[ToolCall] = []
    for call in raw_calls or []:
        function = call.get("function")
        if not isinstance(function, dict):
            function = {}
        arguments = function.get("arguments", "")
        if not isinstance(arguments, str):
            arguments = json.dumps(arguments)
        calls.append(ToolCall(id=call.get("id", ""), name=function.get("name", ""), arguments=arguments))
    return calls


def _safe_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _extract_usage(usage: Any) -> Dict[str, Optional[int]]:
    usage = usage if isinstance(usage, dict) else {}
    return {
        "prompt_tokens": _safe_int(usage.get("prompt_tokens")),
        "completion_tokens": _safe_int(usage.get("completion_tokens")),
    }


__all__ = ["UndrstndChatConfig", "UndrstndChatLanguageModel", "map_finish_reason"]
