"""Prompt data model for the Undrstnd chat API.

A prompt is an ordered list of messages.  Each message is one of four
immutable variants, told apart by their ``role``:

* :class:`SystemMessage` – a single instruction string.
* :class:`UserMessage` – an ordered sequence of text and image parts.
* :class:`AssistantMessage` – text, an optional ``prefix`` flag and
  optional tool calls.
* :class:`ToolMessage` – the result of a tool call, correlated by
  ``tool_call_id``.

Every variant projects itself onto the wire with ``to_wire()``;
:func:`message_from_wire` goes the other way and rejects anything that
is not exactly one of the four shapes.
"""

import base64
import json
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Union

from .exceptions import InvalidPromptError


@dataclass(frozen=True)
class TextContent:
    """A text part of a user turn."""
    text: str

    def to_wire(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ImageContent:
    """An image part of a user turn, referenced by URL (http(s) or data URL)."""
    url: str

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str = "image/jpeg") -> "ImageContent":
        """Build an image part from raw bytes using a base64 data URL."""
        encoded = base64.b64encode(data).decode("utf-8")
        return cls(url=f"data:{mime_type};base64,{encoded}")

    def to_wire(self) -> Dict[str, Any]:
        return {"type": "image_url", "image_url": self.url}


UserContent = Union[TextContent, ImageContent]


@dataclass(frozen=True)
class ToolCall:
    """A function call emitted by the assistant.

    ``arguments`` is the serialized argument string exactly as produced by
    the model; it is never parsed here.
    """
    id: str
    name: str
    arguments: str
    type: ClassVar[str] = "function"

    def to_wire(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "function": {"name": self.name, "arguments": self.arguments},
        }


@dataclass(frozen=True)
class SystemMessage:
    content: str
    role: ClassVar[str] = "system"

    def to_wire(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class UserMessage:
    content: Tuple[UserContent, ...]
    role: ClassVar[str] = "user"

    def __post_init__(self) -> None:
        parts = tuple(self.content)
        for part in parts:
            if not isinstance(part, (TextContent, ImageContent)):
                raise InvalidPromptError(part, f"unsupported user content part {type(part).__name__}")
        object.__setattr__(self, "content", parts)

    def to_wire(self) -> Dict[str, Any]:
        return {"role": self.role, "content": [part.to_wire() for part in self.content]}


@dataclass(frozen=True)
class AssistantMessage:
    content: str = ""
    prefix: Optional[bool] = None
    tool_calls: Optional[Tuple[ToolCall, ...]] = None
    role: ClassVar[str] = "assistant"

    def __post_init__(self) -> None:
        # an empty call list and no call list are the same message
        calls = tuple(self.tool_calls) if self.tool_calls else None
        object.__setattr__(self, "tool_calls", calls)

    def to_wire(self) -> Dict[str, Any]:
        wire: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.prefix is not None:
            wire["prefix"] = self.prefix
        if self.tool_calls:
            wire["tool_calls"] = [call.to_wire() for call in self.tool_calls]
        return wire


@dataclass(frozen=True)
class ToolMessage:
    name: str
    content: str
    tool_call_id: str
    role: ClassVar[str] = "tool"

    @classmethod
    def from_result(cls, name: str, tool_call_id: str, result: Any) -> "ToolMessage":
        """Wrap a tool result, serializing non-string results as JSON."""
        content = result if isinstance(result, str) else json.dumps(result)
        return cls(name=name, content=content, tool_call_id=tool_call_id)

    def to_wire(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "name": self.name,
            "content": self.content,
            "tool_call_id": self.tool_call_id,
        }


Message = Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage]
Prompt = List[Message]

MESSAGE_TYPES = (SystemMessage, UserMessage, AssistantMessage, ToolMessage)


def prompt_to_wire(prompt: Sequence[Message]) -> List[Dict[str, Any]]:
    """Project a prompt onto the wire, keeping conversation order."""
    wire: List[Dict[str, Any]] = []
    for message in prompt:
        if not isinstance(message, MESSAGE_TYPES):
            raise InvalidPromptError(message, f"unsupported message type {type(message).__name__}")
        wire.append(message.to_wire())
    return wire


# Parsing wire dicts back into messages.  Each role accepts exactly these keys.
_ALLOWED_KEYS = {
    "system": {"role", "content"},
    "user": {"role", "content"},
    "assistant": {"role", "content", "prefix", "tool_calls"},
    "tool": {"role", "name", "content", "tool_call_id"},
}


def _require_str(data: Dict[str, Any], key: str) -> str:
    if key not in data:
        raise InvalidPromptError(data, f"missing field {key!r}")
    value = data[key]
    if not isinstance(value, str):
        raise InvalidPromptError(data, f"field {key!r} must be a string")
    return value


_PART_KEYS = {
    "text": {"type", "text"},
    "image_url": {"type", "image_url"},
}


def _parse_user_part(part: Any) -> UserContent:
    if not isinstance(part, dict):
        raise InvalidPromptError(part, "user content part must be a mapping")
    if "text" not in part and "image_url" not in part:
        raise InvalidPromptError(part, "user content part has neither 'text' nor 'image_url'")
    part_type = part.get("type")
    if not isinstance(part_type, str) or part_type not in _PART_KEYS:
        raise InvalidPromptError(part, f"unsupported user content type {part_type!r}")
    extra = set(part) - _PART_KEYS[part_type]
    if extra:
        raise InvalidPromptError(part, f"unexpected fields for {part_type} part: {sorted(extra)}")
    if part_type == "text":
        return TextContent(text=_require_str(part, "text"))
    return ImageContent(url=_require_str(part, "image_url"))


def _parse_tool_call(call: Any) -> ToolCall:
    if not isinstance(call, dict):
        raise InvalidPromptError(call, "tool call must be a mapping")
    if call.get("type") != "function":
        raise InvalidPromptError(call, f"unsupported tool call type {call.get('type')!r}")
    function = call.get("function")
    if not isinstance(function, dict):
        raise InvalidPromptError(call, "tool call is missing 'function'")
    return ToolCall(
        id=_require_str(call, "id"),
        name=_require_str(function, "name"),
        arguments=_require_str(function, "arguments"),
    )


def _parse_system(data: Dict[str, Any]) -> SystemMessage:
    return SystemMessage(content=_require_str(data, "content"))


def _parse_user(data: Dict[str, Any]) -> UserMessage:
    content = data.get("content")
    if not isinstance(content, list):
        raise InvalidPromptError(data, "user content must be a list of parts")
    return UserMessage(content=tuple(_parse_user_part(part) for part in content))


def _parse_assistant(data: Dict[str, Any]) -> AssistantMessage:
    content = data.get("content")
    if content is None:
        content = ""
    elif not isinstance(content, str):
        raise InvalidPromptError(data, "assistant content must be a string")
    prefix = data.get("prefix")
    if prefix is not None and not isinstance(prefix, bool):
        raise InvalidPromptError(data, "field 'prefix' must be a boolean")
    raw_calls = data.get("tool_calls")
    if raw_calls is not None and not isinstance(raw_calls, list):
        raise InvalidPromptError(data, "field 'tool_calls' must be a list")
    calls = tuple(_parse_tool_call(call) for call in raw_calls) if raw_calls else None
    return AssistantMessage(content=content, prefix=prefix, tool_calls=calls)


def _parse_tool(data: Dict[str, Any]) -> ToolMessage:
    return ToolMessage(
        name=_require_str(data, "name"),
        content=_require_str(data, "content"),
        tool_call_id=_require_str(data, "tool_call_id"),
    )


_PARSERS = {
    "system": _parse_system,
    "user": _parse_user,
    "assistant": _parse_assistant,
    "tool": _parse_tool,
}


def message_from_wire(data: Any) -> Message:
    """Parse a wire message dict into its message variant.

    Raises
    ------
    InvalidPromptError
        If the role is unknown, a required field is missing or mistyped,
        or the dict carries keys that do not belong to its role.
    """
    if not isinstance(data, dict):
        raise InvalidPromptError(data, "message must be a mapping")
    role = data.get("role")
    if not isinstance(role, str):
        raise InvalidPromptError(data, f"role must be a string, got {role!r}")
    parser = _PARSERS.get(role)
    if parser is None:
        raise InvalidPromptError(data, f"unknown role {role!r}")
    extra = set(data) - _ALLOWED_KEYS[role]
    if extra:
        raise InvalidPromptError(data, f"unexpected fields for {role} message: {sorted(extra)}")
    return parser(data)


def prompt_from_wire(messages: Sequence[Any]) -> Prompt:
    """Parse a list of wire message dicts, preserving order."""
    return [message_from_wire(message) for message in messages]


__all__ = [
    "TextContent",
    "ImageContent",
    "UserContent",
    "ToolCall",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolMessage",
    "Message",
    "Prompt",
    "prompt_to_wire",
    "message_from_wire",
    "prompt_from_wire",
]
