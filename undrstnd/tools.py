"""Vendor-neutral tool definitions, tool-choice policies and call warnings.

These are the caller-facing shapes consumed by
:func:`undrstnd.prepare_tools.prepare_tools`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class FunctionTool:
    """A caller-specified function the model may call."""
    name: str
    parameters: Any
    description: Optional[str] = None
    type: str = field(default="function", init=False)


@dataclass(frozen=True)
class ProviderDefinedTool:
    """A vendor built-in tool.  Undrstnd supports none of these."""
    id: str
    name: str
    args: Dict[str, Any] = field(default_factory=dict)
    type: str = field(default="provider-defined", init=False)


ToolDefinition = Union[FunctionTool, ProviderDefinedTool]


@dataclass(frozen=True)
class ToolChoice:
    """Policy governing whether and which tool the model must call.

    ``type`` is one of ``"auto"``, ``"none"``, ``"required"`` or ``"tool"``;
    ``tool_name`` is set only for ``"tool"``.
    """
    type: str
    tool_name: Optional[str] = None

    @classmethod
    def auto(cls) -> "ToolChoice":
        return cls("auto")

    @classmethod
    def none(cls) -> "ToolChoice":
        return cls("none")

    @classmethod
    def required(cls) -> "ToolChoice":
        return cls("required")

    @classmethod
    def tool(cls, name: str) -> "ToolChoice":
        return cls("tool", tool_name=name)


@dataclass(frozen=True)
class CallWarning:
    """A non-fatal notice about input that did not reach the wire.

    ``type`` is ``"unsupported-tool"`` (with ``tool``),
    ``"unsupported-setting"`` (with ``setting`` and optional ``details``)
    or ``"other"`` (with ``message``).
    """
    type: str
    tool: Optional[ToolDefinition] = None
    setting: Optional[str] = None
    details: Optional[str] = None
    message: Optional[str] = None


__all__ = [
    "FunctionTool",
    "ProviderDefinedTool",
    "ToolDefinition",
    "ToolChoice",
    "CallWarning",
]
