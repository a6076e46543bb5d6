"""Abstract interface for language models.

This module defines the vendor-neutral :class:`LanguageModel` base class
and the request/result shapes shared by every implementation.  A model
receives a prompt (see :mod:`undrstnd.prompt`) and a :class:`Mode`
describing what kind of output is wanted, and returns a
:class:`GenerateResult`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .prompt import Message, ToolCall
from .tools import CallWarning, FunctionTool, ToolChoice, ToolDefinition


@dataclass(frozen=True)
class Mode:
    """Generation mode.

    ``regular`` offers ``tools`` under ``tool_choice``; ``object-json``
    asks for a JSON object; ``object-tool`` forces a call to ``tool`` to
    obtain structured output.
    """
    type: str
    tools: Optional[Sequence[ToolDefinition]] = None
    tool_choice: Optional[ToolChoice] = None
    tool: Optional[FunctionTool] = None

    @classmethod
    def regular(cls, tools=None, tool_choice=None) -> "Mode":
        return cls("regular", tools=tools, tool_choice=tool_choice)

    @classmethod
    def object_json(cls) -> "Mode":
        return cls("object-json")

    @classmethod
    def object_tool(cls, tool: FunctionTool) -> "Mode":
        return cls("object-tool", tool=tool)


@dataclass
class GenerateResult:
    """Outcome of a non-streaming generation call."""
    text: Optional[str]
    tool_calls: List[ToolCall]
    finish_reason: str
    usage: Dict[str, Optional[int]]
    raw_call: Dict[str, Any]
    warnings: List[CallWarning] = field(default_factory=list)
    response: Dict[str, Any] = field(default_factory=dict)


class LanguageModel(ABC):
    """Abstract base class for language models."""

    specification_version = "v1"
    provider: str
    model_id: str

    @abstractmethod
    def do_generate(
        self,
        prompt: Sequence[Message],
        mode: Optional[Mode] = None,
        **call_settings: Any,
    ) -> GenerateResult:
        """Generate a complete response.

        Parameters
        ----------
        prompt : sequence of messages
            The conversation, in order.
        mode : Mode, optional
            Output mode; defaults to a regular call without tools.
        **call_settings : Any
            Sampling options such as ``max_tokens``, ``temperature``,
            ``top_p`` or ``seed``.  Unsupported ones are reported as
            warnings in the result.
        """
        raise NotImplementedError

    @abstractmethod
    def do_stream(
        self,
        prompt: Sequence[Message],
        mode: Optional[Mode] = None,
        **call_settings: Any,
    ) -> Any:
        raise NotImplementedError


__all__ = ["Mode", "GenerateResult", "LanguageModel"]
