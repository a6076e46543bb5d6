"""Translate vendor-neutral tools and tool choice into Undrstnd wire fields.

Undrstnd understands ``tool_choice`` values ``"auto"``, ``"none"`` and
``"any"`` only.  The caller-facing vocabulary is larger, so the mapping
is lossy but fixed:

=============  ===============================================
caller         wire
=============  ===============================================
``auto``       ``"auto"``
``none``       ``"none"``
``required``   ``"any"``
``tool(x)``    ``"any"`` with ``tools`` narrowed to ``x`` only
=============  ===============================================

Provider-defined tools are dropped and reported as
``unsupported-tool`` warnings.
"""

from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from .exceptions import UnsupportedToolChoiceError
from .logger import get_logger
from .tools import CallWarning, FunctionTool, ProviderDefinedTool, ToolChoice, ToolDefinition

logger = get_logger()

# Tags with a direct wire value.  ``tool`` is handled separately because it
# also narrows the tool list.
_TOOL_CHOICE_MAP = {
    "auto": "auto",
    "none": "none",
    "required": "any",
}


class PreparedTools(NamedTuple):
    tools: Optional[List[Dict[str, Any]]]
    tool_choice: Optional[str]
    warnings: List[CallWarning]


def _function_to_wire(tool: FunctionTool) -> Dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": tool.parameters,
        },
    }


def prepare_tools(
    tools: Optional[Sequence[ToolDefinition]],
    tool_choice: Optional[ToolChoice] = None,
) -> PreparedTools:
    """Map tools and tool choice onto the ``tools``/``tool_choice`` fields.

    Parameters
    ----------
    tools : sequence of FunctionTool or ProviderDefinedTool, optional
        Tools offered to the model.  ``None`` and an empty sequence both
        mean "no tools"; the API rejects an empty ``tools`` array.
    tool_choice : ToolChoice, optional
        Tool-choice policy.  Ignored when there are no tools.

    Returns
    -------
    PreparedTools
        Wire ``tools`` (or ``None``), wire ``tool_choice`` (or ``None``)
        and the warnings for tools that were dropped.

    Raises
    ------
    UnsupportedToolChoiceError
        If ``tool_choice.type`` is not a known tag.
    """
    warnings: List[CallWarning] = []

    if not tools:
        return PreparedTools(None, None, warnings)

    wire_tools: List[Dict[str, Any]] = []
    for tool in tools:
        if isinstance(tool, ProviderDefinedTool):
            logger.unsupported("tool", f"provider-defined tool {tool.id!r} is not supported")
            warnings.append(CallWarning(type="unsupported-tool", tool=tool))
        else:
            wire_tools.append(_function_to_wire(tool))

    if tool_choice is None:
        return PreparedTools(wire_tools, None, warnings)

    choice_type = tool_choice.type
    if not isinstance(choice_type, str):
        raise UnsupportedToolChoiceError(choice_type)

    if choice_type in _TOOL_CHOICE_MAP:
        return PreparedTools(wire_tools, _TOOL_CHOICE_MAP[choice_type], warnings)

    if choice_type == "tool":
        # no native "force this tool" value: narrow the candidates and require one
        narrowed = [t for t in wire_tools if t["function"]["name"] == tool_choice.tool_name]
        return PreparedTools(narrowed, "any", warnings)

    raise UnsupportedToolChoiceError(choice_type)


__all__ = ["PreparedTools", "prepare_tools"]
