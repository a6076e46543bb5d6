import pytest

from undrstnd.exceptions import UnsupportedToolChoiceError
from undrstnd.prepare_tools import prepare_tools
from undrstnd.tools import CallWarning, FunctionTool, ProviderDefinedTool, ToolChoice


SEARCH = FunctionTool(name="search", description="Search the web", parameters={"type": "object"})
LOOKUP = FunctionTool(name="lookup", parameters={"type": "object", "properties": {"id": {"type": "string"}}})
BUILTIN = ProviderDefinedTool(id="vendor.code_interpreter", name="code_interpreter")


def _names(tools):
    return [t["function"]["name"] for t in tools]


@pytest.mark.parametrize("tools", [None, []])
@pytest.mark.parametrize(
    "choice",
    [None, ToolChoice.auto(), ToolChoice.none(), ToolChoice.required(), ToolChoice.tool("search")],
)
def test_no_tools_drops_tool_choice(tools, choice):
    prepared = prepare_tools(tools, choice)
    assert prepared.tools is None
    assert prepared.tool_choice is None
    assert prepared.warnings == []


def test_empty_tools_with_auto_is_not_echoed():
    tools, tool_choice, warnings = prepare_tools([], ToolChoice.auto())
    assert tools is None
    assert tool_choice is None


def test_function_tool_wire_shape():
    prepared = prepare_tools([SEARCH])
    assert prepared.tools == [
        {
            "type": "function",
            "function": {
                "name": "search",
                "description": "Search the web",
                "parameters": {"type": "object"},
            },
        }
    ]
    assert prepared.tool_choice is None


def test_missing_description_is_kept_as_none():
    prepared = prepare_tools([LOOKUP])
    assert prepared.tools[0]["function"]["description"] is None


@pytest.mark.parametrize(
    "choice, expected",
    [
        (ToolChoice.auto(), "auto"),
        (ToolChoice.none(), "none"),
        (ToolChoice.required(), "any"),
    ],
)
def test_tool_choice_mapping(choice, expected):
    prepared = prepare_tools([SEARCH, LOOKUP], choice)
    assert prepared.tool_choice == expected
    assert _names(prepared.tools) == ["search", "lookup"]


def test_specific_tool_narrows_and_forces_any():
    prepared = prepare_tools([SEARCH, LOOKUP], ToolChoice.tool("lookup"))
    assert _names(prepared.tools) == ["lookup"]
    assert prepared.tools[0]["function"]["parameters"] == LOOKUP.parameters
    assert prepared.tool_choice == "any"


def test_specific_tool_without_match_gives_empty_list():
    prepared = prepare_tools([SEARCH, LOOKUP], ToolChoice.tool("missing"))
    assert prepared.tools == []
    assert prepared.tool_choice == "any"


def test_provider_defined_tools_become_warnings():
    other = ProviderDefinedTool(id="vendor.web", name="web", args={"depth": 2})
    prepared = prepare_tools([BUILTIN, SEARCH, other, LOOKUP])

    assert _names(prepared.tools) == ["search", "lookup"]
    assert prepared.warnings == [
        CallWarning(type="unsupported-tool", tool=BUILTIN),
        CallWarning(type="unsupported-tool", tool=other),
    ]


def test_only_provider_defined_tools_still_sends_tool_choice():
    prepared = prepare_tools([BUILTIN], ToolChoice.auto())
    assert prepared.tools == []
    assert prepared.tool_choice == "auto"
    assert len(prepared.warnings) == 1


def test_provider_defined_tool_is_logged(caplog):
    with caplog.at_level("WARNING", logger="undrstnd"):
        prepare_tools([BUILTIN])
    assert "vendor.code_interpreter" in caplog.text


def test_unknown_tool_choice_raises():
    with pytest.raises(UnsupportedToolChoiceError) as excinfo:
        prepare_tools([SEARCH], ToolChoice("sometimes"))
    assert excinfo.value.choice_type == "sometimes"
    assert "sometimes" in str(excinfo.value)


@pytest.mark.parametrize("choice_type", [["auto"], None, 3])
def test_non_string_tool_choice_raises(choice_type):
    with pytest.raises(UnsupportedToolChoiceError):
        prepare_tools([SEARCH], ToolChoice(choice_type))
