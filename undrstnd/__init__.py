from .provider import create_undrstnd, undrstnd, Undrstnd, UndrstndProvider
from .chat_model import UndrstndChatLanguageModel
from .settings import UndrstndChatSettings
from .language_model import Mode, GenerateResult
from .prepare_tools import prepare_tools, PreparedTools
from .tools import FunctionTool, ProviderDefinedTool, ToolChoice, CallWarning
from .prompt import (
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ToolMessage,
    TextContent,
    ImageContent,
    ToolCall,
    prompt_to_wire,
    message_from_wire,
)
from .error import UndrstndErrorData, decode_error, failed_response_handler
from .exceptions import (
    UndrstndError,
    APICallError,
    ErrorSchemaMismatch,
    InvalidPromptError,
    UnsupportedToolChoiceError,
    UnsupportedFunctionalityError,
    LoadAPIKeyError,
)
from .logger import configure_logging

__all__ = [
    "create_undrstnd",
    "undrstnd",
    "Undrstnd",
    "UndrstndProvider",
    "UndrstndChatLanguageModel",
    "UndrstndChatSettings",
    "Mode",
    "GenerateResult",
    "prepare_tools",
    "PreparedTools",
    "FunctionTool",
    "ProviderDefinedTool",
    "ToolChoice",
    "CallWarning",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolMessage",
    "TextContent",
    "ImageContent",
    "ToolCall",
    "prompt_to_wire",
    "message_from_wire",
    "UndrstndErrorData",
    "decode_error",
    "failed_response_handler",
    "UndrstndError",
    "APICallError",
    "ErrorSchemaMismatch",
    "InvalidPromptError",
    "UnsupportedToolChoiceError",
    "UnsupportedFunctionalityError",
    "LoadAPIKeyError",
    "configure_logging",
]
