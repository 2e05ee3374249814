"""GPT Agent Library - conversation transcripts and a chat model protocol client for LLM agents."""

from .llm_core import (
    ModelService,
    Conversation,
    Interaction,
    ChatMessage,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    TextContentPart,
    ImageContentPart,
    ImageUrl,
    ToolDefinition,
    Action,
    Thought,
    MessageThought,
    StreamThought,
    ActionsThought,
    ThoughtStream,
    LLMCoreError,
    ProtocolError,
    get_logger,
    setup_logging,
)
from .llm_impl.openai_api import GPTModelService, GPTModelServiceConfig

__version__ = "0.1.0"

__all__ = [
    "ModelService",
    "Conversation",
    "Interaction",
    "ChatMessage",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "TextContentPart",
    "ImageContentPart",
    "ImageUrl",
    "ToolDefinition",
    "Action",
    "Thought",
    "MessageThought",
    "StreamThought",
    "ActionsThought",
    "ThoughtStream",
    "LLMCoreError",
    "ProtocolError",
    "get_logger",
    "setup_logging",
    "GPTModelService",
    "GPTModelServiceConfig",
]
