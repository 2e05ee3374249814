"""Public exports for the core conversation and model service abstractions."""

from .base import ModelService, ModelProvider, ResponseType, ToolSpec
from .conversation import Conversation, Interaction
from .exceptions import (
    LLMCoreError,
    ConversationError,
    InteractionError,
    ProtocolError,
    StreamConsumedError,
    ToolValidationError,
)
from .logger import get_logger, setup_logging
from .messages import (
    ChatMessage,
    SystemMessage,
    UserMessage,
    AssistantMessage,
    ContentPart,
    MessageContent,
    TextContentPart,
    ImageContentPart,
    ImageUrl,
)
from .streams import tee
from .thought import Thought, MessageThought, StreamThought, ActionsThought, ThoughtStream
from .tools import ToolDefinition, Action

__all__ = [
    "ModelService",
    "ModelProvider",
    "ResponseType",
    "ToolSpec",
    "Conversation",
    "Interaction",
    "LLMCoreError",
    "ConversationError",
    "InteractionError",
    "ProtocolError",
    "StreamConsumedError",
    "ToolValidationError",
    "get_logger",
    "setup_logging",
    "ChatMessage",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ContentPart",
    "MessageContent",
    "TextContentPart",
    "ImageContentPart",
    "ImageUrl",
    "tee",
    "Thought",
    "MessageThought",
    "StreamThought",
    "ActionsThought",
    "ThoughtStream",
    "ToolDefinition",
    "Action",
]
