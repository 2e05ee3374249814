"""Export the exception hierarchy used across the conversation and protocol layers."""

from .exceptions import (
    LLMCoreError,
    ConversationError,
    InteractionError,
    ProtocolError,
    StreamConsumedError,
    ToolValidationError,
)

__all__ = [
    "LLMCoreError",
    "ConversationError",
    "InteractionError",
    "ProtocolError",
    "StreamConsumedError",
    "ToolValidationError",
]
