"""Expose provider-agnostic message model types shared by the conversation and providers."""

from .models import (
    Role,
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

__all__ = [
    "Role",
    "ChatMessage",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ContentPart",
    "MessageContent",
    "TextContentPart",
    "ImageContentPart",
    "ImageUrl",
]
