"""Expose the conversation transcript and its interaction index."""

from .models import Conversation, Interaction

__all__ = ["Conversation", "Interaction"]
