"""Expose the Thought result variants returned by model services."""

from .models import Thought, MessageThought, StreamThought, ActionsThought, ThoughtStream

__all__ = [
    "Thought",
    "MessageThought",
    "StreamThought",
    "ActionsThought",
    "ThoughtStream",
]
