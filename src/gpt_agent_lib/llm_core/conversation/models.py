"""Transcript bookkeeping: the conversation and its user/assistant interactions."""

import json
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence
from uuid import uuid4

from pydantic import BaseModel, Field

from ..exceptions import InteractionError
from ..logger import get_logger
from ..messages import ChatMessage

logger = get_logger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Interaction(BaseModel):
    """Pairs a user message with the assistant message that answers it.

    Attributes:
        input_message: The user message that opened the interaction.
        output_message: The assistant answer, unset until the turn is answered.
        goal: Optional label supplied by the caller (e.g. an agent's goal).
    """

    input_message: ChatMessage
    output_message: Optional[ChatMessage] = None
    goal: Optional[str] = None

    @property
    def is_answered(self) -> bool:
        return self.output_message is not None

    def set_output_message(self, message: ChatMessage) -> None:
        """Attach the answering assistant message.

        Args:
            message: The assistant message.

        Raises:
            InteractionError: If the interaction has already been answered.
        """
        if self.output_message is not None:
            msg = "Interaction already has an output message."
            logger.error(msg)
            raise InteractionError(msg)
        self.output_message = message

    def set_goal(self, goal: Optional[str]) -> None:
        self.goal = goal

    def get_goal(self) -> Optional[str]:
        return self.goal


class Conversation(BaseModel):
    """The ordered transcript of a chat session and its derived interactions.

    ``messages`` is authoritative. ``interactions`` is an index over it that is
    maintained incrementally by :meth:`append_message`: every user message opens an
    interaction, and the next assistant message answers it. The conversation owns
    its message list by copy; message objects are shared by reference with the
    interactions pointing at them.

    Attributes:
        uuid: Identifier of the session, generated once.
        created_at: Creation timestamp as ISO-8601 UTC string.
        messages: The transcript.
        interactions: User/assistant pairings derived from the transcript.
    """

    uuid: str = Field(default_factory=lambda: str(uuid4()))
    created_at: str = Field(default_factory=_utc_timestamp)
    messages: List[ChatMessage] = Field(default_factory=list)
    interactions: List[Interaction] = Field(default_factory=list)

    def model_post_init(self, __context: object) -> None:
        # Never share the caller's list, even if validation handed it through.
        self.messages = list(self.messages)

    def append_message(self, message: ChatMessage) -> "Conversation":
        """Append a message to the transcript.

        User messages open a new interaction, assistant messages answer the current
        one. Messages of any other role are rejected without changing any state.

        Args:
            message: The message to append.

        Returns:
            The conversation itself, for chaining.
        """
        if message.role == "user":
            return self._append_user_message(message)
        if message.role == "assistant":
            return self._append_assistant_message(message)

        logger.error(f"Only user and assistant messages can be appended to the conversation, got '{message.role}'.")
        return self

    def _append_user_message(self, message: ChatMessage) -> "Conversation":
        self.messages.append(message)
        self.interactions.append(Interaction(input_message=message))
        return self

    def _append_assistant_message(self, message: ChatMessage) -> "Conversation":
        self.messages.append(message)
        current = self.get_current_interaction()
        if current is None or current.is_answered:
            # e.g. an agent answering on its own without a pending user turn
            logger.warning("Assistant message has no open interaction; recorded without indexing.")
            return self
        current.set_output_message(message)
        return self

    def get_current_interaction(self) -> Optional[Interaction]:
        """Return the most recent interaction, or None if there is none."""
        if not self.interactions:
            return None
        return self.interactions[-1]

    def get_interaction(self, message: ChatMessage) -> Optional[Interaction]:
        """Find the interaction a message belongs to by comparing text content.

        The scan runs from the newest interaction backwards, so the last match wins.

        Args:
            message: A user or assistant message.

        Returns:
            The matching interaction, or None.
        """
        text = message.get_content_text()
        for interaction in reversed(self.interactions):
            if message.role == "user":
                if interaction.input_message.get_content_text() == text:
                    return interaction
            elif message.role == "assistant" and interaction.output_message is not None:
                if interaction.output_message.get_content_text() == text:
                    return interaction
        return None

    def reset(self, messages: Sequence[ChatMessage]) -> "Conversation":
        """Replace the transcript and drop all interactions.

        Interactions are not rebuilt from the new transcript.

        Args:
            messages: The new transcript. It is copied.

        Returns:
            The conversation itself, for chaining.
        """
        self.messages = list(messages)
        self.interactions.clear()
        return self

    def get_messages(self) -> List[ChatMessage]:
        return list(self.messages)

    def get_uuid(self) -> str:
        return self.uuid

    def get_datetime(self) -> str:
        return self.created_at

    def get_key(self) -> str:
        """Return a unique storage key built from creation time and uuid."""
        return f"conversation_{self.created_at}_{self.uuid}"

    def to_json_string(self, filter: Optional[Callable[[Interaction], bool]] = None) -> str:
        """Export interactions as a compact JSON array.

        Each record has the keys ``goal``, ``user`` and ``assistant``; missing
        values become empty strings. The export is meant for analytics and cannot
        be replayed into a conversation.

        Args:
            filter: Optional predicate selecting the interactions to export.

        Returns:
            The JSON string.
        """
        records = []
        for interaction in self.interactions:
            if filter is not None and not filter(interaction):
                continue
            output = interaction.output_message
            records.append(
                {
                    "goal": interaction.goal or "",
                    "user": interaction.input_message.get_content_text(),
                    "assistant": output.get_content_text() if output is not None else "",
                }
            )
        return json.dumps(records, ensure_ascii=False, separators=(",", ":"))
