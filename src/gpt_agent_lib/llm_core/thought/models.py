"""Result types of a single protocol call."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, AsyncIterable, AsyncIterator, List, Literal, Tuple, Union

from ..exceptions import ProtocolError, StreamConsumedError
from ..logger import get_logger
from ..tools import Action

logger = get_logger(__name__)


class ThoughtStream:
    """Single-pass wrapper around a provider's incremental response.

    Iterating with ``async for`` yields the text fragments of the answer. The raw
    chunks are available through :meth:`chunks`. Either way the stream can only be
    drained once.

    Usage:
        async for text in thought.stream:
            print(text, end="")
    """

    def __init__(self, source: AsyncIterable[Any]) -> None:
        """Initialize with the provider's chunk stream.

        Args:
            source: Async iterable of chat completion chunks.
        """
        self._source = source
        self._consumed = False

    @property
    def consumed(self) -> bool:
        return self._consumed

    async def chunks(self) -> AsyncIterator[Any]:
        """Yield the raw chunks of the response, in order."""
        if self._consumed:
            raise StreamConsumedError("Stream has already been consumed.")
        self._consumed = True
        async for chunk in self._source:
            yield chunk

    async def texts(self) -> AsyncIterator[str]:
        """Yield the non-empty text fragments of the response.

        Raises:
            ProtocolError: If a chunk carries no choices.
        """
        async for chunk in self.chunks():
            if not chunk.choices:
                msg = "Empty choices in chunk"
                logger.error(msg)
                raise ProtocolError(msg)
            content = chunk.choices[0].delta.content
            if content:
                yield content

    def __aiter__(self) -> AsyncIterator[str]:
        return self.texts()

    async def collect(self) -> str:
        """Drain the stream and return the full text."""
        parts: List[str] = []
        async for text in self.texts():
            parts.append(text)
        return "".join(parts)


@dataclass(frozen=True)
class MessageThought:
    """The model answered with a complete message."""

    text: str
    kind: Literal["message"] = field(default="message", init=False)


@dataclass(frozen=True)
class StreamThought:
    """The model answers incrementally; drain ``stream`` to read it."""

    stream: ThoughtStream
    kind: Literal["stream"] = field(default="stream", init=False)


@dataclass(frozen=True)
class ActionsThought:
    """The model asked for tool invocations, in request order."""

    actions: Tuple[Action, ...] = ()
    kind: Literal["actions"] = field(default="actions", init=False)


Thought = Union[MessageThought, StreamThought, ActionsThought]
