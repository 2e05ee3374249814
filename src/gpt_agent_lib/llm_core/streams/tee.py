"""Forking of a single-producer async stream into independent consumers."""

from __future__ import annotations

import asyncio
import inspect
from collections import deque
from typing import Any, AsyncIterable, AsyncIterator, Deque, Generic, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class _SharedSource(Generic[T]):
    """Pulls the underlying iterator on demand and fans every item out to all attached buffers."""

    def __init__(self, source: AsyncIterable[T], n: int) -> None:
        self._source = source
        self._iterator: AsyncIterator[T] = source.__aiter__()
        self._buffers: List[Optional[Deque[T]]] = [deque() for _ in range(n)]
        self._lock = asyncio.Lock()
        self._exhausted = False
        self._error: Optional[BaseException] = None

    async def next_for(self, index: int) -> T:
        buffer = self._buffers[index]
        if buffer is None:
            raise StopAsyncIteration
        if not buffer:
            async with self._lock:
                # Another copy may have pulled while we were waiting for the lock.
                if not buffer:
                    await self._pull()
        if buffer:
            return buffer.popleft()
        if self._error is not None:
            raise self._error
        raise StopAsyncIteration

    async def _pull(self) -> None:
        if self._exhausted:
            return
        try:
            item = await self._iterator.__anext__()
        except StopAsyncIteration:
            self._exhausted = True
            return
        except Exception as exc:
            self._exhausted = True
            self._error = exc
            return
        for buffer in self._buffers:
            if buffer is not None:
                buffer.append(item)

    async def detach(self, index: int) -> None:
        """Stop buffering for one copy; close the source once no copy is left."""
        self._buffers[index] = None
        if any(buffer is not None for buffer in self._buffers):
            return
        async with self._lock:
            if self._exhausted:
                return
            self._exhausted = True
            await _close(self._source, self._iterator)


async def _close(source: Any, iterator: Any) -> None:
    # OpenAI streams expose close(), async generators aclose()
    closer = getattr(source, "close", None) or getattr(iterator, "aclose", None)
    if closer is None:
        return
    result = closer()
    if inspect.isawaitable(result):
        await result


class TeeIterator(Generic[T]):
    """One consumer view of a forked stream."""

    def __init__(self, shared: _SharedSource[T], index: int) -> None:
        self._shared = shared
        self._index = index

    def __aiter__(self) -> "TeeIterator[T]":
        return self

    async def __anext__(self) -> T:
        return await self._shared.next_for(self._index)

    async def aclose(self) -> None:
        """Abandon this copy. The source is closed when every copy has been closed."""
        await self._shared.detach(self._index)


def tee(source: AsyncIterable[T], n: int = 2) -> Tuple[TeeIterator[T], ...]:
    """Split one async iterable into ``n`` independently drainable iterators.

    Every copy observes the items of ``source`` in the same order. The source is
    read lazily by whichever copy first asks for a given position; items are
    buffered for the copies that have not reached that position yet. If the
    source fails, each copy re-raises the error after draining the items that
    came before it.

    Args:
        source: The single-producer stream to fork.
        n: Number of copies.

    Returns:
        A tuple of ``n`` async iterators.
    """
    if n < 1:
        raise ValueError("n must be at least 1")
    shared: _SharedSource[T] = _SharedSource(source, n)
    return tuple(TeeIterator(shared, index) for index in range(n))
