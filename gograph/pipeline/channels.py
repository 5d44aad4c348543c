"""Bounded FIFO channels connecting pipeline stages.

A `Channel` is a single-producer / single-consumer queue with a small bound.
A producer that gets ahead of its consumer blocks on `send()` until the
consumer drains, which gives the pipeline backpressure without any pacing
delays. Closing a channel enqueues a sentinel behind the pending items, so
the consumer sees every item before its `async for` loop ends.
"""

import asyncio
from typing import AsyncIterator, Generic, TypeVar

T = TypeVar("T")

_CLOSED = object()


class ChannelClosedError(RuntimeError):
    """Raised when sending on a channel that has been closed."""


class Channel(Generic[T]):
    """Bounded async channel with close-to-drain semantics.

    Example:
        ```python
        channel: Channel[Term] = Channel(capacity=8)

        async def produce():
            for term in terms:
                await channel.send(term)
            await channel.close()

        async def consume():
            async for term in channel:
                ...
        ```
    """

    def __init__(self, capacity: int = 8, name: str = "") -> None:
        if capacity < 1:
            raise ValueError("Channel capacity must be at least 1")
        self.name = name
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=capacity)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def capacity(self) -> int:
        return self._queue.maxsize

    def qsize(self) -> int:
        return self._queue.qsize()

    async def send(self, item: T) -> None:
        if self._closed:
            raise ChannelClosedError(f"Channel {self.name!r} is closed")
        await self._queue.put(item)

    async def close(self) -> None:
        """Close the channel; idempotent."""
        if not self._closed:
            self._closed = True
            await self._queue.put(_CLOSED)

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        item = await self._queue.get()
        if item is _CLOSED:
            # Leave the sentinel for any later iteration
            self._queue.put_nowait(_CLOSED)
            raise StopAsyncIteration
        return item
