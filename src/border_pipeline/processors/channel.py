"""Bounded, closable FIFO shared between pipeline stages."""

import threading
from collections import deque
from typing import Deque, Generic, Iterator, TypeVar

T = TypeVar("T")


class ChannelClosed(Exception):
    """Raised by ``put`` on a closed channel and by ``get`` once it is drained."""


class BoundedChannel(Generic[T]):
    """
    Thread-safe FIFO with a fixed capacity and an explicit close.

    ``put`` blocks while the channel is full. ``get`` blocks while it is empty
    and still open. After ``close`` no new items are accepted, but items
    already queued are still handed out; ``get`` raises ``ChannelClosed`` only
    once the channel is both closed and empty. Iterating over the channel
    yields items until that point.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Channel capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._items: Deque[T] = deque()
        self._closed = False
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def put(self, item: T) -> None:
        """Append an item, waiting for room if the channel is full."""
        with self._not_full:
            while len(self._items) >= self._capacity and not self._closed:
                self._not_full.wait()
            if self._closed:
                raise ChannelClosed("put on a closed channel")
            self._items.append(item)
            self._not_empty.notify()

    def get(self) -> T:
        """Remove and return the oldest item, waiting while the channel is empty."""
        with self._not_empty:
            while not self._items and not self._closed:
                self._not_empty.wait()
            if not self._items:
                raise ChannelClosed("channel closed and drained")
            item = self._items.popleft()
            self._not_full.notify()
            return item

    def close(self) -> None:
        """Stop accepting items and wake every waiter. Safe to call twice."""
        with self._lock:
            self._closed = True
            self._not_empty.notify_all()
            self._not_full.notify_all()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.get()
            except ChannelClosed:
                return
