# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Closable bounded channel and thread helper for pipeline stages.

A Channel is a ``queue.Queue`` plus a close marker. Any number of threads may
send, and any number may iterate; each item is delivered to exactly one reader.
Iteration ends for every reader once the channel is closed and drained.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_CLOSED = object()


class ChannelClosed(RuntimeError):
    """Raised when sending on a channel that has been closed."""


class Channel(Generic[T]):
    def __init__(self, capacity: int = 1):
        if capacity < 1:
            raise ValueError("channel capacity must be at least 1")
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=capacity)
        self._lock = threading.Lock()
        self._closed = False
        self._error: BaseException | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def error(self) -> BaseException | None:
        """Exception the producer closed the channel with, if any."""
        return self._error

    def send(self, item: T) -> None:
        """Block until there is room, then enqueue ``item``."""
        if self._closed:
            raise ChannelClosed("send on closed channel")
        self._queue.put(item)

    def close(self, error: BaseException | None = None) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._error = error
        self._queue.put(_CLOSED)

    def __iter__(self) -> Iterator[T]:
        while True:
            item = self._queue.get()
            if item is _CLOSED:
                # Put the marker back so sibling readers also stop.
                self._queue.put(_CLOSED)
                return
            yield item


def spawn(target: Callable[..., Any], *args: Any, name: str | None = None) -> threading.Thread:
    """Start ``target`` on a daemon thread."""
    thread = threading.Thread(target=target, args=args, name=name, daemon=True)
    thread.start()
    return thread


__all__ = ["Channel", "ChannelClosed", "spawn"]
