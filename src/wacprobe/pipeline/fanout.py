# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Generic fan-out/fan-in over channels."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from .channel import Channel, spawn

T = TypeVar("T")


class _ActiveInputs:
    """Countdown of inputs still open; the last one to finish sees ``True``."""

    def __init__(self, count: int):
        self._remaining = count
        self._lock = threading.Lock()

    def finish(self) -> bool:
        with self._lock:
            self._remaining -= 1
            return self._remaining == 0


def split(num: int, factory: Callable[[], Iterable[T]]) -> list[Iterable[T]]:
    """Call ``factory`` ``num`` times and return the resulting streams."""
    if num < 1:
        raise ValueError("split needs at least one stream")
    return [factory() for _ in range(num)]


def merge(streams: Sequence[Iterable[T]], *, capacity: int = 1) -> Channel[T]:
    """
    Combine ``streams`` into a single channel.

    Every element of every input is forwarded exactly once, preserving order
    within each input. The output closes after the last input is exhausted.
    """
    out: Channel[T] = Channel(capacity)
    if not streams:
        out.close()
        return out

    active = _ActiveInputs(len(streams))

    def forward(stream: Iterable[T]) -> None:
        try:
            for item in stream:
                out.send(item)
        finally:
            if active.finish():
                out.close()

    for index, stream in enumerate(streams):
        spawn(forward, stream, name=f"merge-{index}")
    return out


__all__ = ["merge", "split"]
