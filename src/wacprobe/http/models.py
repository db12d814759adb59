# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across wacprobe."""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
from typing import Protocol

from .headers import normalize_headers

Headers = dict[str, str]


class BodyStream(Protocol):
    """An unread response body that holds a network resource until closed."""

    def read(self) -> bytes: ...

    def close(self) -> None: ...


@dataclass
class HttpRequest:
    """Normalized GET request consumed by HttpClient implementations."""

    url: str
    headers: Headers | None = None
    timeout: float | None = None
    auth: tuple[str, str] | None = None


@dataclass(eq=False)
class HttpResponse:
    """
    Response headers plus a live body handle.

    Header names are lowercased on construction; values are kept as sent.

    The body is released exactly once: either by ``read_body`` or by ``close``.
    Later calls to ``close`` are no-ops.
    """

    status_code: int
    headers: Headers = field(default_factory=dict)
    url: str | None = None
    stream: BodyStream | None = field(default=None, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        self.headers = normalize_headers(self.headers)

    @property
    def is_closed(self) -> bool:
        return self._closed

    def header(self, name: str, default: str = "") -> str:
        return self.headers.get(name.lower(), default)

    @property
    def location(self) -> str:
        return self.header("location")

    def read_body(self) -> bytes:
        """Read the whole body and release it, even when the read fails."""
        if self._closed:
            raise RuntimeError("response body already released")
        try:
            return self.stream.read() if self.stream is not None else b""
        finally:
            self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self.stream is not None:
            with suppress(Exception):
                self.stream.close()
