# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient implementations."""

from __future__ import annotations

import threading

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class BytesBody:
    """Body stream over a fixed byte string; records how often it was closed."""

    def __init__(self, data: bytes | str = b"", *, read_error: Exception | None = None):
        self._data = data.encode("utf-8") if isinstance(data, str) else bytes(data)
        self._read_error = read_error
        self.close_calls = 0

    def read(self) -> bytes:
        if self._read_error is not None:
            raise self._read_error
        return self._data

    def close(self) -> None:
        self.close_calls += 1


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests.

    Registered values are either a response factory result or an exception to
    raise. A fresh HttpResponse is built per call so bodies are never shared.
    """

    def __init__(self, responses: dict[str, tuple[int, dict[str, str], bytes | str] | Exception] | None = None):
        self._responses = dict(responses or {})
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.bodies: dict[str, BytesBody] = {}
        self.closed = False

    def add(self, url: str, status_code: int, headers: dict[str, str] | None = None, body: bytes | str = b"") -> None:
        self._responses[url] = (status_code, dict(headers or {}), body)

    def fail(self, url: str, exc: Exception) -> None:
        self._responses[url] = exc

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
        entry = self._responses.get(request.url)
        if entry is None:
            raise ConnectionError(f"No stubbed response configured for {request.url}")
        if isinstance(entry, Exception):
            raise entry
        status_code, headers, body = entry
        stream = BytesBody(body)
        with self._lock:
            self.bodies[request.url] = stream
        return HttpResponse(status_code=status_code, headers=dict(headers), url=request.url, stream=stream)

    def close(self) -> None:
        self.closed = True
