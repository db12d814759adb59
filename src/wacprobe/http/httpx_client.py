# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import socket
import threading
from contextlib import suppress
from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

# httpcore trace events that hand back the stream a request is about to use.
_STREAM_EVENTS = ("connection.connect_tcp.complete", "connection.start_tls.complete")


class _Deadline:
    """
    Total time limit for receiving one response.

    httpx timeouts bound each connect/read/write step on its own, so a server
    that trickles bytes never trips them. This timer shuts the request's socket
    down once ``seconds`` have passed, which unblocks whichever read is pending.
    """

    def __init__(self, seconds: float):
        self.seconds = seconds
        self.expired = False
        self._lock = threading.Lock()
        self._socket: socket.socket | None = None
        self._timer = threading.Timer(seconds, self._expire)
        self._timer.daemon = True

    def start(self) -> None:
        self._timer.start()

    def cancel(self) -> None:
        self._timer.cancel()

    def trace(self, event_name: str, info: dict[str, Any]) -> None:
        if event_name not in _STREAM_EVENTS:
            return
        stream = info.get("return_value")
        sock = stream.get_extra_info("socket") if stream is not None else None
        with self._lock:
            self._socket = sock
            expired = self.expired
        if expired:
            self._shutdown(sock)

    def _expire(self) -> None:
        with self._lock:
            self.expired = True
            sock = self._socket
        self._shutdown(sock)

    @staticmethod
    def _shutdown(sock: socket.socket | None) -> None:
        if sock is None:
            return
        with suppress(OSError):
            sock.shutdown(socket.SHUT_RDWR)


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper.

    The underlying ``httpx.Client`` is created once with redirect following
    disabled and is shared by every requester thread. Responses are streamed so
    the body stays unread until a caller asks for it.

    Connections are not kept alive: every request opens its own socket so the
    deadline can shut it down without touching another request's connection.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.Client(
            follow_redirects=False,
            timeout=self.settings.timeout,
            limits=httpx.Limits(max_connections=None, max_keepalive_connections=0),
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout
        auth = httpx.BasicAuth(*request.auth) if request.auth else None

        logger.debug("GET %s (timeout=%ss)", request.url, timeout)
        deadline = _Deadline(timeout)
        built = self._client.build_request(
            "GET",
            request.url,
            headers=headers,
            timeout=timeout,
            extensions={"trace": deadline.trace},
        )
        deadline.start()
        try:
            resp = self._client.send(built, auth=auth, stream=True)
        except Exception as exc:
            if deadline.expired:
                raise httpx.TimeoutException(f"No response within {timeout}s", request=built) from exc
            raise
        finally:
            deadline.cancel()

        if deadline.expired:
            resp.close()
            raise httpx.TimeoutException(f"No response within {timeout}s", request=built)
        return HttpResponse(
            status_code=resp.status_code,
            headers=resp.headers,
            url=str(resp.url),
            stream=resp,
        )

    def close(self) -> None:
        self._client.close()
