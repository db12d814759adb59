# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Run the real httpx-backed pipeline against a local HTTP server."""

import io
import socket
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import httpx
import pytest

from wacprobe.config import HttpSettings, ProbeConfig
from wacprobe.errors import is_timeout
from wacprobe.http import HttpRequest, HttpxClient
from wacprobe.probe import TextReporter
from wacprobe.runtime import AccessProbe

_PROXY_VARS = ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy")


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):  # noqa: N802
        if self.path == "/slow":
            time.sleep(2)
        if self.path == "/a":
            self._reply(401, b"login required")
        elif self.path == "/redirect":
            self._reply(302, b"", {"Location": "/login"})
        elif self.path == "/denied":
            self._reply(200, b"<p>access denied</p>")
        else:
            self._reply(200, b"<p>welcome</p>")

    def _reply(self, status, body, headers=None):
        try:
            self.send_response(status)
            for name, value in (headers or {}).items():
                self.send_header(name, value)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)
        except OSError:
            pass

    def log_message(self, format, *args):  # noqa: A002
        return


@pytest.fixture
def server(monkeypatch):
    for name in _PROXY_VARS:
        monkeypatch.delenv(name, raising=False)
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{httpd.server_address[1]}"
    finally:
        httpd.shutdown()
        httpd.server_close()


def test_pipeline_against_local_server(server):
    urls = [f"{server}{path}" for path in ("/a", "/b", "/redirect", "/denied", "/slow")]
    config = ProbeConfig.build(status=401, redirect="/login", body="access denied", threads=3, wait_seconds=1)
    out = io.StringIO()

    with AccessProbe(config, reporter=TextReporter(out)) as probe:
        summary = probe.run(urls)

    lines = out.getvalue().splitlines()
    assert sorted(lines) == sorted(
        [
            f"[-] {server}/a: DENIED Status Code (401) returned",
            f"[+] {server}/b: GRANTED ACCESS",
            f"[-] {server}/redirect: DENIED Redirect (/login) returned",
            f"[-] {server}/denied: DENIED Body contains (access denied)",
            f"[-] {server}/slow: Request timed out",
            f"[!] {server}/slow: Error making request",
        ]
    )
    slow = [line for line in lines if line.startswith(("[-] " + server + "/slow", "[!] " + server + "/slow"))]
    assert slow == [f"[-] {server}/slow: Request timed out", f"[!] {server}/slow: Error making request"]
    assert summary.total == 5
    assert summary.timed_out == 1


_DRIPPED_RESPONSE = b"HTTP/1.1 401 Unauthorized\r\nContent-Length: 0\r\nX-Padding: aaaaaaaaaaaaaaaa\r\n\r\n"


def _drip(conn: socket.socket) -> None:
    with conn:
        try:
            request = b""
            while b"\r\n\r\n" not in request:
                chunk = conn.recv(4096)
                if not chunk:
                    return
                request += chunk
            for i in range(len(_DRIPPED_RESPONSE)):
                conn.sendall(_DRIPPED_RESPONSE[i : i + 1])
                time.sleep(0.5)
        except OSError:
            return


@pytest.fixture
def dripping_server(monkeypatch):
    """Server that sends its status line and headers one byte every 0.5s."""
    for name in _PROXY_VARS:
        monkeypatch.delenv(name, raising=False)
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen()

    def accept_loop():
        while True:
            try:
                conn, _ = listener.accept()
            except OSError:
                return
            threading.Thread(target=_drip, args=(conn,), daemon=True).start()

    threading.Thread(target=accept_loop, daemon=True).start()
    try:
        yield f"http://127.0.0.1:{listener.getsockname()[1]}"
    finally:
        listener.close()


def test_httpx_client_deadline_covers_slowly_sent_headers(dripping_server):
    client = HttpxClient(HttpSettings())
    started = time.monotonic()
    try:
        with pytest.raises(httpx.TimeoutException) as excinfo:
            client.request(HttpRequest(url=f"{dripping_server}/", timeout=1.0))
    finally:
        client.close()
    assert is_timeout(excinfo.value)
    assert time.monotonic() - started < 5


def test_pipeline_times_out_on_slowly_sent_headers(dripping_server):
    url = f"{dripping_server}/"
    config = ProbeConfig.build(status=401, threads=2, wait_seconds=1)
    out = io.StringIO()
    started = time.monotonic()

    with AccessProbe(config, reporter=TextReporter(out)) as probe:
        summary = probe.run([url])

    assert out.getvalue().splitlines() == [
        f"[-] {url}: Request timed out",
        f"[!] {url}: Error making request",
    ]
    assert summary.timed_out == 1
    assert time.monotonic() - started < 5
