# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Requester stage: one GET per URL, one record per request."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..config import ProbeConfig
from ..http.client import HttpClient
from ..http.models import HttpRequest
from ..models import PipelineRecord
from ..pipeline import Channel, spawn

logger = logging.getLogger(__name__)


def build_request(url: str, config: ProbeConfig) -> HttpRequest:
    headers: dict[str, str] = {}
    if config.cookie:
        headers["Cookie"] = config.cookie
    auth = (config.auth.username, config.auth.password) if config.auth else None
    return HttpRequest(url=url, headers=headers, timeout=config.timeout, auth=auth)


def request_url(url: str, client: HttpClient, config: ProbeConfig) -> PipelineRecord:
    """Issue the request and wrap the outcome; transport failures become the record's error."""
    try:
        response = client.request(build_request(url, config))
    except Exception as exc:  # noqa: BLE001
        logger.debug("Request to %s failed: %s: %s", url, type(exc).__name__, exc)
        return PipelineRecord(url=url, error=exc)
    return PipelineRecord(url=url, response=response)


def send(urls: Iterable[str], client: HttpClient, config: ProbeConfig, *, capacity: int = 1) -> Channel[PipelineRecord]:
    """Start a requester thread draining ``urls``; returns its result channel."""
    out: Channel[PipelineRecord] = Channel(capacity)

    def run() -> None:
        try:
            for url in urls:
                out.send(request_url(url, client, config))
        finally:
            out.close()

    spawn(run, name="requester")
    return out


__all__ = ["build_request", "request_url", "send"]
