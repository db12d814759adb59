# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade that owns the shared HTTP client for a probe run."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from contextlib import suppress
from dataclasses import replace

from .config import HttpSettings, ProbeConfig, load_http_settings
from .http.client import HttpClient, create_default_http_client
from .models import ProbeSummary
from .probe.report import TextReporter, VerdictReporter
from .probe.runner import run_pipeline

logger = logging.getLogger(__name__)


class AccessProbe:
    """
    Convenience wrapper that builds one HTTP client and reuses it for every URL.

    The client is created here, before any requester starts, so its redirect
    policy and timeouts are fixed for the whole run.
    """

    def __init__(
        self,
        config: ProbeConfig,
        *,
        http_client: HttpClient | None = None,
        reporter: VerdictReporter | None = None,
        http_settings: HttpSettings | None = None,
    ):
        self.config = config.validate()
        self.http_settings = replace(http_settings or load_http_settings(), timeout=config.timeout)
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.reporter = reporter or TextReporter()

    def run(self, urls: Iterable[str]) -> ProbeSummary:
        run_pipeline(urls, self.http_client, self.config, self.reporter)
        summary = self.reporter.summary
        logger.info(
            "Probed %d URLs: %d granted, %d denied, %d errors (%d timed out)",
            summary.total,
            summary.granted,
            summary.denied,
            summary.errors,
            summary.timed_out,
        )
        return summary

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> AccessProbe:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
