# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Wire the probe pipeline: source -> requesters -> merge -> classifier -> cleanup."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..config import ProbeConfig
from ..errors import SourceError
from ..http.client import HttpClient
from ..pipeline import merge, split
from .classifier import classify
from .cleanup import cleanup
from .report import VerdictReporter
from .requester import send
from .source import read_urls

logger = logging.getLogger(__name__)


def run_pipeline(
    urls: Iterable[str],
    client: HttpClient,
    config: ProbeConfig,
    reporter: VerdictReporter,
) -> None:
    """
    Probe every URL and block until all response bodies are released.

    Raises SourceError once the pipeline has drained if the URL list could not
    be read to the end; URLs read before the failure are still reported.
    """
    source = read_urls(urls)
    streams = split(config.threads, lambda: send(source, client, config))
    classified = classify(merge(streams), config.rules, reporter)
    done = cleanup(classified)
    done.wait()
    logger.debug("Pipeline finished with %d requester threads", config.threads)
    if source.error is not None:
        raise SourceError(f"could not read URL list: {source.error}") from source.error


__all__ = ["run_pipeline"]
