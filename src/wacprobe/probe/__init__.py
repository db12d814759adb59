# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe pipeline stages."""

from .classifier import Classifier, classify
from .cleanup import cleanup
from .report import JsonReporter, TextReporter, VerdictReporter, format_verdict
from .requester import build_request, request_url, send
from .runner import run_pipeline
from .source import STDIN_SENTINEL, open_url_source, read_urls

__all__ = [
    "Classifier",
    "JsonReporter",
    "STDIN_SENTINEL",
    "TextReporter",
    "VerdictReporter",
    "build_request",
    "classify",
    "cleanup",
    "format_verdict",
    "open_url_source",
    "read_urls",
    "request_url",
    "run_pipeline",
    "send",
]
