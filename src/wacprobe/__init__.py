# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
wacprobe package entrypoint.

wacprobe requests a list of URLs, optionally with a session cookie or basic
auth credentials, and reports which of them grant access according to
configurable denial rules (status code, redirect location, body text). Requests
run on a bounded pool of threads whose results are merged into a single
classifier.
"""

from .config import BasicAuth, DetectionRules, HttpSettings, ProbeConfig, load_http_settings
from .errors import ConfigError, ErrorCategory, SourceError
from .http import HttpClient, HttpRequest, HttpResponse, HttpxClient, create_default_http_client
from .log import setup_logging
from .models import PipelineRecord, ProbeSummary, Verdict, VerdictResult
from .pipeline import Channel, merge, split
from .probe import Classifier, JsonReporter, TextReporter, run_pipeline
from .runtime import AccessProbe
from .version import __version__

__all__ = [
    "AccessProbe",
    "BasicAuth",
    "Channel",
    "Classifier",
    "ConfigError",
    "DetectionRules",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "JsonReporter",
    "PipelineRecord",
    "ProbeConfig",
    "ProbeSummary",
    "SourceError",
    "TextReporter",
    "Verdict",
    "VerdictResult",
    "__version__",
    "create_default_http_client",
    "load_http_settings",
    "merge",
    "run_pipeline",
    "setup_logging",
    "split",
]
