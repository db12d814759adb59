# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for wacprobe."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .record import PipelineRecord
from .verdict import DenyReason, ErrorKind, ProbeSummary, Verdict, VerdictResult

__all__ = [
    "DenyReason",
    "ErrorKind",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "PipelineRecord",
    "ProbeSummary",
    "Verdict",
    "VerdictResult",
]
