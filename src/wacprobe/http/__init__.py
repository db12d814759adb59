# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import BytesBody, StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import normalize_headers
from .httpx_client import HttpxClient
from .models import BodyStream, Headers, HttpRequest, HttpResponse

__all__ = [
    "BodyStream",
    "BytesBody",
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "create_default_http_client",
    "normalize_headers",
]
