# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""The per-URL unit that flows through the probe pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import is_timeout
from ..http.models import HttpResponse


@dataclass(frozen=True, eq=False)
class PipelineRecord:
    """Carries either a response or an error for one URL, never both."""

    url: str
    response: HttpResponse | None = None
    error: BaseException | None = None

    def __post_init__(self) -> None:
        if (self.response is None) == (self.error is None):
            raise ValueError("exactly one of response or error must be set")

    @property
    def timed_out(self) -> bool:
        return is_timeout(self.error)

    def release(self) -> None:
        """Release the response body if one is held; safe to call repeatedly."""
        if self.response is not None:
            self.response.close()
