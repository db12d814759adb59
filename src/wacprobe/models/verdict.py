# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Verdict models produced by the classifier."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Verdict(str, Enum):
    GRANTED = "GRANTED"
    DENIED = "DENIED"
    ERROR = "ERROR"


class DenyReason(str, Enum):
    STATUS = "status"
    REDIRECT = "redirect"
    BODY = "body"


class ErrorKind(str, Enum):
    REQUEST = "request"
    BODY_READ = "body_read"


@dataclass(frozen=True)
class VerdictResult:
    url: str
    verdict: Verdict
    reason: DenyReason | None = None
    detail: str | None = None
    error_kind: ErrorKind | None = None
    timed_out: bool = False
    error_message: str | None = None

    @classmethod
    def granted(cls, url: str) -> VerdictResult:
        return cls(url=url, verdict=Verdict.GRANTED)

    @classmethod
    def denied(cls, url: str, reason: DenyReason, detail: str) -> VerdictResult:
        return cls(url=url, verdict=Verdict.DENIED, reason=reason, detail=detail)

    @classmethod
    def request_error(cls, url: str, exc: BaseException, *, timed_out: bool = False) -> VerdictResult:
        return cls(
            url=url,
            verdict=Verdict.ERROR,
            error_kind=ErrorKind.REQUEST,
            timed_out=timed_out,
            error_message=str(exc) or type(exc).__name__,
        )

    @classmethod
    def body_read_error(cls, url: str, exc: BaseException) -> VerdictResult:
        return cls(
            url=url,
            verdict=Verdict.ERROR,
            error_kind=ErrorKind.BODY_READ,
            error_message=str(exc) or type(exc).__name__,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "verdict": self.verdict.value,
            "reason": self.reason.value if self.reason else None,
            "detail": self.detail,
            "error": self.error_kind.value if self.error_kind else None,
            "timed_out": self.timed_out,
            "error_message": self.error_message,
        }


@dataclass
class ProbeSummary:
    """Running tally of verdicts for one probe run."""

    granted: int = 0
    denied: int = 0
    errors: int = 0
    timed_out: int = 0

    @property
    def total(self) -> int:
        return self.granted + self.denied + self.errors

    def add(self, result: VerdictResult) -> None:
        if result.verdict is Verdict.GRANTED:
            self.granted += 1
        elif result.verdict is Verdict.DENIED:
            self.denied += 1
        else:
            self.errors += 1
        if result.timed_out:
            self.timed_out += 1
