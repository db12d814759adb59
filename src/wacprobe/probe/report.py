# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Verdict output: human-readable lines or JSON lines on stdout."""

from __future__ import annotations

import json
import sys
from typing import Protocol, TextIO

from ..models import DenyReason, ErrorKind, ProbeSummary, Verdict, VerdictResult


class VerdictReporter(Protocol):
    summary: ProbeSummary

    def report(self, result: VerdictResult) -> None: ...


def format_verdict(result: VerdictResult) -> list[str]:
    """Return the output lines for one URL, in print order."""
    url = result.url
    if result.verdict is Verdict.ERROR:
        if result.error_kind is ErrorKind.BODY_READ:
            return [f"[!] {url}: Could not read body"]
        lines = [f"[-] {url}: Request timed out"] if result.timed_out else []
        lines.append(f"[!] {url}: Error making request")
        return lines
    if result.verdict is Verdict.DENIED:
        if result.reason is DenyReason.STATUS:
            return [f"[-] {url}: DENIED Status Code ({result.detail}) returned"]
        if result.reason is DenyReason.REDIRECT:
            return [f"[-] {url}: DENIED Redirect ({result.detail}) returned"]
        return [f"[-] {url}: DENIED Body contains ({result.detail})"]
    return [f"[+] {url}: GRANTED ACCESS"]


class _StreamReporter:
    def __init__(self, stream: TextIO | None = None):
        self._stream = stream
        self.summary = ProbeSummary()

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the output.
        return self._stream if self._stream is not None else sys.stdout

    def report(self, result: VerdictResult) -> None:
        self.summary.add(result)
        self._write(result)
        self.stream.flush()

    def _write(self, result: VerdictResult) -> None:
        raise NotImplementedError


class TextReporter(_StreamReporter):
    def _write(self, result: VerdictResult) -> None:
        for line in format_verdict(result):
            self.stream.write(line + "\n")


class JsonReporter(_StreamReporter):
    def _write(self, result: VerdictResult) -> None:
        json.dump(result.to_dict(), self.stream, sort_keys=True)
        self.stream.write("\n")


__all__ = ["JsonReporter", "TextReporter", "VerdictReporter", "format_verdict"]
