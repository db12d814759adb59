# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Classifier stage.

Rules are checked in a fixed order and the first match wins: status code,
then redirect location, then body substring. Status and redirect only look at
headers; the body is read last and only when a body rule is configured.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..config import DetectionRules
from ..models import DenyReason, PipelineRecord, VerdictResult
from ..pipeline import Channel, spawn
from .report import VerdictReporter

logger = logging.getLogger(__name__)


class Classifier:
    def __init__(self, rules: DetectionRules):
        self.rules = rules
        self._body_needle = rules.body.encode("utf-8") if rules.body else None

    def classify(self, record: PipelineRecord) -> VerdictResult:
        if record.error is not None:
            return VerdictResult.request_error(record.url, record.error, timed_out=record.timed_out)

        response = record.response
        rules = self.rules

        if rules.status is not None and response.status_code == rules.status:
            return VerdictResult.denied(record.url, DenyReason.STATUS, str(response.status_code))

        if rules.redirect:
            location = response.location
            if location == rules.redirect:
                return VerdictResult.denied(record.url, DenyReason.REDIRECT, location)

        if self._body_needle is not None:
            try:
                body = response.read_body()
            except Exception as exc:  # noqa: BLE001
                logger.warning("Could not read body for %s: %s", record.url, exc)
                return VerdictResult.body_read_error(record.url, exc)
            if self._body_needle in body:
                return VerdictResult.denied(record.url, DenyReason.BODY, rules.body)

        return VerdictResult.granted(record.url)


def classify(
    records: Iterable[PipelineRecord],
    rules: DetectionRules,
    reporter: VerdictReporter,
    *,
    capacity: int = 1,
) -> Channel[PipelineRecord]:
    """Start the classifier thread; every input record is forwarded unchanged."""
    classifier = Classifier(rules)
    out: Channel[PipelineRecord] = Channel(capacity)

    def run() -> None:
        try:
            for record in records:
                try:
                    reporter.report(classifier.classify(record))
                except Exception as exc:  # noqa: BLE001
                    logger.exception("Classifying %s failed: %s", record.url, exc)
                out.send(record)
        finally:
            out.close()

    spawn(run, name="classifier")
    return out


__all__ = ["Classifier", "classify"]
