# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest

from wacprobe.config import DetectionRules
from wacprobe.http import BytesBody, HttpResponse
from wacprobe.models import DenyReason, ErrorKind, PipelineRecord, Verdict
from wacprobe.probe import Classifier


def _record(url="http://a/", status=200, headers=None, body=b"", read_error=None):
    stream = BytesBody(body, read_error=read_error)
    response = HttpResponse(status_code=status, headers=dict(headers or {}), url=url, stream=stream)
    return PipelineRecord(url=url, response=response), stream


def test_record_requires_exactly_one_of_response_or_error():
    with pytest.raises(ValueError):
        PipelineRecord(url="http://a/")
    with pytest.raises(ValueError):
        PipelineRecord(url="http://a/", response=HttpResponse(status_code=200), error=RuntimeError())


def test_error_record_is_reported_without_evaluating_rules():
    classifier = Classifier(DetectionRules(status=401, redirect="/login", body="denied"))
    result = classifier.classify(PipelineRecord(url="http://a/", error=httpx.ConnectError("refused")))
    assert result.verdict is Verdict.ERROR
    assert result.error_kind is ErrorKind.REQUEST
    assert result.timed_out is False
    assert result.reason is None


def test_timeout_error_is_flagged():
    classifier = Classifier(DetectionRules(status=401))
    result = classifier.classify(PipelineRecord(url="http://a/", error=httpx.ReadTimeout("slow")))
    assert result.verdict is Verdict.ERROR
    assert result.timed_out is True


def test_status_rule_wins_over_redirect_and_body():
    record, stream = _record(status=401, headers={"Location": "/login"}, body=b"access denied")
    result = Classifier(DetectionRules(status=401, redirect="/login", body="access denied")).classify(record)
    assert result.verdict is Verdict.DENIED
    assert result.reason is DenyReason.STATUS
    assert result.detail == "401"
    # The body was never touched; cleanup still owns it.
    assert record.response.is_closed is False
    assert stream.close_calls == 0


def test_redirect_rule_wins_over_body():
    record, _ = _record(status=302, headers={"Location": "/login"}, body=b"access denied")
    result = Classifier(DetectionRules(status=401, redirect="/login", body="access denied")).classify(record)
    assert result.reason is DenyReason.REDIRECT
    assert result.detail == "/login"
    assert record.response.is_closed is False


def test_redirect_rule_is_exact_and_case_sensitive():
    classifier = Classifier(DetectionRules(redirect="/login"))
    for location in ("/Login", "/login/", "http://a/login", ""):
        record, _ = _record(status=302, headers={"Location": location} if location else {})
        assert classifier.classify(record).verdict is Verdict.GRANTED


def test_body_rule_matches_substring_and_closes_body():
    record, stream = _record(body=b"<h1>Sorry, access denied.</h1>")
    result = Classifier(DetectionRules(body="access denied")).classify(record)
    assert result.verdict is Verdict.DENIED
    assert result.reason is DenyReason.BODY
    assert result.detail == "access denied"
    assert record.response.is_closed is True
    assert stream.close_calls == 1


def test_body_rule_is_case_sensitive_and_grants_without_match():
    record, _ = _record(body=b"ACCESS DENIED")
    result = Classifier(DetectionRules(body="access denied")).classify(record)
    assert result.verdict is Verdict.GRANTED
    assert record.response.is_closed is True


def test_body_rule_handles_utf8_substrings():
    record, _ = _record(body="Zugriff verweigert für Gäste".encode("utf-8"))
    result = Classifier(DetectionRules(body="für Gäste")).classify(record)
    assert result.verdict is Verdict.DENIED


def test_body_read_failure_is_an_error_verdict():
    record, stream = _record(read_error=httpx.ReadError("connection reset"))
    result = Classifier(DetectionRules(body="denied")).classify(record)
    assert result.verdict is Verdict.ERROR
    assert result.error_kind is ErrorKind.BODY_READ
    assert record.response.is_closed is True
    assert stream.close_calls == 1


def test_non_matching_status_falls_through_to_granted():
    record, _ = _record(status=200)
    result = Classifier(DetectionRules(status=401)).classify(record)
    assert result.verdict is Verdict.GRANTED
    assert record.response.is_closed is False
