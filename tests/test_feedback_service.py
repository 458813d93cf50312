"""FeedbackClassifier unit tests."""

from __future__ import annotations

import json

import pytest

from modules.services.errors import CommunicationError, MalformedResponseError
from modules.services.feedback_service import (
    FeedbackCategory,
    FeedbackClassifier,
    Priority,
    parse_feedback_result,
)


def test_classify_returns_typed_result(gemini_client, fake_sdk):
    fake_sdk.models.respond(
        None,
        json.dumps({"category": "Bug Report", "summary": "History is lost.", "priority": "High"}),
    )

    result = FeedbackClassifier(gemini_client).classify("Asha", "My history vanished after reload")

    assert result.category is FeedbackCategory.BUG_REPORT
    assert result.priority is Priority.HIGH
    assert result.summary == "History is lost."
    call = fake_sdk.models.calls[0]
    assert "Asha" in call["contents"]
    assert call["config"].response_mime_type == "application/json"


def test_blank_name_is_anonymous(gemini_client, fake_sdk):
    fake_sdk.models.respond(
        None,
        json.dumps({"category": "Praise", "summary": "Loves it.", "priority": "Low"}),
    )

    FeedbackClassifier(gemini_client).classify("  ", "Great app")

    assert "Name: Anonymous" in fake_sdk.models.calls[0]["contents"]


@pytest.mark.parametrize(
    "payload",
    [
        {"category": "Praise", "summary": "ok"},
        {"summary": "ok", "priority": "Low"},
        {"category": "Praise", "summary": "", "priority": "Low"},
        {"category": "Complaint", "summary": "ok", "priority": "Low"},
        {"category": "Praise", "summary": "ok", "priority": "Urgent"},
        ["not", "an", "object"],
    ],
)
def test_invalid_payloads_are_malformed(payload):
    with pytest.raises(MalformedResponseError):
        parse_feedback_result(payload)


def test_values_are_matched_case_insensitively():
    result = parse_feedback_result({"category": "ui/ux improvement", "summary": " Fix it ", "priority": "medium"})

    assert result.category is FeedbackCategory.UI_UX_IMPROVEMENT
    assert result.priority is Priority.MEDIUM
    assert result.summary == "Fix it"


def test_remote_failure_is_communication_error(gemini_client, fake_sdk):
    fake_sdk.models.respond(None, RuntimeError("timeout"))

    with pytest.raises(CommunicationError):
        FeedbackClassifier(gemini_client).classify("", "text")
