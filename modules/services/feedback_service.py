"""AI-assisted triage of user feedback."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from google.genai import types

from modules.services.errors import (
    CommunicationError,
    MalformedResponseError,
    PromptMatrixError,
)
from modules.services.gemini_client import GeminiClient

logger = logging.getLogger(__name__)


class FeedbackCategory(str, Enum):
    BUG_REPORT = "Bug Report"
    FEATURE_REQUEST = "Feature Request"
    GENERAL_COMMENT = "General Comment"
    PRAISE = "Praise"
    UI_UX_IMPROVEMENT = "UI/UX Improvement"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True, slots=True)
class FeedbackResult:
    category: FeedbackCategory
    summary: str
    priority: Priority


FEEDBACK_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "category": types.Schema(
            type=types.Type.STRING,
            enum=[category.value for category in FeedbackCategory],
        ),
        "summary": types.Schema(type=types.Type.STRING),
        "priority": types.Schema(
            type=types.Type.STRING,
            enum=[priority.value for priority in Priority],
        ),
    },
    required=["category", "summary", "priority"],
)

FEEDBACK_PROMPT = """You are an AI assistant responsible for processing user feedback for a web application called "PromptMatrix". Your task is to analyze the feedback, categorize it, provide a brief summary, and assign a priority level.

**User Information:**
- Name: {name}

**User Feedback:**
---
{feedback}
---

**Instructions:**
1.  **Analyze the feedback's sentiment and content.**
2.  **Categorize the feedback** into one of the following: {categories}.
3.  **Summarize the core message** of the feedback in one short sentence.
4.  **Assign a priority level:** "High", "Medium", or "Low". High priority should be for critical bugs or major feature requests.
5.  **Respond ONLY with a JSON object** in the specified format. Do not include any other text, explanations, or markdown.
"""


def _enum_value(enum_cls: type[Enum], raw: Any, field_name: str) -> Any:
    if not isinstance(raw, str):
        raise MalformedResponseError(f"Feedback response field '{field_name}' must be a string")
    wanted = raw.strip().lower()
    for member in enum_cls:
        if member.value.lower() == wanted:
            return member
    raise MalformedResponseError(f"Feedback response has unknown {field_name} '{raw}'")


def parse_feedback_result(payload: Any) -> FeedbackResult:
    """Validate a decoded classifier response against the closed value sets."""
    if not isinstance(payload, dict):
        raise MalformedResponseError("Feedback response must be a JSON object")
    missing = [key for key in ("category", "summary", "priority") if key not in payload]
    if missing:
        raise MalformedResponseError(f"Feedback response is missing fields: {', '.join(missing)}")

    summary = payload["summary"]
    if not isinstance(summary, str) or not summary.strip():
        raise MalformedResponseError("Feedback response has an empty summary")

    return FeedbackResult(
        category=_enum_value(FeedbackCategory, payload["category"], "category"),
        summary=summary.strip(),
        priority=_enum_value(Priority, payload["priority"], "priority"),
    )


class FeedbackClassifier:
    """Sends free-text feedback for categorization."""

    def __init__(self, client: Optional[GeminiClient], model: Optional[str] = None) -> None:
        self.client = client
        self.model = model

    def classify(self, name: str, feedback: str) -> FeedbackResult:
        if self.client is None:
            raise CommunicationError(
                "Gemini AI client has not been initialized. Please check your API key configuration."
            )
        prompt = FEEDBACK_PROMPT.format(
            name=(name or "").strip() or "Anonymous",
            feedback=feedback,
            categories=", ".join(f'"{category.value}"' for category in FeedbackCategory),
        )
        try:
            payload = self.client.generate_json(prompt, FEEDBACK_SCHEMA, model=self.model)
        except PromptMatrixError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Error processing feedback: %s", exc)
            raise CommunicationError("Failed to process feedback using the Gemini API.") from exc

        result = parse_feedback_result(payload)
        logger.info("Feedback classified as %s (%s)", result.category.value, result.priority.value)
        return result
