"""Prompt enhancement via the Gemini text models."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Any, Callable, Optional

from google.genai import types

from modules.optimization.prompt_templates import PromptTemplate, fill_template
from modules.services.errors import (
    CommunicationError,
    EmptyResultError,
    PromptMatrixError,
)
from modules.services.gemini_client import GeminiClient
from modules.services.history_service import HistoryStore

logger = logging.getLogger(__name__)

NOT_INITIALIZED_MESSAGE = (
    "Gemini AI client has not been initialized. Please check your API key configuration."
)

REFINE_PROMPT = """You are an expert AI prompt editor. Your sole task is to rewrite an existing AI prompt based on a specific user instruction. You must integrate the user's requested change seamlessly into the prompt, enhancing it while preserving its core idea.

**Crucial Instructions:**
-   Analyze the **Existing Prompt** and the **User's Refinement Instruction** carefully.
-   Rewrite the entire prompt to incorporate the instruction.
-   Output ONLY the new, rewritten prompt.
-   Do NOT include any conversational text, explanations, apologies, or labels like "New Prompt:". The output must be ready to be copied and used directly.
-   If the instruction is in Hinglish (e.g., "isko thoda aur creative banao"), apply its meaning to the English prompt and output the newly refined English prompt.

**Existing Prompt:**
---
{current}
---

**User's Refinement Instruction:**
---
{instruction}
---

Now, generate the new, rewritten prompt."""

SUGGESTION_PROMPT = """You are an AI Prompt Ideator. Your task is to analyze the following prompt and generate 3-4 specific, creative, and actionable suggestions for how to modify it. These suggestions will be presented to a user as one-click buttons to refine their prompt.

**Existing Prompt:**
---
{prompt}
---

**Instructions for generating suggestions:**
1.  **Read the prompt carefully** to understand its subject, style, and intent.
2.  **Generate 3 or 4 distinct ideas.** Each suggestion should offer a noticeable change in direction (a different mood, style, composition, or a surprising new element).
3.  **Phrase each suggestion as a command** starting with a verb. It will be used as an instruction to another AI.
4.  **Keep suggestions concise and clear.**
5.  **Examples:** "Set the scene during a solar eclipse", "Change the art style to nostalgic 90s anime", "Add a mysterious, glowing artifact in the foreground".

Respond in the specified JSON format only."""

CORRECTION_PROMPT = """You are a proofreader. Correct all spelling and grammar mistakes in the following text. Return only the corrected text, without any additional explanations, headers, or formatting.

Original Text:
---
{text}
---

Corrected Text:"""

SUGGESTIONS_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "suggestions": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.STRING),
        )
    },
    required=["suggestions"],
)

MAX_SUGGESTIONS = 4


@dataclass(slots=True)
class ComparisonResult:
    """Enhancements of the same input from both model variants."""

    primary: str
    secondary: str


@dataclass(slots=True)
class EnhancementResult:
    """Outcome of one enhance action as shown to the user."""

    original: str
    enhanced: str
    template_name: str
    secondary: Optional[str] = None


class PromptEnhancer:
    """Fills templates and asks the remote model for an enhanced prompt."""

    def __init__(
        self,
        client: Optional[GeminiClient],
        history: Optional[HistoryStore] = None,
        primary_model: Optional[str] = None,
        secondary_model: Optional[str] = None,
        utility_model: Optional[str] = None,
    ) -> None:
        self.client = client
        self.history = history
        config = client.config if client is not None else None
        self.primary_model = primary_model or (config.primary_model if config else "gemini-2.5-pro")
        self.secondary_model = secondary_model or (
            config.secondary_model if config else "gemini-2.5-flash"
        )
        self.utility_model = utility_model or (config.utility_model if config else "gemini-2.5-flash")

    def available_models(self) -> list[str]:
        """Return the model variants in preference order."""
        return [self.primary_model, self.secondary_model]

    def enhance(
        self,
        user_input: str,
        template: PromptTemplate | str,
        model: Optional[str] = None,
    ) -> str:
        """Return the enhanced prompt for ``user_input`` framed by ``template``."""
        body = template.template if isinstance(template, PromptTemplate) else template
        final_prompt = fill_template(body, user_input)
        return self._call_text(
            final_prompt,
            model or self.primary_model,
            "Failed to communicate with the Gemini API. Please check your connection and API key.",
            "Error enhancing prompt",
        )

    def compare(self, user_input: str, template: PromptTemplate | str) -> ComparisonResult:
        """Enhance with both model variants concurrently; any failure fails both."""
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="compare") as executor:
            primary = executor.submit(self.enhance, user_input, template, self.primary_model)
            secondary = executor.submit(self.enhance, user_input, template, self.secondary_model)
            wait([primary, secondary])
        # result() re-raises the worker's exception
        return ComparisonResult(primary=primary.result(), secondary=secondary.result())

    def run(
        self,
        user_input: str,
        template: PromptTemplate,
        comparing: bool = False,
    ) -> EnhancementResult:
        """Enhance, then record the primary result in history on success."""
        original = user_input.strip()
        if comparing:
            comparison = self.compare(original, template)
            enhanced, secondary = comparison.primary, comparison.secondary
        else:
            enhanced, secondary = self.enhance(original, template), None

        if self.history is not None:
            self.history.record(original, enhanced, template.name)
        return EnhancementResult(
            original=original,
            enhanced=enhanced,
            template_name=template.name,
            secondary=secondary,
        )

    def refine(self, current_prompt: str, instruction: str) -> str:
        """Rewrite ``current_prompt`` to follow a user instruction."""
        return self._call_text(
            REFINE_PROMPT.format(current=current_prompt, instruction=instruction),
            self.primary_model,
            "Failed to communicate with the Gemini API for refinement.",
            "Error refining prompt",
        )

    def correct(self, text: str) -> str:
        """Fix spelling and grammar in the user's input."""
        return self._call_text(
            CORRECTION_PROMPT.format(text=text),
            self.utility_model,
            "Failed to correct text using the Gemini API.",
            "Error correcting text",
        )

    def suggest(self, enhanced_prompt: str) -> list[str]:
        """Return up to four one-click refinement ideas for a prompt."""
        payload = self._call(
            lambda client: client.generate_json(
                SUGGESTION_PROMPT.format(prompt=enhanced_prompt),
                SUGGESTIONS_SCHEMA,
                model=self.utility_model,
            ),
            "Failed to get suggestions from the API.",
            "Error getting suggestions",
        )
        suggestions = payload.get("suggestions") if isinstance(payload, dict) else None
        if not isinstance(suggestions, list):
            return []
        cleaned = [item.strip() for item in suggestions if isinstance(item, str) and item.strip()]
        return cleaned[:MAX_SUGGESTIONS]

    # Internal helpers ---------------------------------------------------------
    def _call_text(self, prompt: str, model: str, failure: str, log_prefix: str) -> str:
        text = self._call(
            lambda client: client.generate_text(prompt, model=model),
            failure,
            log_prefix,
        )
        if not text:
            raise EmptyResultError("The API returned an empty response. Please try again.")
        return text

    def _call(self, request: Callable[[GeminiClient], Any], failure: str, log_prefix: str) -> Any:
        if self.client is None:
            raise CommunicationError(NOT_INITIALIZED_MESSAGE)
        try:
            return request(self.client)
        except PromptMatrixError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("%s: %s", log_prefix, exc)
            raise CommunicationError(failure) from exc
