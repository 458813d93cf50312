"""Callback implementations for the Gradio interface.

Callbacks return plain Python values. ``None`` in an output slot means
"leave the component as it is"; ``layout.py`` maps it to ``gr.update()``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from config.settings import AppConfig
from modules.optimization.prompt_optimizer import PromptEnhancer
from modules.optimization.prompt_templates import (
    LIVE_EXAMPLE_PROMPTS,
    TemplateCatalog,
    find_preset_prompt,
    live_example,
)
from modules.optimization.style_presets import apply_style
from modules.services.errors import ConfigurationError, PromptMatrixError
from modules.services.feedback_service import FeedbackClassifier, FeedbackResult
from modules.services.history_service import ALL_TEMPLATES, HistoryItem, HistoryStore
from modules.services.image_service import ImageGenerator
from modules.services.speech_service import SpeechTranscriber, merge_transcript
from modules.services.storage_service import StorageService
from modules.ui.action_state import ActionRegistry
from modules.utils.image_utils import format_stats

logger = logging.getLogger(__name__)

ACTIONS = (
    "enhance",
    "correct",
    "refine",
    "suggest",
    "image",
    "direct_image",
    "transcribe",
    "feedback",
)

BUSY_MESSAGE = "Still working on the previous request..."


def history_rows(items: list[HistoryItem]) -> list[list[str]]:
    """Flatten history items into table rows."""
    return [[item.template_name, item.original, item.enhanced] for item in items]


def format_feedback(result: FeedbackResult) -> str:
    return (
        "**Thank you for your feedback!**\n\n"
        f"- **Category:** {result.category.value}\n"
        f"- **Priority:** {result.priority.value}\n"
        f"- **Summary:** {result.summary}"
    )


def build_callbacks(
    config: AppConfig,
    enhancer: Optional[PromptEnhancer] = None,
    image_generator: Optional[ImageGenerator] = None,
    classifier: Optional[FeedbackClassifier] = None,
    transcriber: Optional[SpeechTranscriber] = None,
    history: Optional[HistoryStore] = None,
    catalog: Optional[TemplateCatalog] = None,
    storage: Optional[StorageService] = None,
    init_error: Optional[ConfigurationError] = None,
    actions: Optional[ActionRegistry] = None,
) -> dict[str, Callable[..., Any]]:
    """Return a dictionary of Gradio callback functions."""

    templates = catalog or TemplateCatalog()
    store = history if history is not None else (enhancer.history if enhancer else None)
    if store is None:
        store = HistoryStore(None, limit=config.history_limit)
    exporter = storage or StorageService(config.export_dir)
    trackers = actions or ActionRegistry(ACTIONS)

    def _guarded(action: str, work: Callable[[], Any]) -> tuple[bool, Any, str]:
        """Run ``work`` under the action's tracker; convert errors to a message."""
        tracker = trackers[action]
        if not tracker.begin():
            return False, None, BUSY_MESSAGE
        if init_error is not None:
            tracker.fail(str(init_error))
            return False, None, str(init_error)
        try:
            result = work()
        except (PromptMatrixError, ValueError) as exc:
            message = str(exc)
            tracker.fail(message)
            return False, None, message
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected error during %s", action)
            message = f"An unknown error occurred: {exc}"
            tracker.fail(message)
            return False, None, message
        tracker.succeed()
        return True, result, ""

    def _require(service: Any, label: str) -> Any:
        if service is None:
            raise ConfigurationError(f"{label} is not configured.")
        return service

    def startup_message() -> str:
        if init_error is not None:
            return f"**Configuration error:** {init_error}"
        return "Ready."

    # Templates ----------------------------------------------------------------
    def on_category_change(category: str, current_id: str) -> tuple[list[tuple[str, str]], str, str]:
        visible = templates.by_category(category)
        selected = templates.resolve_selection(category, current_id)
        choices = [(template.name, template.id) for template in visible]
        return choices, selected.id, selected.description

    def on_template_change(template_id: str) -> str:
        template = templates.get(template_id)
        return template.description if template else ""

    def on_next_example(index: int) -> tuple[int, str]:
        """Advance the rotating showcase; the index wraps around."""
        next_index = (int(index or 0) + 1) % len(LIVE_EXAMPLE_PROMPTS)
        return next_index, live_example(next_index)

    # Enhancement --------------------------------------------------------------
    def on_enhance(
        user_input: str,
        template_id: str,
        comparing: bool,
    ) -> tuple[Optional[str], Optional[str], Optional[str], str]:
        """Return (original, enhanced, secondary, status)."""
        trimmed = (user_input or "").strip()
        if not trimmed:
            return None, None, None, "Please enter an idea to enhance."
        template = templates.get(template_id)
        if template is None:
            return None, None, None, "Invalid template selected."

        ok, result, message = _guarded(
            "enhance",
            lambda: _require(enhancer, "Prompt enhancement").run(trimmed, template, comparing=bool(comparing)),
        )
        if not ok:
            if message == BUSY_MESSAGE:
                return None, None, None, message
            return trimmed, "", "", message
        return result.original, result.enhanced, result.secondary or "", "Prompt enhanced."

    def on_correct(user_input: str) -> tuple[Optional[str], str]:
        trimmed = (user_input or "").strip()
        if not trimmed:
            return None, "Nothing to correct."
        if trackers["enhance"].pending:
            return None, BUSY_MESSAGE
        ok, corrected, message = _guarded(
            "correct", lambda: _require(enhancer, "Text correction").correct(trimmed)
        )
        if not ok:
            return None, message
        return corrected, "Text corrected."

    def on_refine(enhanced: str, instruction: str) -> tuple[Optional[str], str]:
        if not (enhanced or "").strip():
            return None, "Enhance a prompt before refining it."
        if not (instruction or "").strip():
            return None, "Please describe how the prompt should change."
        ok, refined, message = _guarded(
            "refine",
            lambda: _require(enhancer, "Prompt refinement").refine(enhanced, instruction.strip()),
        )
        if not ok:
            return None, message
        return refined, "Prompt refined."

    def on_suggest(enhanced: str) -> tuple[list[str], str]:
        if not (enhanced or "").strip():
            return [], ""
        ok, suggestions, message = _guarded(
            "suggest", lambda: _require(enhancer, "Suggestions").suggest(enhanced)
        )
        if not ok:
            return [], message
        return suggestions, ""

    def on_stats(text: str) -> str:
        return format_stats(text or "")

    def on_save_prompt(enhanced: str) -> tuple[Optional[str], str]:
        try:
            path = exporter.save_prompt(enhanced or "")
        except ValueError as exc:
            return None, str(exc)
        except OSError as exc:
            logger.warning("Could not export prompt: %s", exc)
            return None, f"Could not save the prompt: {exc}"
        return str(path), "Prompt saved."

    # Images -------------------------------------------------------------------
    def _generate(action: str, prompt: str, style: str, aspect_ratio: str) -> tuple[Optional[Any], str]:
        final_prompt = apply_style(prompt, style or "none")
        ok, result, message = _guarded(
            action,
            lambda: _require(image_generator, "Image generation")
            .generate_image(final_prompt, aspect_ratio)
            .to_pil(),
        )
        if not ok:
            return None, message
        return result, "Image generated."

    def on_generate_image(enhanced: str, style: str, aspect_ratio: str) -> tuple[Optional[Any], str]:
        if not (enhanced or "").strip():
            return None, "Enhance a prompt first."
        return _generate("image", enhanced, style, aspect_ratio)

    def on_generate_direct_image(prompt: str, style: str, aspect_ratio: str) -> tuple[Optional[Any], str]:
        trimmed = (prompt or "").strip()
        if not trimmed:
            return None, "Please describe the image you want."
        return _generate("direct_image", trimmed, style, aspect_ratio)

    def on_preset_change(name: str) -> str:
        return find_preset_prompt(name)

    # Speech -------------------------------------------------------------------
    def on_transcribe(audio_path: Optional[str], start_value: str) -> tuple[Optional[str], str]:
        if not audio_path:
            return None, ""
        ok, transcript, message = _guarded(
            "transcribe",
            lambda: _require(transcriber, "Speech input").transcribe(audio_path),
        )
        if not ok:
            return None, f"Speech recognition error: {message}"
        return merge_transcript(start_value or "", transcript), "Transcription added."

    # Feedback -----------------------------------------------------------------
    def on_submit_feedback(name: str, feedback: str) -> tuple[Optional[str], str]:
        if not (feedback or "").strip():
            return None, "Please write some feedback first."
        ok, result, message = _guarded(
            "feedback",
            lambda: _require(classifier, "Feedback processing").classify(name or "", feedback.strip()),
        )
        if not ok:
            return None, message
        return format_feedback(result), "Feedback sent."

    # History ------------------------------------------------------------------
    def on_query_history(search: str, sort_order: str, template_filter: str) -> list[list[str]]:
        return history_rows(store.query(search or "", sort_order, template_filter or ALL_TEMPLATES))

    def on_history_filters() -> list[str]:
        return [ALL_TEMPLATES, *store.template_names()]

    def on_select_history(search: str, sort_order: str, template_filter: str, row_index: int) -> Optional[str]:
        items = store.query(search or "", sort_order, template_filter or ALL_TEMPLATES)
        if row_index is None or not 0 <= int(row_index) < len(items):
            return None
        return items[int(row_index)].original

    def on_clear_history() -> list[list[str]]:
        store.clear()
        return []

    return {
        "startup_message": startup_message,
        "on_category_change": on_category_change,
        "on_template_change": on_template_change,
        "on_next_example": on_next_example,
        "on_enhance": on_enhance,
        "on_correct": on_correct,
        "on_refine": on_refine,
        "on_suggest": on_suggest,
        "on_stats": on_stats,
        "on_save_prompt": on_save_prompt,
        "on_generate_image": on_generate_image,
        "on_generate_direct_image": on_generate_direct_image,
        "on_preset_change": on_preset_change,
        "on_transcribe": on_transcribe,
        "on_submit_feedback": on_submit_feedback,
        "on_query_history": on_query_history,
        "on_history_filters": on_history_filters,
        "on_select_history": on_select_history,
        "on_clear_history": on_clear_history,
    }
