"""Speech input: transcript merging and remote transcription."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Optional

from google.genai import types

from modules.services.errors import CommunicationError, EmptyResultError, PromptMatrixError
from modules.services.gemini_client import GeminiClient

logger = logging.getLogger(__name__)

TRANSCRIBE_INSTRUCTION = (
    "Transcribe the speech in this audio clip. Return only the spoken words as plain "
    "text, without timestamps, speaker labels or commentary."
)


def merge_transcript(start_value: str, transcript: str) -> str:
    """Append ``transcript`` to the text present when listening began."""
    if not transcript:
        return start_value
    separator = " " if start_value and not start_value.endswith(" ") else ""
    return f"{start_value}{separator}{transcript}"


class SpeechTranscriber:
    """Turns a recorded microphone clip into text."""

    def __init__(self, client: Optional[GeminiClient], model: Optional[str] = None) -> None:
        self.client = client
        self.model = model

    def transcribe(self, audio_path: str | Path) -> str:
        if self.client is None:
            raise CommunicationError(
                "Gemini AI client has not been initialized. Please check your API key configuration."
            )
        path = Path(audio_path)
        mime_type = mimetypes.guess_type(path.name)[0] or "audio/wav"
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise CommunicationError(f"Could not read the recorded audio: {exc}") from exc

        try:
            response = self.client.generate_content(
                [TRANSCRIBE_INSTRUCTION, types.Part.from_bytes(data=data, mime_type=mime_type)],
                model=self.model,
            )
        except PromptMatrixError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Speech recognition error: %s", exc)
            raise CommunicationError("Speech recognition failed. Please try again.") from exc

        text = (getattr(response, "text", None) or "").strip()
        if not text:
            raise EmptyResultError("No speech was recognized in the recording.")
        return text
