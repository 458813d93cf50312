"""File storage helpers."""

from __future__ import annotations

import uuid
from pathlib import Path

EXPORT_FILENAME = "enhanced-prompt.txt"


class StorageService:
    """Write prompts to disk so the UI can offer them as downloads."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def save_prompt(self, text: str, filename: str = EXPORT_FILENAME) -> Path:
        """Persist a prompt as UTF-8 text and return the file path."""
        if not text or not text.strip():
            raise ValueError("Nothing to save: the prompt is empty.")
        # one directory per export so concurrent sessions keep the download name
        target_dir = self.output_dir / uuid.uuid4().hex
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / filename
        path.write_text(text, encoding="utf-8")
        return path
