"""Helpers for image payloads and prompt text statistics."""

from __future__ import annotations

import base64
import binascii
import io
from typing import Tuple

from PIL import Image


def to_data_uri(data: bytes, mime_type: str = "image/png") -> str:
    """Encode raw bytes as a ``data:`` URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def parse_data_uri(uri: str) -> Tuple[str, bytes]:
    """Split a base64 ``data:`` URI into (mime type, raw bytes)."""
    if not uri.startswith("data:") or "," not in uri:
        raise ValueError("Not a data URI")
    header, payload = uri.split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URIs are supported")
    mime_type = header[len("data:") : -len(";base64")] or "application/octet-stream"
    try:
        return mime_type, base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 payload: {exc}") from exc


def decode_image(data: bytes) -> Image.Image:
    """Open image bytes as a fully loaded PIL image."""
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def prompt_stats(text: str) -> Tuple[int, int]:
    """Return (word count, character count) for a prompt."""
    if not text:
        return 0, 0
    return len(text.split()), len(text)


def format_stats(text: str) -> str:
    """Render the ``N words • M characters`` footer shown under prompts."""
    words, characters = prompt_stats(text)
    if not text:
        return ""
    noun = "word" if words == 1 else "words"
    return f"{words} {noun} • {characters} characters"
