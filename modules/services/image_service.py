"""Remote image generation through the Gemini image model."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Union

from google.genai import types
from PIL import UnidentifiedImageError

from modules.services.errors import (
    CommunicationError,
    ContentPolicyError,
    EmptyResultError,
    GenerationError,
    PromptMatrixError,
)
from modules.services.gemini_client import GeminiClient
from modules.utils.image_utils import decode_image, to_data_uri

logger = logging.getLogger(__name__)

SAFETY_MESSAGE = (
    "Image generation was blocked due to safety policies. "
    "Please modify your prompt and try again."
)


class AspectRatio(str, Enum):
    SQUARE = "1:1"
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"

    @classmethod
    def parse(cls, value: Any) -> "AspectRatio":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip())
        except ValueError as exc:
            allowed = ", ".join(ratio.value for ratio in cls)
            raise ValueError(f"Unsupported aspect ratio '{value}', expected one of: {allowed}") from exc


@dataclass(slots=True)
class ImageResult:
    """A decoded image payload ready for display."""

    mime_type: str
    data: bytes

    @property
    def data_uri(self) -> str:
        return to_data_uri(self.data, self.mime_type)

    def to_pil(self) -> Any:
        try:
            return decode_image(self.data)
        except (UnidentifiedImageError, OSError) as exc:
            logger.error("Could not decode %s payload: %s", self.mime_type, exc)
            raise GenerationError("The API returned image data that could not be displayed.") from exc


# Response shapes the SDK may return -------------------------------------------
@dataclass(slots=True)
class InlineImagePart:
    """``candidates[].content.parts[].inline_data`` from ``generate_content``."""

    mime_type: Optional[str]
    data: Union[bytes, str]


@dataclass(slots=True)
class GeneratedImage:
    """``generated_images[].image`` from ``generate_images``."""

    image_bytes: Union[bytes, str]
    mime_type: Optional[str] = None


ImagePayload = Union[InlineImagePart, GeneratedImage]


def _as_bytes(data: Union[bytes, str]) -> bytes:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise GenerationError(f"The API returned an undecodable image payload: {exc}") from exc


def normalize_payload(payload: ImagePayload) -> ImageResult:
    """Collapse either response shape into an ImageResult."""
    if isinstance(payload, InlineImagePart):
        return ImageResult(mime_type=payload.mime_type or "image/png", data=_as_bytes(payload.data))
    return ImageResult(mime_type=payload.mime_type or "image/png", data=_as_bytes(payload.image_bytes))


def _response_parts(response: Any) -> list[Any]:
    parts = getattr(response, "parts", None)
    if parts:
        return list(parts)
    collected: list[Any] = []
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        collected.extend(getattr(content, "parts", None) or [])
    return collected


def extract_payloads(response: Any) -> List[ImagePayload]:
    """List every image payload found in an SDK response, in order."""
    payloads: list[ImagePayload] = []
    for part in _response_parts(response):
        inline = getattr(part, "inline_data", None)
        if inline is None:
            continue
        mime_type = getattr(inline, "mime_type", None)
        data = getattr(inline, "data", None)
        if data and (mime_type is None or mime_type.startswith("image/")):
            payloads.append(InlineImagePart(mime_type=mime_type, data=data))

    for generated in getattr(response, "generated_images", None) or []:
        image = getattr(generated, "image", None)
        image_bytes = getattr(image, "image_bytes", None)
        if image_bytes:
            payloads.append(GeneratedImage(image_bytes=image_bytes, mime_type=getattr(image, "mime_type", None)))
    return payloads


def _reason_name(reason: Any) -> str:
    if reason is None:
        return ""
    return str(getattr(reason, "value", None) or getattr(reason, "name", None) or reason).upper()


def _is_policy_reason(reason: Any) -> bool:
    name = _reason_name(reason)
    return "SAFETY" in name or "PROHIBITED" in name


def _is_safety_block(response: Any) -> bool:
    feedback = getattr(response, "prompt_feedback", None)
    if _is_policy_reason(getattr(feedback, "block_reason", None)):
        return True
    return any(
        _is_policy_reason(getattr(candidate, "finish_reason", None))
        for candidate in getattr(response, "candidates", None) or []
    )


class ImageGenerator:
    """Turns a prompt into an image via the remote API."""

    def __init__(self, client: Optional[GeminiClient], model: Optional[str] = None) -> None:
        self.client = client
        self.model = model or (client.config.image_model if client is not None else None)

    def generate_image(self, prompt: str, aspect_ratio: AspectRatio | str = AspectRatio.SQUARE) -> ImageResult:
        """Generate one image; raise instead of returning an empty result."""
        if self.client is None:
            raise CommunicationError(
                "Gemini AI client has not been initialized. Please check your API key configuration."
            )
        ratio = AspectRatio.parse(aspect_ratio)
        config = types.GenerateContentConfig(
            response_modalities=["IMAGE"],
            image_config=types.ImageConfig(aspect_ratio=ratio.value),
        )

        try:
            response = self.client.generate_content(prompt, model=self.model, config=config)
        except PromptMatrixError:
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error("Error generating image: %s", exc)
            if "SAFETY" in str(exc).upper():
                raise ContentPolicyError(SAFETY_MESSAGE) from exc
            raise GenerationError("Failed to generate the image using the Gemini API.") from exc

        payloads = extract_payloads(response)
        if not payloads:
            if _is_safety_block(response):
                raise ContentPolicyError(SAFETY_MESSAGE)
            raise EmptyResultError("The API did not return any images.")

        result = normalize_payload(payloads[0])
        logger.info("Generated %s image (%d bytes, %s)", result.mime_type, len(result.data), ratio.value)
        return result
