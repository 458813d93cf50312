"""Thin wrapper around the google-genai SDK client.

One ``GeminiClient`` is built at startup by :func:`initialize_client` and
handed to every service that talks to the remote API. Services translate SDK
exceptions into the error taxonomy in ``modules.services.errors``; this module
only raises ``ConfigurationError`` (no credential) and
``MalformedResponseError`` (structured output that is not JSON).
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from google import genai
from google.genai import types

from config.settings import AppConfig
from modules.services.errors import ConfigurationError, MalformedResponseError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Explicit handle on the remote generative API."""

    def __init__(self, config: AppConfig, sdk_client: Any = None) -> None:
        self.config = config
        if sdk_client is None:
            sdk_client = self._build_sdk_client(config)
        self._client = sdk_client

    @staticmethod
    def _build_sdk_client(config: AppConfig) -> Any:
        if not config.gemini_api_key:
            raise ConfigurationError(
                "API key is not configured. Please set the GEMINI_API_KEY environment variable."
            )
        client_kwargs: dict[str, Any] = {"api_key": config.gemini_api_key}
        if config.http_timeout_ms:
            client_kwargs["http_options"] = types.HttpOptions(timeout=config.http_timeout_ms)
        return genai.Client(**client_kwargs)

    def generate_content(
        self,
        contents: Any,
        model: Optional[str] = None,
        config: Optional[types.GenerateContentConfig] = None,
    ) -> Any:
        """Issue a raw ``generate_content`` call and return the SDK response."""
        model_name = model or self.config.utility_model
        logger.debug("generate_content model=%s", model_name)
        kwargs: dict[str, Any] = {"model": model_name, "contents": contents}
        if config is not None:
            kwargs["config"] = config
        return self._client.models.generate_content(**kwargs)

    def generate_text(self, prompt: str, model: Optional[str] = None) -> str:
        """Return the trimmed text of a plain text-generation call."""
        response = self.generate_content(prompt, model=model)
        return (getattr(response, "text", None) or "").strip()

    def generate_json(
        self,
        prompt: str,
        schema: types.Schema,
        model: Optional[str] = None,
    ) -> Any:
        """Request schema-constrained JSON output and return the decoded value."""
        response = self.generate_content(
            prompt,
            model=model,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=schema,
            ),
        )
        raw = (getattr(response, "text", None) or "").strip()
        if not raw:
            raise MalformedResponseError("The API returned an empty structured response.")
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(f"The API returned invalid JSON: {exc}") from exc


@dataclass(slots=True)
class ClientInit:
    """Outcome of client construction at startup."""

    client: Optional[GeminiClient] = None
    error: Optional[ConfigurationError] = None

    @property
    def ok(self) -> bool:
        return self.client is not None


def initialize_client(config: AppConfig, sdk_client: Any = None) -> ClientInit:
    """Build the shared client, reporting a missing credential as a value."""
    try:
        client = GeminiClient(config, sdk_client=sdk_client)
    except ConfigurationError as exc:
        logger.error("Gemini client initialization failed: %s", exc)
        return ClientInit(error=exc)
    logger.info("Gemini client initialized")
    return ClientInit(client=client)
