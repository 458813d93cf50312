"""Shared pytest fixtures: a fake google-genai SDK client."""

from __future__ import annotations

import threading
from types import SimpleNamespace
from typing import Any, Callable, Optional

import pytest

from config.settings import AppConfig
from modules.services.gemini_client import GeminiClient


class FakeModels:
    """Stands in for ``genai.Client().models``; records every call."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.by_model: dict[str, Any] = {}
        self.default: Any = SimpleNamespace(text="")
        self._lock = threading.Lock()

    def respond(self, model: Optional[str], reply: Any) -> None:
        """Set the reply for ``model`` (or the default when None).

        A reply may be a response object, a plain string (wrapped as ``.text``),
        an exception instance (raised) or a callable taking the call kwargs.
        """
        if model is None:
            self.default = reply
        else:
            self.by_model[model] = reply

    def generate_content(self, **kwargs: Any) -> Any:
        with self._lock:
            self.calls.append(kwargs)
        reply = self.by_model.get(kwargs.get("model"), self.default)
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            reply = reply(kwargs)
        if isinstance(reply, str):
            return SimpleNamespace(text=reply)
        return reply


class FakeSDK:
    def __init__(self) -> None:
        self.models = FakeModels()


@pytest.fixture
def test_config(tmp_path) -> AppConfig:
    return AppConfig(
        gemini_api_key="test-key",
        history_path=tmp_path / "history.json",
        log_dir=tmp_path / "logs",
        export_dir=tmp_path / "exports",
    )


@pytest.fixture
def fake_sdk() -> FakeSDK:
    return FakeSDK()


@pytest.fixture
def gemini_client(test_config: AppConfig, fake_sdk: FakeSDK) -> GeminiClient:
    return GeminiClient(test_config, sdk_client=fake_sdk)


def make_inline_image_response(data: bytes, mime_type: str = "image/png") -> SimpleNamespace:
    part = SimpleNamespace(text=None, inline_data=SimpleNamespace(mime_type=mime_type, data=data))
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


@pytest.fixture
def inline_image_response() -> Callable[..., SimpleNamespace]:
    return make_inline_image_response
