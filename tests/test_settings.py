"""Configuration loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from config.settings import AppConfig, load_config

ENV_NAMES = (
    "GEMINI_API_KEY",
    "API_KEY",
    "GOOGLE_API_KEY",
    "PROMPTMATRIX_PRO_MODEL",
    "PROMPTMATRIX_FLASH_MODEL",
    "PROMPTMATRIX_HISTORY_PATH",
    "PROMPTMATRIX_TIMEOUT_MS",
    "GRADIO_SERVER_PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    yield


def test_defaults():
    config = AppConfig()

    assert config.primary_model == "gemini-2.5-pro"
    assert config.secondary_model == "gemini-2.5-flash"
    assert config.history_limit == 10


def test_env_file_is_loaded(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\nGEMINI_API_KEY=\"from-file\"\nPROMPTMATRIX_TIMEOUT_MS=1500\nnot a pair\n",
        encoding="utf-8",
    )
    # load_config writes os.environ directly; register both names so teardown removes them
    for name in ("GEMINI_API_KEY", "PROMPTMATRIX_TIMEOUT_MS"):
        monkeypatch.setenv(name, "placeholder")
        monkeypatch.delenv(name)

    config = load_config(str(env_file))

    assert config.gemini_api_key == "from-file"
    assert config.http_timeout_ms == 1500


def test_api_key_fallbacks(tmp_path, monkeypatch):
    monkeypatch.setenv("API_KEY", "legacy")

    config = load_config(str(tmp_path / "missing.env"))

    assert config.gemini_api_key == "legacy"


def test_missing_key_is_flagged(tmp_path):
    config = load_config(str(tmp_path / "missing.env"))

    assert config.gemini_api_key is None
    assert config.metadata["missing_credential"] is True


def test_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("PROMPTMATRIX_PRO_MODEL", "pro-x")
    monkeypatch.setenv("PROMPTMATRIX_HISTORY_PATH", str(tmp_path / "h.json"))
    monkeypatch.setenv("GRADIO_SERVER_PORT", "not-a-number")

    config = load_config(str(tmp_path / "missing.env"))

    assert config.primary_model == "pro-x"
    assert config.history_path == Path(tmp_path / "h.json")
    assert config.server_port == 7860
