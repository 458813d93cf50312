"""Configuration helpers for the PromptMatrix project."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional


@dataclass(slots=True)
class AppConfig:
    """Centralized application configuration."""

    gemini_api_key: Optional[str] = None
    primary_model: str = "gemini-2.5-pro"
    secondary_model: str = "gemini-2.5-flash"
    utility_model: str = "gemini-2.5-flash"
    image_model: str = "gemini-2.5-flash-image"
    http_timeout_ms: Optional[int] = None
    history_path: Path = Path("data/history.json")
    history_limit: int = 10
    log_dir: Path = Path("logs")
    export_dir: Path = Path("exports")
    server_name: str = "127.0.0.1"
    server_port: int = 7860
    metadata: dict[str, Any] = field(default_factory=dict)


def _load_env_file(path: Path) -> None:
    """Populate environment variables from a simple KEY=VALUE .env file."""
    if not path.exists():
        return

    for line in path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ[key.strip()] = value.strip().strip('"').strip("'")


def _int_from_env(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Return an AppConfig instance with environment-aware settings."""
    env_path = Path(config_path) if config_path else Path(".env")
    _load_env_file(env_path)

    api_key = (
        os.getenv("GEMINI_API_KEY")
        or os.getenv("API_KEY")
        or os.getenv("GOOGLE_API_KEY")
    )

    defaults = AppConfig()
    history_path = Path(
        os.getenv("PROMPTMATRIX_HISTORY_PATH", str(defaults.history_path))
    ).expanduser()
    log_dir = Path(os.getenv("PROMPTMATRIX_LOG_DIR", str(defaults.log_dir))).expanduser()
    export_dir = Path(
        os.getenv("PROMPTMATRIX_EXPORT_DIR", str(defaults.export_dir))
    ).expanduser()

    metadata: dict[str, Any] = {"env_file": str(env_path)}
    if api_key is None:
        metadata["missing_credential"] = True

    return AppConfig(
        gemini_api_key=api_key,
        primary_model=os.getenv("PROMPTMATRIX_PRO_MODEL") or defaults.primary_model,
        secondary_model=os.getenv("PROMPTMATRIX_FLASH_MODEL") or defaults.secondary_model,
        utility_model=os.getenv("PROMPTMATRIX_UTILITY_MODEL") or defaults.utility_model,
        image_model=os.getenv("PROMPTMATRIX_IMAGE_MODEL") or defaults.image_model,
        http_timeout_ms=_int_from_env("PROMPTMATRIX_TIMEOUT_MS", defaults.http_timeout_ms),
        history_path=history_path,
        log_dir=log_dir,
        export_dir=export_dir,
        server_name=os.getenv("GRADIO_SERVER_NAME") or defaults.server_name,
        server_port=_int_from_env("GRADIO_SERVER_PORT", defaults.server_port) or defaults.server_port,
        metadata=metadata,
    )
