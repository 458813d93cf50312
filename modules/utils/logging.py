"""Logging setup for the PromptMatrix app."""

from __future__ import annotations

import logging
from pathlib import Path

from config.settings import AppConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILENAME = "application.log"
QUIET_LOGGERS = ("httpx", "google_genai", "gradio")


def setup_logging(config: AppConfig, level: int = logging.INFO) -> logging.Logger:
    """Send records to ``<log_dir>/application.log`` and stderr.

    Safe to call more than once: handlers are only attached on the first call.
    """
    root = logging.getLogger()
    if not any(getattr(handler, "_promptmatrix", False) for handler in root.handlers):
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        formatter = logging.Formatter(LOG_FORMAT)
        for handler in (
            logging.FileHandler(log_dir / LOG_FILENAME, encoding="utf-8"),
            logging.StreamHandler(),
        ):
            handler.setFormatter(formatter)
            handler._promptmatrix = True  # type: ignore[attr-defined]
            root.addHandler(handler)
    root.setLevel(level)

    # SDK and HTTP layers log every request at INFO
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    return logging.getLogger("promptmatrix")
