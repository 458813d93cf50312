"""Logging setup tests."""

from __future__ import annotations

import logging

import pytest

from modules.utils.logging import LOG_FILENAME, setup_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_writes_file(test_config, restore_root):
    logger = setup_logging(test_config)
    setup_logging(test_config)

    logger.info("started")
    for handler in logging.getLogger().handlers:
        handler.flush()

    added = [h for h in logging.getLogger().handlers if getattr(h, "_promptmatrix", False)]
    assert len(added) == 2
    assert "started" in (test_config.log_dir / LOG_FILENAME).read_text(encoding="utf-8")
    assert logging.getLogger("httpx").level == logging.WARNING
