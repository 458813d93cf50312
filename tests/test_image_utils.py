"""Image payload and prompt statistics helpers."""

from __future__ import annotations

import pytest

from modules.services.storage_service import EXPORT_FILENAME, StorageService
from modules.utils.image_utils import format_stats, parse_data_uri, prompt_stats, to_data_uri


def test_data_uri_round_trip():
    uri = to_data_uri(b"\x89PNG", "image/png")

    assert uri.startswith("data:image/png;base64,")
    assert parse_data_uri(uri) == ("image/png", b"\x89PNG")


@pytest.mark.parametrize("uri", ["http://example.com/a.png", "data:image/png,raw", "data:image/png;base64,***"])
def test_parse_data_uri_rejects_bad_input(uri):
    with pytest.raises(ValueError):
        parse_data_uri(uri)


def test_prompt_stats():
    assert prompt_stats("") == (0, 0)
    assert prompt_stats("one  two\nthree") == (3, 14)


def test_format_stats():
    assert format_stats("") == ""
    assert format_stats("word") == "1 word • 4 characters"
    assert format_stats("two words") == "2 words • 9 characters"


def test_save_prompt(tmp_path):
    path = StorageService(tmp_path).save_prompt("A cinematic castle")

    assert path.name == EXPORT_FILENAME
    assert path.read_text(encoding="utf-8") == "A cinematic castle"


def test_save_blank_prompt_fails(tmp_path):
    with pytest.raises(ValueError):
        StorageService(tmp_path).save_prompt("   ")
