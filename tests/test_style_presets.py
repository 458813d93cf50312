"""Style composer unit tests."""

from __future__ import annotations

import pytest

from modules.optimization.style_presets import (
    StylePreset,
    StylePresetRegistry,
    StyleTag,
    apply_style,
    style_choices,
)


@pytest.mark.parametrize("text", ["a castle", "a castle.", "", "  spaced  "])
def test_none_style_is_identity(text):
    assert apply_style(text, "none") == text
    assert apply_style(text, StyleTag.NONE) == text


@pytest.mark.parametrize("tag", [tag.value for tag in StyleTag])
def test_empty_text_is_identity(tag):
    assert apply_style("", tag) == ""


@pytest.mark.parametrize("tag", [tag for tag in StyleTag if tag is not StyleTag.NONE])
def test_recognized_styles_embed_cleaned_prompt(tag):
    styled = apply_style("a lighthouse at dusk,", tag.value)

    assert "a lighthouse at dusk" in styled
    assert styled != "a lighthouse at dusk,"
    assert styled.endswith(".")


def test_cinematic_exact_output():
    assert apply_style("a castle.", "cinematic") == (
        "Cinematic film still of a castle, dramatic lighting, epic composition, "
        "shallow depth of field, anamorphic lens flare."
    )


def test_only_one_trailing_mark_is_stripped():
    styled = apply_style("a castle..", "minimalist")

    assert styled.startswith("Minimalist vector art of a castle., ")


def test_abstract_quotes_the_prompt():
    assert apply_style("joy", "abstract").startswith('An abstract expressionist interpretation of "joy", ')


def test_unknown_style_falls_back_to_generic_phrase():
    assert apply_style("a fox.", "art-nouveau") == "a fox, in the style of art nouveau."


def test_registry_override_changes_phrase():
    registry = StylePresetRegistry(presets=())
    registry.add(StylePreset(StyleTag.ANIME, "anime {prompt}!"))

    assert apply_style("a cat", "anime", registry=registry) == "anime a cat!"
    assert apply_style("a cat", "cinematic", registry=registry) == "a cat, in the style of cinematic."


def test_style_choices_cover_every_tag():
    choices = style_choices()

    assert choices[0] == ("None", "none")
    assert ("Oil Painting", "oil-painting") in choices
    assert len(choices) == len(StyleTag)


def test_parse_unknown_tag_returns_none():
    assert StyleTag.parse("Cinematic") is StyleTag.CINEMATIC
    assert StyleTag.parse("sketch") is None
