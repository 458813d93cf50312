"""Template catalog unit tests."""

from __future__ import annotations

import pytest

from modules.optimization.prompt_templates import (
    ALL_CATEGORIES,
    DEFAULT_TEMPLATES,
    LIVE_EXAMPLE_PROMPTS,
    PLACEHOLDER,
    PromptTemplate,
    TemplateCatalog,
    fill_template,
    find_preset_prompt,
    live_example,
)


def test_fill_template_replaces_placeholder_once():
    assert fill_template("Enhance: {userInput}", "a cat") == "Enhance: a cat"


def test_fill_template_is_literal():
    filled = fill_template("Idea: {userInput}", "use {braces} and $1")

    assert filled == "Idea: use {braces} and $1"


def test_fill_template_inserted_placeholder_is_not_reexpanded():
    assert fill_template("X {userInput}", "{userInput}") == "X {userInput}"


def test_builtin_templates_have_exactly_one_placeholder():
    for template in DEFAULT_TEMPLATES:
        assert template.template.count(PLACEHOLDER) == 1
        assert PLACEHOLDER not in template.fill("a red bicycle")
        assert "a red bicycle" in template.fill("a red bicycle")


@pytest.mark.parametrize("body", ["no placeholder", "{userInput} twice {userInput}"])
def test_template_rejects_wrong_placeholder_count(body):
    with pytest.raises(ValueError):
        PromptTemplate(id="bad", name="Bad", description="", template=body, category="General")


def test_categories_start_with_all():
    catalog = TemplateCatalog()

    assert catalog.categories() == [ALL_CATEGORIES, "General", "Creative", "Marketing", "Technical"]


def test_default_template_is_flagged_one():
    catalog = TemplateCatalog()

    assert catalog.default_for().id == "expert-enhancer"


def test_resolve_selection_falls_back_to_category_default():
    catalog = TemplateCatalog()

    assert catalog.resolve_selection("Marketing", "expert-enhancer").id == "copywriting"
    assert catalog.resolve_selection("General", "default").id == "default"
    assert catalog.resolve_selection(ALL_CATEGORIES, "code-gen").id == "code-gen"


def test_by_category_filters():
    catalog = TemplateCatalog()

    assert [t.id for t in catalog.by_category("General")] == ["expert-enhancer", "default"]
    assert catalog.by_category("Unknown") == []


def test_preset_lookup():
    assert find_preset_prompt("Food Photography").startswith("Delicious and vibrant food photography")
    assert find_preset_prompt("missing") == ""


def test_live_example_wraps():
    assert live_example(len(LIVE_EXAMPLE_PROMPTS)) == LIVE_EXAMPLE_PROMPTS[0]
