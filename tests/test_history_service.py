"""History store unit tests."""

from __future__ import annotations

import itertools
import json

import pytest

from modules.services.history_service import (
    HistoryItem,
    HistoryStore,
    SortOrder,
    query,
)


def make_clock(start: float = 1_700_000_000.0):
    counter = itertools.count()
    return lambda: start + next(counter)


def build_store(path=None, **kwargs) -> HistoryStore:
    return HistoryStore(path, clock=make_clock(), **kwargs)


def test_record_front_inserts():
    store = build_store()
    store.record("first", "FIRST", "Classic Enhancer")
    store.record("second", "SECOND", "Classic Enhancer")

    assert [item.original for item in store.items()] == ["second", "first"]


def test_record_replaces_same_original_and_moves_it_first():
    store = build_store()
    store.record("cat", "old cat", "Classic Enhancer")
    store.record("dog", "dog", "Classic Enhancer")
    store.record("cat", "new cat", "Image Generation Pro")

    items = store.items()
    cats = [item for item in items if item.original == "cat"]
    assert len(cats) == 1
    assert items[0].original == "cat"
    assert items[0].enhanced == "new cat"
    assert items[0].template_name == "Image Generation Pro"


def test_cap_drops_least_recent():
    store = build_store()
    for index in range(11):
        store.record(f"idea {index}", f"enhanced {index}", "T")

    originals = [item.original for item in store.items()]
    assert len(originals) == 10
    assert "idea 0" not in originals
    assert originals[0] == "idea 10"


def test_ids_are_monotonic_even_with_a_stuck_clock():
    store = HistoryStore(None, clock=lambda: 5.0)
    first = store.record("a", "A", "T")
    second = store.record("b", "B", "T")

    assert second.id > first.id


def test_persists_and_reloads(tmp_path):
    path = tmp_path / "nested" / "history.json"
    store = build_store(path)
    store.record("cat", "a cat", "Classic Enhancer")

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data[0]["templateName"] == "Classic Enhancer"

    reloaded = HistoryStore(path)
    assert [item.original for item in reloaded.items()] == ["cat"]


def test_corrupt_file_loads_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")

    assert HistoryStore(path).items() == []


def test_wrong_shape_loads_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps({"id": 1}), encoding="utf-8")

    assert HistoryStore(path).items() == []


def test_invalid_entries_are_skipped(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(
        json.dumps(
            [
                {"id": 2, "original": "ok", "enhanced": "OK", "templateName": "T"},
                {"id": "x", "original": "bad id", "enhanced": "", "templateName": "T"},
                {"id": 1, "original": "missing enhanced", "templateName": "T"},
                "junk",
            ]
        ),
        encoding="utf-8",
    )

    assert [item.original for item in HistoryStore(path).items()] == ["ok"]


@pytest.mark.parametrize("raw_id", ["NaN", "Infinity", "-Infinity", "1e400"])
def test_non_finite_ids_are_skipped(tmp_path, raw_id):
    path = tmp_path / "history.json"
    path.write_text(
        f'[{{"id": {raw_id}, "original": "a", "enhanced": "b", "templateName": "t"}},'
        ' {"id": 3, "original": "ok", "enhanced": "OK", "templateName": "t"}]',
        encoding="utf-8",
    )

    assert [item.original for item in HistoryStore(path).items()] == ["ok"]


def test_save_failure_is_swallowed(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory", encoding="utf-8")
    store = build_store(blocker / "history.json")

    item = store.record("cat", "a cat", "T")

    assert store.items() == [item]


def sample_items() -> list[HistoryItem]:
    return [
        HistoryItem(id=30, original="A red fox", enhanced="short", template_name="Classic Enhancer"),
        HistoryItem(id=10, original="castle", enhanced="a much longer castle", template_name="Image Generation Pro"),
        HistoryItem(id=20, original="Sea monster at dawn", enhanced="mid length", template_name="Classic Enhancer"),
    ]


def test_query_recent_is_default():
    assert [item.id for item in query(sample_items())] == [30, 20, 10]


def test_query_oldest():
    ids = [item.id for item in query(sample_items(), sort_order="oldest")]

    assert ids == sorted(ids)


def test_query_length_orders():
    by_original = query(sample_items(), sort_order=SortOrder.ORIGINAL_LENGTH)
    by_enhanced = query(sample_items(), sort_order="enhanced-asc")

    assert [item.original for item in by_original] == ["castle", "A red fox", "Sea monster at dawn"]
    assert [item.enhanced for item in by_enhanced] == ["short", "mid length", "a much longer castle"]


def test_query_search_is_case_insensitive_over_both_fields():
    assert [item.id for item in query(sample_items(), search_text="FOX")] == [30]
    assert [item.id for item in query(sample_items(), search_text="longer")] == [10]


def test_query_template_filter():
    results = query(sample_items(), template_filter="Classic Enhancer")

    assert {item.template_name for item in results} == {"Classic Enhancer"}
    assert query(sample_items(), template_filter="Nope") == []


def test_query_does_not_mutate_input():
    items = sample_items()
    snapshot = list(items)
    query(items, sort_order="oldest", search_text="a")

    assert items == snapshot


def test_unknown_sort_order_means_recent():
    assert SortOrder.parse("sideways") is SortOrder.RECENT


def test_template_names_and_clear():
    store = build_store()
    store.record("a", "A", "One")
    store.record("b", "B", "Two")
    store.record("c", "C", "One")

    assert store.template_names() == ["One", "Two"]
    store.clear()
    assert store.items() == []
