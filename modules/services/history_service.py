"""Prompt history tracking."""

from __future__ import annotations

import json
import logging
import math
import threading
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, List, Optional

logger = logging.getLogger(__name__)

ALL_TEMPLATES = "all"
DEFAULT_HISTORY_LIMIT = 10


class SortOrder(str, Enum):
    """Orderings offered by the history panel."""

    RECENT = "recent"
    OLDEST = "oldest"
    ORIGINAL_LENGTH = "original-asc"
    ENHANCED_LENGTH = "enhanced-asc"

    @classmethod
    def parse(cls, value: Any) -> "SortOrder":
        """Map free text onto a sort order, defaulting to most recent."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return cls.RECENT

    @property
    def label(self) -> str:
        return {
            SortOrder.RECENT: "Most Recent",
            SortOrder.OLDEST: "Oldest First",
            SortOrder.ORIGINAL_LENGTH: "Original Length",
            SortOrder.ENHANCED_LENGTH: "Enhanced Length",
        }[self]


@dataclass(slots=True)
class HistoryItem:
    """One past enhancement, keyed by its original input text."""

    id: int
    original: str
    enhanced: str
    template_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "original": self.original,
            "enhanced": self.enhanced,
            "templateName": self.template_name,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional["HistoryItem"]:
        """Build an item from persisted data, or None if the entry is unusable."""
        if not isinstance(data, dict):
            return None
        item_id = data.get("id")
        original = data.get("original")
        enhanced = data.get("enhanced")
        template_name = data.get("templateName", data.get("template_name"))
        if isinstance(item_id, bool) or not isinstance(item_id, (int, float)):
            return None
        if isinstance(item_id, float) and not math.isfinite(item_id):
            return None
        if not isinstance(original, str) or not isinstance(enhanced, str):
            return None
        if not isinstance(template_name, str):
            return None
        return cls(id=int(item_id), original=original, enhanced=enhanced, template_name=template_name)


def query(
    items: Iterable[HistoryItem],
    search_text: str = "",
    sort_order: SortOrder | str = SortOrder.RECENT,
    template_filter: str = ALL_TEMPLATES,
) -> List[HistoryItem]:
    """Filter and sort a snapshot of history items.

    The template filter is an exact name match unless it is ``all``. The
    search is a case-insensitive substring match against the original or the
    enhanced text. The input collection is never modified.
    """
    results = list(items)

    if template_filter and template_filter != ALL_TEMPLATES:
        results = [item for item in results if item.template_name == template_filter]

    needle = (search_text or "").strip().lower()
    if needle:
        results = [
            item
            for item in results
            if needle in item.original.lower() or needle in item.enhanced.lower()
        ]

    order = SortOrder.parse(sort_order)
    if order is SortOrder.OLDEST:
        results.sort(key=lambda item: item.id)
    elif order is SortOrder.ORIGINAL_LENGTH:
        results.sort(key=lambda item: len(item.original))
    elif order is SortOrder.ENHANCED_LENGTH:
        results.sort(key=lambda item: len(item.enhanced))
    else:
        results.sort(key=lambda item: item.id, reverse=True)
    return results


class HistoryStore:
    """Capped, de-duplicated history persisted to a JSON file.

    Read and write failures are logged and otherwise ignored; a corrupt or
    missing file loads as an empty history.
    """

    def __init__(
        self,
        history_path: Optional[Path] = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
        clock=time.time,
    ) -> None:
        self.history_path = Path(history_path) if history_path is not None else None
        self.limit = limit
        self._clock = clock
        self._lock = threading.Lock()
        self._items: list[HistoryItem] = self._load()

    def items(self) -> List[HistoryItem]:
        """Return a snapshot in stored order (most recently recorded first)."""
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def record(self, original: str, enhanced: str, template_name: str) -> HistoryItem:
        """Front-insert an enhancement, replacing any entry with the same original."""
        with self._lock:
            item = HistoryItem(
                id=self._next_id(),
                original=original,
                enhanced=enhanced,
                template_name=template_name,
            )
            remaining = [existing for existing in self._items if existing.original != original]
            self._items = [item, *remaining][: self.limit]
            self._save()
        return item

    def clear(self) -> None:
        with self._lock:
            self._items = []
            self._save()

    def query(
        self,
        search_text: str = "",
        sort_order: SortOrder | str = SortOrder.RECENT,
        template_filter: str = ALL_TEMPLATES,
    ) -> List[HistoryItem]:
        return query(self.items(), search_text, sort_order, template_filter)

    def template_names(self) -> List[str]:
        """Distinct template names present in the history, in stored order."""
        names: list[str] = []
        for item in self.items():
            if item.template_name not in names:
                names.append(item.template_name)
        return names

    # Internal helpers ---------------------------------------------------------
    def _next_id(self) -> int:
        candidate = int(self._clock() * 1000)
        newest = max((item.id for item in self._items), default=0)
        return max(candidate, newest + 1)

    def _load(self) -> list[HistoryItem]:
        if self.history_path is None or not self.history_path.exists():
            return []
        try:
            with self.history_path.open("r", encoding="utf-8") as fp:
                raw = json.load(fp)
        except (OSError, ValueError) as exc:
            logger.warning("Could not load history from %s: %s", self.history_path, exc)
            return []
        if not isinstance(raw, list):
            logger.warning("Ignoring history file %s: expected a list", self.history_path)
            return []

        items: list[HistoryItem] = []
        seen: set[str] = set()
        for entry in raw:
            item = HistoryItem.from_dict(entry)
            if item is None or item.original in seen:
                continue
            seen.add(item.original)
            items.append(item)
        return items[: self.limit]

    def _save(self) -> None:
        if self.history_path is None:
            return
        try:
            self.history_path.parent.mkdir(parents=True, exist_ok=True)
            with self.history_path.open("w", encoding="utf-8") as fp:
                json.dump([item.to_dict() for item in self._items], fp, ensure_ascii=False, indent=2)
        except OSError as exc:
            logger.warning("Could not save history to %s: %s", self.history_path, exc)
