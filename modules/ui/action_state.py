"""Per-action lifecycle tracking for the UI."""

from __future__ import annotations

import threading
from enum import Enum
from typing import Dict, Iterable, Optional


class ActionState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class ActionTracker:
    """Idle -> Pending -> Success|Failed for one user-facing action.

    A trigger arriving while the action is pending is rejected; nothing is
    queued and the in-flight call is left alone.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.state = ActionState.IDLE
        self.message: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self.state is ActionState.PENDING

    def begin(self) -> bool:
        """Enter PENDING; return False if a call is already in flight."""
        with self._lock:
            if self.state is ActionState.PENDING:
                return False
            self.state = ActionState.PENDING
            self.message = None
            return True

    def succeed(self) -> None:
        with self._lock:
            self.state = ActionState.SUCCESS

    def fail(self, message: str) -> None:
        with self._lock:
            self.state = ActionState.FAILED
            self.message = message


class ActionRegistry:
    """Lazily creates one tracker per action name."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._trackers: Dict[str, ActionTracker] = {}
        self._lock = threading.Lock()
        for name in names:
            self.get(name)

    def get(self, name: str) -> ActionTracker:
        with self._lock:
            tracker = self._trackers.get(name)
            if tracker is None:
                tracker = ActionTracker(name)
                self._trackers[name] = tracker
            return tracker

    def __getitem__(self, name: str) -> ActionTracker:
        return self.get(name)
