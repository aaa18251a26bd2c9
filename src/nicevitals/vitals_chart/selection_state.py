"""Legend selection state: which group keys are toggled active.

An empty active set means every group is visible. Toggling the last active
key off empties the set again, which returns the chart to show-all. Keys
from a previous grouping stay in the set and simply match nothing.
"""

from __future__ import annotations

from typing import Iterable, Optional


class SelectionState:
    """Set of active group keys with show-all semantics for the empty set."""

    def __init__(self, active: Optional[Iterable[str]] = None) -> None:
        self._active: set[str] = {str(k) for k in active} if active else set()

    def __repr__(self) -> str:
        return f"SelectionState(active={sorted(self._active)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SelectionState):
            return NotImplemented
        return self._active == other._active

    @property
    def active(self) -> frozenset[str]:
        return frozenset(self._active)

    @property
    def is_filtered(self) -> bool:
        """True if at least one key is active (not show-all)."""
        return bool(self._active)

    def toggle(self, key: str) -> None:
        key = str(key)
        if key in self._active:
            self._active.remove(key)
        else:
            self._active.add(key)

    def is_visible(self, key: str) -> bool:
        return not self._active or str(key) in self._active

    def clear(self) -> None:
        self._active.clear()

    def copy(self) -> "SelectionState":
        return SelectionState(self._active)

    def to_list(self) -> list[str]:
        return sorted(self._active)

    @classmethod
    def from_list(cls, keys: Optional[Iterable[str]]) -> "SelectionState":
        return cls(keys or [])
