"""Mini README: Per-row edit modes for the expense grid.

Structure:
    * RowMode - enum of the two grid row modes.
    * RowModeEntry - a mode plus the discard flag set on cancellation.
    * RowEditState - mapping from expense id to entry, defaulting to View.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, Mapping


class RowMode(str, Enum):
    """Enumerate the grid row modes."""

    VIEW = "view"
    EDIT = "edit"


@dataclass(frozen=True, slots=True)
class RowModeEntry:
    """Mode of one row; ``ignore_modifications`` asks the grid to drop edits."""

    mode: RowMode = RowMode.VIEW
    ignore_modifications: bool = False

    def as_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {"mode": self.mode.value}
        if self.ignore_modifications:
            payload["ignore_modifications"] = True
        return payload


_VIEW = RowModeEntry()


class RowEditState(Mapping[str, RowModeEntry]):
    """Row modes keyed by expense id.

    Entries appear the first time a row is touched. Looking up an id that
    was never edited, or whose record has since disappeared, yields View.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, RowModeEntry] = {}

    def __getitem__(self, expense_id: str) -> RowModeEntry:
        return self._entries[expense_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, expense_id: str, default: RowModeEntry = _VIEW) -> RowModeEntry:  # type: ignore[override]
        return self._entries.get(expense_id, default)

    def mode_of(self, expense_id: str) -> RowMode:
        return self.get(expense_id).mode

    def set(self, expense_id: str, entry: RowModeEntry) -> None:
        self._entries[expense_id] = entry

    def prune(self, valid_ids: Iterable[str]) -> int:
        """Drop entries whose ids are not in ``valid_ids``; return how many."""

        keep = set(valid_ids)
        stale = [expense_id for expense_id in self._entries if expense_id not in keep]
        for expense_id in stale:
            del self._entries[expense_id]
        return len(stale)

    def copy(self) -> Dict[str, RowModeEntry]:
        return dict(self._entries)

    def as_dict(self) -> Dict[str, Dict[str, object]]:
        return {expense_id: entry.as_dict() for expense_id, entry in self._entries.items()}
