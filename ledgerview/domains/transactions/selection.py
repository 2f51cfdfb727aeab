"""Row selection state for the transaction list."""

from __future__ import annotations

from typing import Iterable, List, Sequence


class SelectionState:
    """Set of selected transaction ids, kept within the listed ids.

    Ids are kept in selection order so the bulk-action payload is stable.
    """

    def __init__(self, listed_ids: Sequence[str], selected: Iterable[str] = ()) -> None:
        self._listed = list(listed_ids)
        listed = set(self._listed)
        self._selected: List[str] = []
        for item in selected:
            if item in listed and item not in self._selected:
                self._selected.append(item)

    @property
    def ids(self) -> List[str]:
        return list(self._selected)

    @property
    def all_selected(self) -> bool:
        return bool(self._listed) and set(self._selected) == set(self._listed)

    def __contains__(self, item: str) -> bool:
        return item in self._selected

    def __len__(self) -> int:
        return len(self._selected)

    def toggle_all(self) -> None:
        if self.all_selected:
            self._selected = []
        else:
            self._selected = list(self._listed)

    def toggle_one(self, item: str) -> None:
        if item in self._selected:
            self._selected.remove(item)
        elif item in self._listed:
            self._selected.append(item)

    def clear(self) -> None:
        self._selected = []
