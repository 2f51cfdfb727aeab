"""Sort state for the transaction list and its ``ordering`` token form.

The token is the only place sort state is persisted: absent means unsorted,
``code`` means ascending on ``code`` and ``-code`` means descending.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

Direction = Literal["asc", "desc"]

DESCENDING_MARKER = "-"


@dataclass(frozen=True)
class SortState:
    field: Optional[str] = None
    direction: Optional[Direction] = None

    def __post_init__(self) -> None:
        if (self.field is None) != (self.direction is None):
            raise ValueError("field and direction must both be set or both be None")

    @property
    def is_sorted(self) -> bool:
        return self.field is not None

    def direction_for(self, code: str) -> Optional[Direction]:
        return self.direction if self.field == code else None


UNSORTED = SortState()


def parse_ordering(token: Optional[str]) -> SortState:
    if not token:
        return UNSORTED
    if token.startswith(DESCENDING_MARKER):
        field = token[len(DESCENDING_MARKER):]
        return SortState(field, "desc") if field else UNSORTED
    return SortState(token, "asc")


def encode_ordering(state: SortState) -> Optional[str]:
    if state.field is None or state.direction is None:
        return None
    if state.direction == "desc":
        return f"{DESCENDING_MARKER}{state.field}"
    return state.field


def next_sort_state(current: SortState, code: str) -> SortState:
    """Cycle a column through ascending, descending and unsorted.

    Choosing a column other than the current one always starts at ascending.
    """
    if current.field != code:
        return SortState(code, "asc")
    if current.direction == "asc":
        return SortState(code, "desc")
    return UNSORTED
