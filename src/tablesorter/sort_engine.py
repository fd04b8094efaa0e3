"""Three-state column sorting.

Activating a column cycles NATURAL -> ASCENDING -> DESCENDING -> NATURAL.
Activating a different column while sorted restarts the cycle at ASCENDING
on that column. NATURAL has no column and means "model order".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Optional

from .adapters import RowAccessor
from .errors import InvalidColumnError

__all__ = [
    "SortDirection",
    "SortState",
    "NATURAL",
    "SortEngine",
    "compare_values",
    "ColumnComparator",
    "NaturalOrder",
    "CompareFunc",
]

_log = logging.getLogger(__name__)

CompareFunc = Callable[[Any, Any], int]


class SortDirection(str, Enum):
    NATURAL = "natural"
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class SortState:
    column: Optional[int] = None
    direction: SortDirection = SortDirection.NATURAL

    def __post_init__(self) -> None:
        if (self.direction is SortDirection.NATURAL) != (self.column is None):
            raise ValueError(f"inconsistent sort state: {self.direction.value} / {self.column}")

    @property
    def is_natural(self) -> bool:
        return self.direction is SortDirection.NATURAL


NATURAL = SortState()


def _check_column(column: int) -> None:
    if column < 0:
        raise InvalidColumnError(f"invalid column index {column}", context={"column": column})


class SortEngine:
    def __init__(self) -> None:
        self._sortable: Dict[int, bool] = {}
        self._state: SortState = NATURAL

    @property
    def state(self) -> SortState:
        return self._state

    def set_sortable(self, column: int, sortable: bool) -> None:
        _check_column(column)
        self._sortable[column] = sortable

    def is_sortable(self, column: int) -> bool:
        return self._sortable.get(column, True)

    def next_state(self, column: int) -> SortState:
        """State reached by activating ``column`` (does not apply it)."""
        _check_column(column)
        if not self.is_sortable(column):
            return self._state
        current = self._state
        if current.column == column:
            if current.direction is SortDirection.ASCENDING:
                return SortState(column, SortDirection.DESCENDING)
            return NATURAL
        return SortState(column, SortDirection.ASCENDING)

    def toggle(self, column: int) -> SortState:
        new_state = self.next_state(column)
        if new_state == self._state:
            _log.debug("column %s is not sortable; sort state unchanged", column)
        else:
            _log.debug("sort state %s -> %s", self._state, new_state)
        self._state = new_state
        return new_state

    def reset(self) -> None:
        self._state = NATURAL


def _kind(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return 1
    return 2


def compare_values(a: Any, b: Any) -> int:
    """Default cell comparison.

    Ordered by kind first: ``None``, then plain numbers, then everything else,
    so a column mixing numbers and text still sorts consistently. Within a
    kind values use their natural order; values that refuse to compare fall
    back to case-insensitive text.
    """
    ka, kb = _kind(a), _kind(b)
    if ka != kb:
        return -1 if ka < kb else 1
    if ka == 0:
        return 0
    try:
        if a < b:
            return -1
        if b < a:
            return 1
        return 0
    except TypeError:
        sa, sb = str(a).lower(), str(b).lower()
        return (sa > sb) - (sa < sb)


@dataclass(frozen=True)
class ColumnComparator:
    column: int
    descending: bool
    accessor: RowAccessor = field(repr=False)
    compare: CompareFunc = field(default=compare_values, repr=False)

    def __call__(self, left: Hashable, right: Hashable) -> int:
        result = self.compare(
            self.accessor.cell_value(left, self.column),
            self.accessor.cell_value(right, self.column),
        )
        return -result if self.descending else result


@dataclass(frozen=True)
class NaturalOrder:
    """Every pair ties, so a stable sort keeps model order."""

    def __call__(self, left: Hashable, right: Hashable) -> int:
        return 0
