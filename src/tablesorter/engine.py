"""Table sorter: filtering and three-state sorting for one table view.

A ``TableSorter`` owns the filter criteria, the string filter and the sort
state of exactly one view. Every mutating call recomputes the inclusion
predicate and the comparator before returning, so readers always see a
consistent pair.

Usage:
    sorter = TableSorter(MappingRowAccessor(records, columns))
    sorter.set_filter_criteria(FilterCriteria.for_channels([0, 2], independent=True))
    sorter.set_string_filter("note")
    sorter.toggle_sort_order(2)
    visible = sorter.filter_and_sort(range(len(records)))
"""

from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Callable, Dict, Hashable, Iterable, List, Optional

from .adapters import NodeAncestry, RowAccessor
from .category_policy import CategoryVisibilityPolicy
from .composer import FilterComposer
from .criteria import FilterCriteria
from .errors import InvalidColumnError
from .events import EventBus, SorterEvent
from .predicates import FilterGroup, RowPredicate
from .sort_engine import (
    ColumnComparator,
    CompareFunc,
    NaturalOrder,
    SortDirection,
    SortEngine,
    SortState,
    compare_values,
)

__all__ = ["TableSorter", "include_all"]

_log = logging.getLogger(__name__)


def include_all(row: Hashable) -> bool:
    return True


class TableSorter:
    def __init__(
        self,
        accessor: RowAccessor,
        *,
        ancestry: Optional[NodeAncestry] = None,
        events: Optional[EventBus] = None,
    ):
        self._accessor = accessor
        self._composer = FilterComposer(accessor, ancestry)
        self._policy = CategoryVisibilityPolicy()
        self._sort = SortEngine()
        self._comparators: Dict[int, CompareFunc] = {}
        self._criteria = FilterCriteria()
        self._string_text = ""
        self._row_filter: Optional[RowPredicate] = None
        self._comparator: Callable[[Hashable, Hashable], int] = NaturalOrder()
        self.events = events or EventBus()

    # Setup ----------------------------------------------------------
    def set_sortable(self, column: int, sortable: bool) -> None:
        self._sort.set_sortable(column, sortable)

    def is_sortable(self, column: int) -> bool:
        return self._sort.is_sortable(column)

    def set_comparator(self, column: int, compare: Optional[CompareFunc]) -> None:
        if column < 0:
            raise InvalidColumnError(f"invalid column index {column}", context={"column": column})
        if compare is None:
            self._comparators.pop(column, None)
        else:
            self._comparators[column] = compare
        self._rebuild_comparator()

    # Filter inputs --------------------------------------------------
    def set_string_filter(self, text: str) -> None:
        """Filter by literal, case-insensitive substring; ``""`` clears it."""
        self._string_text = text or ""
        self.filter()

    def set_filter_criteria(self, criteria: Optional[FilterCriteria]) -> None:
        self._criteria = criteria if criteria is not None else FilterCriteria()
        self.filter()

    # Sorting --------------------------------------------------------
    def toggle_sort_order(self, column: int) -> SortState:
        before = self._sort.state
        state = self._sort.toggle(column)
        if state == before:
            return state
        # Visible rows must be settled before the new order is applied
        self._policy.invalidate()
        self.filter()
        self._rebuild_comparator()
        self.events.publish(SorterEvent.SORT_CHANGED, state)
        return state

    def reset_sort_order(self) -> None:
        if self._sort.state.is_natural:
            return
        self._sort.reset()
        self._policy.invalidate()
        self.filter()
        self._rebuild_comparator()
        self.events.publish(SorterEvent.SORT_CHANGED, self._sort.state)

    # Recomposition --------------------------------------------------
    def filter_groups(self, criteria: FilterCriteria) -> List[FilterGroup]:
        """Dimension groups for ``criteria``; subclasses supply other catalogues."""
        return self._composer.dimension_groups(criteria)

    def filter(self) -> None:
        """Rebuild the inclusion predicate from the current inputs."""
        shown = self._policy.categories_shown(self._sort.state)
        groups = self.filter_groups(self._criteria)
        self._row_filter = self._composer.compose(groups, self._string_text, shown)
        self.events.publish(SorterEvent.FILTER_CHANGED, {"active": self._row_filter is not None})

    def _rebuild_comparator(self) -> None:
        state = self._sort.state
        if state.column is None:
            self._comparator = NaturalOrder()
            return
        self._comparator = ColumnComparator(
            state.column,
            state.direction is SortDirection.DESCENDING,
            self._accessor,
            self._comparators.get(state.column, compare_values),
        )

    # Outputs --------------------------------------------------------
    @property
    def accessor(self) -> RowAccessor:
        return self._accessor

    def row_filter(self) -> Optional[RowPredicate]:
        """Installed filter, or ``None`` when every row is included."""
        return self._row_filter

    def inclusion_predicate(self) -> RowPredicate:
        return self._row_filter if self._row_filter is not None else include_all

    def comparator(self) -> Callable[[Hashable, Hashable], int]:
        return self._comparator

    def current_sort_state(self) -> SortState:
        return self._sort.state

    def categories_shown(self) -> bool:
        return self._policy.categories_shown(self._sort.state)

    def filter_criteria(self) -> FilterCriteria:
        return self._criteria

    def string_filter(self) -> str:
        return self._string_text

    def filter_and_sort(self, rows: Iterable[Hashable]) -> List[Hashable]:
        include = self.inclusion_predicate()
        visible = [r for r in rows if include(r)]
        if self._sort.state.is_natural:
            return visible
        return sorted(visible, key=cmp_to_key(self._comparator))
