"""Qt binding for TableSorter.

``SorterProxyModel`` puts a TableSorter between a source model and a view:
filtering and ordering both come from the sorter, header clicks drive its
three-state cycle. Rows seen by the sorter are source row numbers, answered
by ``QtModelRowAccessor``.

The sort direction is already part of the sorter's comparator, so the proxy
always sorts in Qt ascending order; NATURAL restores source order.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from PyQt6.QtCore import QModelIndex, QObject, QSortFilterProxyModel, Qt
from PyQt6.QtWidgets import QHeaderView

from .criteria import FilterCriteria
from .engine import TableSorter
from .events import Event, SorterEvent
from .settings import CATEGORY_KEY, FIELD_LEAF_NODE, ROW_TEXT_SEPARATOR
from .sort_engine import SortDirection, SortState

__all__ = ["SorterProxyModel", "QtModelRowAccessor", "RECORD_ROLE", "SORT_ROLE"]

_log = logging.getLogger(__name__)

RECORD_ROLE = Qt.ItemDataRole.UserRole
SORT_ROLE = Qt.ItemDataRole.UserRole + 1


class QtModelRowAccessor:
    """Row contract over a flat Qt item model.

    Column 0 carries the row record in ``RECORD_ROLE``: a mapping or any
    object with attributes. A record with a ``category`` value marks a
    category row.
    """

    def __init__(self, model: Any):
        self._model = model

    def record(self, row: int) -> Any:
        return self._model.data(self._model.index(row, 0), RECORD_ROLE)

    def field_value(self, row: int, key: str) -> Any:
        rec = self.record(row)
        if rec is None:
            return None
        if isinstance(rec, Mapping):
            return rec.get(key)
        return getattr(rec, key, None)

    def is_category(self, row: int) -> bool:
        return self.field_value(row, CATEGORY_KEY) is not None

    def leaf_node(self, row: int) -> Any:
        return self.field_value(row, FIELD_LEAF_NODE)

    def row_text(self, row: int) -> str:
        parts = []
        for col in range(self._model.columnCount()):
            value = self._model.data(self._model.index(row, col), Qt.ItemDataRole.DisplayRole)
            parts.append("" if value is None else str(value))
        return ROW_TEXT_SEPARATOR.join(parts)

    def cell_value(self, row: int, column: int) -> Any:
        idx = self._model.index(row, column)
        value = self._model.data(idx, SORT_ROLE)
        if value is None:
            value = self._model.data(idx, Qt.ItemDataRole.DisplayRole)
        return value


class SorterProxyModel(QSortFilterProxyModel):
    def __init__(
        self,
        sorter: Optional[TableSorter] = None,
        source_model: Any = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._header: Optional[QHeaderView] = None
        if sorter is None:
            if source_model is None:
                raise ValueError("either a sorter or a source model is required")
            sorter = TableSorter(QtModelRowAccessor(source_model))
        self._sorter = sorter
        self._subscription = sorter.events.subscribe(
            SorterEvent.FILTER_CHANGED, self._on_filter_changed
        )
        # Unsubscribe on destruction; the sorter may outlive the proxy
        bus, sub = sorter.events, self._subscription
        self.destroyed.connect(lambda *_: bus.unsubscribe(sub))  # type: ignore
        if source_model is not None:
            self.setSourceModel(source_model)

    def sorter(self) -> TableSorter:
        return self._sorter

    # Inputs ---------------------------------------------------------
    def setStringFilter(self, text: str):
        self._sorter.set_string_filter(text)

    def setFilterCriteria(self, criteria: Optional[FilterCriteria]):
        self._sorter.set_filter_criteria(criteria)

    def setColumnSortable(self, column: int, sortable: bool):
        self._sorter.set_sortable(column, sortable)

    def setToggle(self, name: str, enabled: bool):
        """Flip one filter checkbox, keeping the rest of the criteria."""
        criteria = self._sorter.filter_criteria().with_toggles({name: enabled})
        self._sorter.set_filter_criteria(criteria)

    def detach(self):
        """Stop following the sorter's filter changes."""
        self._sorter.events.unsubscribe(self._subscription)

    def bindHeader(self, header: QHeaderView):
        """Route header clicks through the three-state cycle."""
        self._header = header
        header.setSectionsClickable(True)
        header.setSortIndicatorShown(True)
        header.sectionClicked.connect(self.toggleSortOrder)  # type: ignore
        self._update_indicator(self._sorter.current_sort_state())

    def toggleSortOrder(self, column: int) -> SortState:
        state = self._sorter.toggle_sort_order(column)
        if state.is_natural:
            self.sort(-1)
        else:
            self.sort(state.column, Qt.SortOrder.AscendingOrder)
            # Same Qt column/order as before does not re-sort on its own
            self.invalidate()
        self._update_indicator(state)
        return state

    # Qt overrides ---------------------------------------------------
    def filterAcceptsRow(self, source_row: int, source_parent: QModelIndex) -> bool:  # type: ignore[override]
        row_filter = self._sorter.row_filter()
        if row_filter is None:
            return True
        return row_filter(source_row)

    def lessThan(self, left: QModelIndex, right: QModelIndex) -> bool:  # type: ignore[override]
        return self._sorter.comparator()(left.row(), right.row()) < 0

    # Internal -------------------------------------------------------
    def _on_filter_changed(self, event: Event) -> None:
        _log.debug("filter changed (%s); re-filtering proxy", event.payload)
        self.invalidateFilter()

    def _update_indicator(self, state: SortState) -> None:
        if self._header is None:
            return
        if state.is_natural:
            self._header.setSortIndicator(-1, Qt.SortOrder.AscendingOrder)
        elif state.direction is SortDirection.DESCENDING:
            self._header.setSortIndicator(state.column, Qt.SortOrder.DescendingOrder)
        else:
            self._header.setSortIndicator(state.column, Qt.SortOrder.AscendingOrder)
