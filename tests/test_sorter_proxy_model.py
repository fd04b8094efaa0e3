from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pytest

pytest.importorskip("PyQt6")

from PyQt6.QtCore import Qt  # noqa: E402
from PyQt6.QtGui import QStandardItem, QStandardItemModel  # noqa: E402
from PyQt6.QtWidgets import QTableView  # noqa: E402

from tablesorter.criteria import FilterCriteria  # noqa: E402
from tablesorter.qt_proxy import RECORD_ROLE, SORT_ROLE, QtModelRowAccessor, SorterProxyModel  # noqa: E402
from tablesorter.sort_engine import NATURAL, SortDirection, SortState  # noqa: E402


@dataclass(eq=False)
class Msg:
    tick: Optional[int] = None
    channel: Optional[int] = None
    track: Optional[int] = None
    category: Optional[str] = None


def _model():
    rows = [
        (Msg(category="Channel"), ["", "", "Channel"]),
        (Msg(tick=30, channel=0), ["30", "0", "Note On"]),
        (Msg(tick=10, channel=1), ["10", "1", "Note Off"]),
        (Msg(tick=200, channel=0), ["200", "0", "Control Change"]),
        (Msg(category="Meta"), ["", "", "Meta"]),
        (Msg(tick=5), ["5", "", "Tempo"]),
    ]
    model = QStandardItemModel(0, 3)
    for record, texts in rows:
        items = [QStandardItem(t) for t in texts]
        items[0].setData(record, RECORD_ROLE)
        if record.tick is not None:
            items[0].setData(record.tick, SORT_ROLE)
        model.appendRow(items)
    return model


def _messages(proxy):
    return [proxy.data(proxy.index(r, 2), Qt.ItemDataRole.DisplayRole) for r in range(proxy.rowCount())]


def test_accessor_reads_model(qtbot):
    acc = QtModelRowAccessor(_model())
    assert acc.is_category(0)
    assert not acc.is_category(1)
    assert acc.field_value(1, "channel") == 0
    assert acc.field_value(5, "channel") is None
    assert acc.row_text(2) == "10\t1\tNote Off"
    assert acc.cell_value(3, 0) == 200
    assert acc.cell_value(3, 2) == "Control Change"


def test_string_filter_keeps_categories(qtbot):
    proxy = SorterProxyModel(source_model=_model())
    assert proxy.rowCount() == 6
    proxy.setStringFilter("note")
    assert _messages(proxy) == ["Channel", "Note On", "Note Off", "Meta"]
    proxy.setStringFilter("")
    assert proxy.rowCount() == 6


def test_three_state_sort_cycle(qtbot):
    proxy = SorterProxyModel(source_model=_model())
    state = proxy.toggleSortOrder(0)
    assert state == SortState(0, SortDirection.ASCENDING)
    # Numeric sort role, categories hidden
    assert _messages(proxy) == ["Tempo", "Note Off", "Note On", "Control Change"]
    proxy.toggleSortOrder(0)
    assert _messages(proxy) == ["Control Change", "Note On", "Note Off", "Tempo"]
    assert proxy.toggleSortOrder(0) == NATURAL
    assert _messages(proxy) == ["Channel", "Note On", "Note Off", "Control Change", "Meta", "Tempo"]


def test_criteria_filter(qtbot):
    proxy = SorterProxyModel(source_model=_model())
    proxy.setFilterCriteria(FilterCriteria.for_channels([0]))
    assert _messages(proxy) == ["Channel", "Note On", "Control Change", "Meta"]


def test_header_clicks_drive_cycle(qtbot):
    model = _model()
    proxy = SorterProxyModel(source_model=model)
    view = QTableView()
    qtbot.addWidget(view)
    view.setModel(proxy)
    proxy.bindHeader(view.horizontalHeader())
    proxy.setColumnSortable(1, False)
    view.horizontalHeader().sectionClicked.emit(1)
    assert proxy.sorter().current_sort_state() == NATURAL
    view.horizontalHeader().sectionClicked.emit(0)
    assert proxy.sorter().current_sort_state() == SortState(0, SortDirection.ASCENDING)
    assert view.horizontalHeader().sortIndicatorSection() == 0


def test_requires_sorter_or_model(qtbot):
    with pytest.raises(ValueError):
        SorterProxyModel()


def test_set_toggle_keeps_other_criteria(qtbot):
    from tablesorter.settings import FILTER_CHANNEL_INDEPENDENT

    proxy = SorterProxyModel(source_model=_model())
    proxy.setFilterCriteria(FilterCriteria.for_channels([0]))
    proxy.setToggle(FILTER_CHANNEL_INDEPENDENT, True)
    assert proxy.sorter().filter_criteria().enabled_channels() == (0,)
    assert _messages(proxy) == ["Channel", "Note On", "Control Change", "Meta", "Tempo"]


def test_detach_stops_following_sorter(qtbot):
    from tablesorter.events import SorterEvent

    proxy = SorterProxyModel(source_model=_model())
    bus = proxy.sorter().events
    assert bus.subscriber_count(SorterEvent.FILTER_CHANGED) == 1
    proxy.detach()
    assert bus.subscriber_count(SorterEvent.FILTER_CHANGED) == 0


def test_destroyed_proxy_unsubscribes(qtbot):
    from PyQt6 import sip

    from tablesorter.events import SorterEvent

    proxy = SorterProxyModel(source_model=_model())
    sorter = proxy.sorter()
    sip.delete(proxy)
    assert sorter.events.subscriber_count(SorterEvent.FILTER_CHANGED) == 0
    sorter.set_string_filter("note")
    assert sorter.events.errors == []
