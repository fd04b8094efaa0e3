import pytest

from tablesorter.errors import InvalidColumnError
from tablesorter.sort_engine import (
    NATURAL,
    ColumnComparator,
    NaturalOrder,
    SortDirection,
    SortEngine,
    SortState,
    compare_values,
)
from tablesorter.sortable_value import SortableValue

from factories import make_accessor, message


def test_three_state_cycle_on_one_column():
    engine = SortEngine()
    assert engine.state == NATURAL
    assert engine.toggle(2) == SortState(2, SortDirection.ASCENDING)
    assert engine.toggle(2) == SortState(2, SortDirection.DESCENDING)
    assert engine.toggle(2) == NATURAL


def test_other_column_restarts_cycle():
    engine = SortEngine()
    engine.toggle(2)
    engine.toggle(2)
    assert engine.toggle(3) == SortState(3, SortDirection.ASCENDING)


def test_other_column_from_ascending():
    engine = SortEngine()
    engine.toggle(1)
    assert engine.toggle(0) == SortState(0, SortDirection.ASCENDING)


def test_unsortable_column_is_ignored():
    engine = SortEngine()
    engine.set_sortable(4, False)
    assert not engine.is_sortable(4)
    assert engine.toggle(4) == NATURAL
    engine.toggle(1)
    assert engine.toggle(4) == SortState(1, SortDirection.ASCENDING)


def test_negative_column_rejected():
    engine = SortEngine()
    with pytest.raises(InvalidColumnError):
        engine.toggle(-1)
    with pytest.raises(InvalidColumnError):
        engine.set_sortable(-2, True)


def test_sort_state_consistency():
    with pytest.raises(ValueError):
        SortState(None, SortDirection.ASCENDING)
    with pytest.raises(ValueError):
        SortState(1, SortDirection.NATURAL)


def test_compare_values():
    assert compare_values(None, 1) == -1
    assert compare_values(1, None) == 1
    assert compare_values(None, None) == 0
    assert compare_values(2, 10) == -1
    assert compare_values("b", "a") == 1
    # Mixed kinds fall back to text
    assert compare_values(10, "abc") == -1
    assert compare_values(SortableValue("abc"), SortableValue(3)) == -1


def test_column_comparator_direction():
    acc = make_accessor([message(30, 0), message(10, 0), message(20, 0)])
    asc = ColumnComparator(0, False, acc)
    desc = ColumnComparator(0, True, acc)
    assert asc(1, 0) < 0
    assert desc(1, 0) > 0
    assert asc(0, 0) == 0


def test_natural_order_ties():
    assert NaturalOrder()(1, 2) == 0


def test_mixed_numbers_and_text_sort_consistently():
    from functools import cmp_to_key
    from itertools import permutations

    values = [10, "2", 9, None, "abc"]
    results = {tuple(sorted(p, key=cmp_to_key(compare_values))) for p in permutations(values)}
    assert results == {(None, 9, 10, "2", "abc")}
