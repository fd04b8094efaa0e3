"""Sorter for export warning tables.

Adds a warning-kind filter to the generic TableSorter: each known warning
kind has its own switch, and ``other`` covers every warning that is not one
of the known kinds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Hashable, List

from .adapters import RowAccessor
from .criteria import FilterCriteria
from .engine import TableSorter
from .predicates import FilterGroup, RowPredicate, SetMembershipPredicate
from .settings import (
    FIELD_WARNING,
    KNOWN_WARNINGS,
    WARNING_IGNORED_META_MESSAGE,
    WARNING_IGNORED_SHORT_MESSAGE,
    WARNING_IGNORED_SYSEX_MESSAGE,
    WARNING_OFF_NOT_FOUND,
    WARNING_REST_SKIPPED,
)

__all__ = ["WarningTableSorter", "OtherWarningPredicate", "GROUP_WARNINGS"]

GROUP_WARNINGS = "warnings"


@dataclass(frozen=True)
class OtherWarningPredicate:
    """Rows whose warning is none of the known kinds."""

    accessor: RowAccessor = field(repr=False)
    known: FrozenSet[str] = frozenset(KNOWN_WARNINGS)

    def __call__(self, row: Hashable) -> bool:
        return self.accessor.field_value(row, FIELD_WARNING) not in self.known


class WarningTableSorter(TableSorter):
    def __init__(self, accessor: RowAccessor, **kwargs):
        self._shown_kinds: FrozenSet[str] = frozenset(KNOWN_WARNINGS)
        self._show_other = True
        super().__init__(accessor, **kwargs)

    def set_warning_filters(
        self,
        short_msg: bool = True,
        meta_msg: bool = True,
        sysex_msg: bool = True,
        rest_skipped: bool = True,
        off_not_found: bool = True,
        other: bool = True,
    ) -> None:
        switches = {
            WARNING_IGNORED_SHORT_MESSAGE: short_msg,
            WARNING_IGNORED_META_MESSAGE: meta_msg,
            WARNING_IGNORED_SYSEX_MESSAGE: sysex_msg,
            WARNING_REST_SKIPPED: rest_skipped,
            WARNING_OFF_NOT_FOUND: off_not_found,
        }
        self._shown_kinds = frozenset(kind for kind, on in switches.items() if on)
        self._show_other = other
        self.filter()

    def filter_groups(self, criteria: FilterCriteria) -> List[FilterGroup]:
        members: List[RowPredicate] = []
        if self._shown_kinds:
            members.append(SetMembershipPredicate(FIELD_WARNING, self._shown_kinds, self.accessor))
        if self._show_other:
            members.append(OtherWarningPredicate(self.accessor))
        groups = super().filter_groups(criteria)
        # Always present: with every switch off nothing is shown
        groups.append(FilterGroup(GROUP_WARNINGS, tuple(members)))
        return groups
