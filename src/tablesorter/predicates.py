"""Row predicate primitives.

Every predicate is an immutable value object called as ``predicate(row)``.
Parameters are copied into the instance at construction, so two predicates
built from the same inputs compare equal and nothing is captured by
reference from the caller's loop variables.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Hashable, Tuple

from .adapters import NodeAncestry, ParentChainAncestry, RowAccessor

__all__ = [
    "RowPredicate",
    "StringMatchPredicate",
    "RangePredicate",
    "SetMembershipPredicate",
    "AbsentOrMemberPredicate",
    "HierarchyMembershipPredicate",
    "BooleanTogglePredicate",
    "CategoryPredicate",
    "AllOf",
    "AnyOf",
    "FilterGroup",
]

RowPredicate = Callable[[Hashable], bool]


def _is_member(value: Any, allowed: FrozenSet[Any]) -> bool:
    try:
        return value in allowed
    except TypeError:  # unhashable field value
        return False


@dataclass(frozen=True)
class StringMatchPredicate:
    """Case-insensitive literal substring match on the row text.

    The text is escaped before compiling, so brackets, parentheses and
    slashes are matched literally.
    """

    text: str
    accessor: RowAccessor = field(repr=False)
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.text:
            raise ValueError("string filter text must not be empty")
        object.__setattr__(self, "_regex", re.compile(re.escape(self.text), re.IGNORECASE))

    def __call__(self, row: Hashable) -> bool:
        return self._regex.search(self.accessor.row_text(row)) is not None


@dataclass(frozen=True)
class RangePredicate:
    """``low <= field <= high``.

    Rows without the field, or whose value does not compare with the bounds,
    are excluded.
    """

    key: str
    low: int
    high: int
    accessor: RowAccessor = field(repr=False)

    def __call__(self, row: Hashable) -> bool:
        value = self.accessor.field_value(row, self.key)
        if value is None:
            return False
        try:
            return self.low <= value <= self.high
        except TypeError:
            return False


@dataclass(frozen=True)
class SetMembershipPredicate:
    key: str
    allowed: FrozenSet[Any]
    accessor: RowAccessor = field(repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed", frozenset(self.allowed))

    def __call__(self, row: Hashable) -> bool:
        value = self.accessor.field_value(row, self.key)
        if value is None:
            return False
        return _is_member(value, self.allowed)


@dataclass(frozen=True)
class AbsentOrMemberPredicate(SetMembershipPredicate):
    """Like SetMembershipPredicate, but a row without the field also passes."""

    def __call__(self, row: Hashable) -> bool:
        value = self.accessor.field_value(row, self.key)
        if value is None:
            return True
        return _is_member(value, self.allowed)


@dataclass(frozen=True)
class HierarchyMembershipPredicate:
    """True if the row's leaf node lies below (or is) one of the selected nodes."""

    selected: Tuple[Any, ...]
    accessor: RowAccessor = field(repr=False)
    ancestry: NodeAncestry = field(default_factory=ParentChainAncestry, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "selected", tuple(self.selected))

    def __call__(self, row: Hashable) -> bool:
        leaf = self.accessor.leaf_node(row)
        if leaf is None:
            return False
        return any(self.ancestry.is_descendant_or_self(leaf, node) for node in self.selected)


@dataclass(frozen=True)
class BooleanTogglePredicate:
    """A named on/off switch. Composition omits the guarded group when off."""

    name: str
    enabled: bool

    @classmethod
    def from_toggles(cls, toggles, name: str) -> "BooleanTogglePredicate":
        return cls(name, bool(toggles.get(name, False)))

    def __bool__(self) -> bool:
        return self.enabled

    def __call__(self, row: Hashable) -> bool:
        return self.enabled


@dataclass(frozen=True)
class CategoryPredicate:
    """Matches category rows (or, with ``expected=False``, data rows)."""

    accessor: RowAccessor = field(repr=False)
    expected: bool = True

    def __call__(self, row: Hashable) -> bool:
        return bool(self.accessor.is_category(row)) is self.expected


@dataclass(frozen=True)
class AllOf:
    members: Tuple[RowPredicate, ...]

    def __call__(self, row: Hashable) -> bool:
        return all(p(row) for p in self.members)


@dataclass(frozen=True)
class AnyOf:
    """OR over members; an empty AnyOf rejects every row."""

    members: Tuple[RowPredicate, ...]

    def __call__(self, row: Hashable) -> bool:
        return any(p(row) for p in self.members)


@dataclass(frozen=True)
class FilterGroup:
    """Predicates over one filter dimension, OR'd together."""

    group_id: str
    members: Tuple[RowPredicate, ...]

    def __call__(self, row: Hashable) -> bool:
        return any(p(row) for p in self.members)
