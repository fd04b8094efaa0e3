"""Filter composition.

Builds the single inclusion predicate of a view from the active filter
groups. Composition is rebuilt from scratch on every change:

1. Every active group must pass (AND); inside a group one member is enough (OR).
   A group that is not active is left out entirely, it never counts as false.
2. While category rows are shown they are always included:
   ``is_category(row) OR all_groups(row)``. While they are hidden a
   "data rows only" group joins the AND chain.
3. No active group at all and categories shown -> ``None`` (no filter
   installed, every row visible).
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .adapters import NodeAncestry, ParentChainAncestry, RowAccessor
from .criteria import FilterCriteria
from .predicates import (
    AbsentOrMemberPredicate,
    AllOf,
    AnyOf,
    BooleanTogglePredicate,
    CategoryPredicate,
    FilterGroup,
    HierarchyMembershipPredicate,
    RangePredicate,
    RowPredicate,
    SetMembershipPredicate,
    StringMatchPredicate,
)
from .settings import (
    FIELD_CHANNEL,
    FIELD_TICK,
    FIELD_TRACK,
    FILTER_CHANNEL_INDEPENDENT,
    FILTER_LIMIT_TICKS,
    FILTER_LIMIT_TRACKS,
    FILTER_NODE,
)

__all__ = [
    "FilterComposer",
    "GROUP_CHANNEL",
    "GROUP_TICKS",
    "GROUP_NODES",
    "GROUP_TRACKS",
    "GROUP_STRING",
    "GROUP_HIDE_CATEGORIES",
]

_log = logging.getLogger(__name__)

GROUP_CHANNEL = "channel"
GROUP_TICKS = "ticks"
GROUP_NODES = "nodes"
GROUP_TRACKS = "tracks"
GROUP_STRING = "string"
GROUP_HIDE_CATEGORIES = "hide_categories"


class FilterComposer:
    def __init__(self, accessor: RowAccessor, ancestry: Optional[NodeAncestry] = None):
        self._accessor = accessor
        self._ancestry = ancestry or ParentChainAncestry()

    @property
    def accessor(self) -> RowAccessor:
        return self._accessor

    # Dimension catalogue ---------------------------------------------
    def dimension_groups(self, criteria: FilterCriteria) -> List[FilterGroup]:
        """Active groups for the channel / tick / node / track dimensions."""
        acc = self._accessor
        toggles = criteria.toggles
        groups: List[FilterGroup] = []

        # Channel group: only once channel toggles have been supplied. With all
        # of them off the group is empty and nothing passes.
        if criteria.mentions_channels():
            members: List[RowPredicate] = []
            if BooleanTogglePredicate.from_toggles(toggles, FILTER_CHANNEL_INDEPENDENT):
                members.append(AbsentOrMemberPredicate(FIELD_CHANNEL, frozenset(), acc))
            for channel in criteria.enabled_channels():
                members.append(SetMembershipPredicate(FIELD_CHANNEL, frozenset({channel}), acc))
            groups.append(FilterGroup(GROUP_CHANNEL, tuple(members)))

        if BooleanTogglePredicate.from_toggles(toggles, FILTER_LIMIT_TICKS):
            groups.append(
                FilterGroup(
                    GROUP_TICKS,
                    (RangePredicate(FIELD_TICK, criteria.tick_from, criteria.tick_to, acc),),
                )
            )

        if BooleanTogglePredicate.from_toggles(toggles, FILTER_NODE) and criteria.nodes:
            groups.append(
                FilterGroup(
                    GROUP_NODES,
                    (HierarchyMembershipPredicate(criteria.nodes, acc, self._ancestry),),
                )
            )

        if BooleanTogglePredicate.from_toggles(toggles, FILTER_LIMIT_TRACKS):
            groups.append(
                FilterGroup(
                    GROUP_TRACKS,
                    (SetMembershipPredicate(FIELD_TRACK, criteria.tracks, acc),),
                )
            )
        return groups

    # Composition -----------------------------------------------------
    def compose(
        self,
        groups: Sequence[FilterGroup],
        string_text: str,
        categories_shown: bool,
    ) -> Optional[RowPredicate]:
        acc = self._accessor
        chain: List[RowPredicate] = []
        if not categories_shown:
            chain.append(FilterGroup(GROUP_HIDE_CATEGORIES, (CategoryPredicate(acc, False),)))
        chain.extend(groups)
        if string_text:
            chain.append(FilterGroup(GROUP_STRING, (StringMatchPredicate(string_text, acc),)))

        if not chain:
            _log.debug("no active filter groups; including every row")
            return None

        _log.debug(
            "composed filter: groups=%s categories_shown=%s",
            [g.group_id for g in chain if isinstance(g, FilterGroup)],
            categories_shown,
        )
        data_filter = AllOf(tuple(chain))
        if categories_shown:
            return AnyOf((CategoryPredicate(acc), data_filter))
        return data_filter
