"""Immutable snapshot of all non-string filter inputs.

A view builds a new ``FilterCriteria`` from its widgets on every change and
hands it to ``TableSorter.set_filter_criteria``; the engine never mutates it.
Toggles missing from ``toggles`` count as switched off.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, FrozenSet, Iterable, Mapping, Tuple

from .settings import (
    CHANNEL_COUNT,
    FILTER_CHANNEL_INDEPENDENT,
    FILTER_CHANNEL_PREFIX,
    channel_toggle,
)

__all__ = ["FilterCriteria"]


@dataclass(frozen=True, eq=False)
class FilterCriteria:
    """Current values of the filter widgets.

    Attributes
    ----------
    toggles: named checkbox states (see ``tablesorter.settings``).
    tick_from, tick_to: inclusive tick range, used when ticks are limited.
    nodes: selected hierarchy nodes, used when filtering by node.
    tracks: track numbers to show, used when tracks are limited.
    """

    toggles: Mapping[str, bool] = field(default_factory=dict)
    tick_from: int = 0
    tick_to: int = 0
    nodes: Tuple[Any, ...] = ()
    tracks: FrozenSet[int] = frozenset()

    def __post_init__(self) -> None:
        # Private copies: later changes to the caller's containers must not leak in
        object.__setattr__(
            self, "toggles", MappingProxyType({k: bool(v) for k, v in self.toggles.items()})
        )
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "tracks", frozenset(self.tracks))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterCriteria):
            return NotImplemented
        return (
            dict(self.toggles) == dict(other.toggles)
            and self.tick_from == other.tick_from
            and self.tick_to == other.tick_to
            and self.nodes == other.nodes
            and self.tracks == other.tracks
        )

    __hash__ = None  # type: ignore[assignment]

    def is_on(self, name: str) -> bool:
        return self.toggles.get(name, False)

    def enabled_channels(self) -> Tuple[int, ...]:
        return tuple(c for c in range(CHANNEL_COUNT) if self.is_on(channel_toggle(c)))

    def mentions_channels(self) -> bool:
        """True if any channel-style toggle was supplied at all (on or off)."""
        return any(
            name == FILTER_CHANNEL_INDEPENDENT or name.startswith(FILTER_CHANNEL_PREFIX)
            for name in self.toggles
        )

    def with_toggles(self, changes: Mapping[str, bool]) -> "FilterCriteria":
        merged = dict(self.toggles)
        merged.update(changes)
        return replace(self, toggles=merged)

    @classmethod
    def for_channels(
        cls, channels: Iterable[int], *, independent: bool = False, **kwargs: Any
    ) -> "FilterCriteria":
        """Criteria with the channel group configured; all other channels off."""
        enabled = set(channels)
        toggles = {channel_toggle(c): c in enabled for c in range(CHANNEL_COUNT)}
        toggles[FILTER_CHANNEL_INDEPENDENT] = independent
        toggles.update(kwargs.pop("toggles", {}))
        return cls(toggles=toggles, **kwargs)
