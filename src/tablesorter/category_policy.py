"""Whether category (summary) rows take part in the view.

Category rows only make sense in model order: they are shown while the sort
state is NATURAL and hidden while a column is sorted.
"""

from __future__ import annotations

from typing import Optional

from .sort_engine import SortState

__all__ = ["CategoryVisibilityPolicy"]


class CategoryVisibilityPolicy:
    def __init__(self) -> None:
        self._cached: Optional[bool] = None

    def categories_shown(self, state: SortState) -> bool:
        if self._cached is None:
            self._cached = state.is_natural
        return self._cached

    def invalidate(self) -> None:
        self._cached = None
