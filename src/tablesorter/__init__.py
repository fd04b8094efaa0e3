"""tablesorter public API.

Curated, intentionally small surface for views and tests. The Qt binding
lives in ``tablesorter.qt_proxy`` and is not imported here, so the engine
stays usable without a QApplication.
"""

from __future__ import annotations

import logging
from typing import Optional

from .adapters import (  # noqa: F401
    MappingRowAccessor,
    NodeAncestry,
    ParentChainAncestry,
    RowAccessor,
    TreeNode,
)
from .criteria import FilterCriteria  # noqa: F401
from .engine import TableSorter  # noqa: F401
from .errors import InvalidColumnError, SorterError  # noqa: F401
from .events import EventBus, SorterEvent  # noqa: F401
from .export_warnings import WarningTableSorter  # noqa: F401
from .settings import LOG_LEVEL
from .sort_engine import NATURAL, SortDirection, SortState  # noqa: F401
from .sortable_value import BankNumber, SortableValue  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "MappingRowAccessor",
    "NodeAncestry",
    "ParentChainAncestry",
    "RowAccessor",
    "TreeNode",
    "FilterCriteria",
    "TableSorter",
    "WarningTableSorter",
    "SorterError",
    "InvalidColumnError",
    "EventBus",
    "SorterEvent",
    "NATURAL",
    "SortDirection",
    "SortState",
    "BankNumber",
    "SortableValue",
    "configure_logging",
]

_handler: Optional[logging.Handler] = None


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stream handler to the package logger (once)."""
    global _handler
    logger = logging.getLogger(__name__)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(_handler)
    logger.setLevel(level if level is not None else LOG_LEVEL)
    return logger
