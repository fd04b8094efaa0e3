"""Row and hierarchy access contracts used by the engine.

The engine never inspects concrete row types. A view hands it a
``RowAccessor`` that answers the few questions filtering and sorting need;
rows themselves are opaque (usually the model row number).

``MappingRowAccessor`` covers the common case of a categorized table held as
a list of dicts, where a row is a category row if its ``"category"`` entry is
set. ``TreeNode`` is a minimal parent-linked hierarchy node usable for the
node filter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Iterator, List, Mapping, Optional, Protocol, Sequence

from .settings import CATEGORY_KEY, FIELD_LEAF_NODE, ROW_TEXT_SEPARATOR

__all__ = [
    "RowAccessor",
    "NodeAncestry",
    "TreeNode",
    "ParentChainAncestry",
    "MappingRowAccessor",
]

Row = Hashable


class RowAccessor(Protocol):
    def is_category(self, row: Row) -> bool: ...  # pragma: no cover - structural

    def field_value(self, row: Row, key: str) -> Any: ...  # pragma: no cover

    def leaf_node(self, row: Row) -> Any: ...  # pragma: no cover

    def row_text(self, row: Row) -> str: ...  # pragma: no cover

    def cell_value(self, row: Row, column: int) -> Any: ...  # pragma: no cover


class NodeAncestry(Protocol):
    def is_descendant_or_self(self, node: Any, candidate_ancestor: Any) -> bool: ...  # pragma: no cover


@dataclass(eq=False)
class TreeNode:
    """A node in a read-only hierarchy (e.g. channel -> message type -> leaf)."""

    label: str
    parent: Optional["TreeNode"] = None
    children: List["TreeNode"] = field(default_factory=list)

    def append(self, child: "TreeNode") -> "TreeNode":
        child.parent = self
        self.children.append(child)
        return child

    def chain_to_root(self) -> Iterator["TreeNode"]:
        node: Optional[TreeNode] = self
        while node is not None:
            yield node
            node = node.parent

    def is_descendant_or_self(self, ancestor: "TreeNode") -> bool:
        return any(n is ancestor for n in self.chain_to_root())

    def __repr__(self) -> str:
        return f"TreeNode({self.label!r})"


class ParentChainAncestry:
    """Ancestry test walking ``.parent`` links upwards from the row's node."""

    def is_descendant_or_self(self, node: Any, candidate_ancestor: Any) -> bool:
        while node is not None:
            if node is candidate_ancestor:
                return True
            node = getattr(node, "parent", None)
        return False


class MappingRowAccessor:
    """Row accessor over a sequence of mapping rows; a row is its index.

    ``columns`` lists the mapping keys shown as table columns, in order. They
    make up the row text used by the string filter and the cell values used
    for sorting.
    """

    def __init__(self, records: Sequence[Mapping[str, Any]], columns: Sequence[str]):
        self._records = records
        self._columns = tuple(columns)

    def __len__(self) -> int:
        return len(self._records)

    def rows(self) -> range:
        return range(len(self._records))

    def record(self, row: int) -> Mapping[str, Any]:
        return self._records[row]

    def is_category(self, row: int) -> bool:
        return self._records[row].get(CATEGORY_KEY) is not None

    def field_value(self, row: int, key: str) -> Any:
        return self._records[row].get(key)

    def leaf_node(self, row: int) -> Any:
        return self._records[row].get(FIELD_LEAF_NODE)

    def row_text(self, row: int) -> str:
        rec = self._records[row]
        parts = []
        for key in self._columns:
            value = rec.get(key)
            parts.append("" if value is None else str(value))
        return ROW_TEXT_SEPARATOR.join(parts)

    def cell_value(self, row: int, column: int) -> Any:
        if column >= len(self._columns):
            return None
        return self._records[row].get(self._columns[column])
