"""Comparable wrappers for table cells (sort by number, display as text).

``SortableValue`` is meant for columns that normally contain a number but
sometimes contain text. Text that is not an integer sorts as if it had the
value -1, i.e. before every valid number in ascending order. There is no
alphabetic fallback.

``BankNumber`` carries an explicit ordinal next to the text that is shown,
e.g. a bank cell rendered as ``"MSB/LSB"`` but sorted by the full bank number.
"""

from __future__ import annotations

import re
from functools import total_ordering
from typing import Any

from .settings import NON_NUMERIC_ORDINAL

__all__ = ["SortableValue", "BankNumber"]

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")

# Signed 64-bit range; text outside it is not a valid number
_MIN_ORDINAL = -(2**63)
_MAX_ORDINAL = 2**63 - 1


@total_ordering
class _OrdinalValue:
    """Common ordering on ``ordinal``; the display string is never compared."""

    __slots__ = ("ordinal", "display")

    ordinal: int
    display: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _OrdinalValue):
            return NotImplemented
        return self.ordinal == other.ordinal

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, _OrdinalValue):
            return NotImplemented
        return self.ordinal < other.ordinal

    def __hash__(self) -> int:
        return hash(self.ordinal)

    def __str__(self) -> str:
        return self.display

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ordinal={self.ordinal!r}, display={self.display!r})"


def _in_range(number: int) -> bool:
    return _MIN_ORDINAL <= number <= _MAX_ORDINAL


class SortableValue(_OrdinalValue):
    __slots__ = ()

    def __init__(self, value: Any):
        # bool is an int subclass but not a cell number
        if isinstance(value, int) and not isinstance(value, bool):
            self.ordinal = value
            self.display = str(value)
        elif isinstance(value, str) and _INTEGER_RE.fullmatch(value) and _in_range(int(value)):
            self.ordinal = int(value)
            self.display = value
        else:
            self.ordinal = NON_NUMERIC_ORDINAL
            self.display = ""


class BankNumber(_OrdinalValue):
    __slots__ = ()

    def __init__(self, bank_number: int, display: str = ""):
        self.ordinal = bank_number
        self.display = display

    @classmethod
    def from_msb_lsb(cls, msb: int, lsb: int) -> "BankNumber":
        return cls((msb << 7) | lsb, f"{msb}/{lsb}")
