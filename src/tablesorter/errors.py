"""Structured errors raised by the sorting / filtering engine."""

from __future__ import annotations
from typing import Any


class SorterError(Exception):
    """Base class for engine misuse."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class InvalidColumnError(SorterError):
    """Raised when a column index outside the view is supplied."""
