"""Engine change notifications.

Synchronous publish/subscribe used by a TableSorter to tell its views that
the inclusion predicate or the ordering changed. Dispatch happens inline in
the call that changed the state; there is no queue and no locking (the
engine is driven from a single thread).

A failing handler never aborts the publish cycle: the exception is logged
and kept in ``errors`` for inspection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "SorterEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

_log = logging.getLogger(__name__)


class SorterEvent(str, Enum):
    FILTER_CHANGED = "filter_changed"
    SORT_CHANGED = "sort_changed"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | SorterEvent) -> str:
    return name.value if isinstance(name, SorterEvent) else name


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, Exception]] = []

    def subscribe(
        self, name: str | SorterEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        bucket = self._subs.get(sub.event)
        if bucket and sub in bucket:
            bucket.remove(sub)
            if not bucket:
                self._subs.pop(sub.event, None)
        sub.active = False

    def publish(self, name: str | SorterEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        # Snapshot so handlers may (un)subscribe while we dispatch
        subs = list(self._subs.get(key, ()))
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                _log.warning("handler for %s failed: %s", key, exc, exc_info=True)
                self._errors.append((evt, exc))
            if sub.once:
                self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | SorterEvent) -> int:
        return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, Exception]]:
        return list(self._errors)
