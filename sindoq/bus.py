"""An in-process event bus fanning events out to subscribers."""

from __future__ import annotations

import threading
from typing import Callable, Dict, Iterable, List, NamedTuple

from .events import Emitter, Event, EventHandler, EventType


class _Subscription(NamedTuple):
    id: int
    handler: EventHandler


class Bus(Emitter):
    """Event bus delivering each event to type-specific and catch-all subscribers."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._subscribers: Dict[EventType, List[_Subscription]] = {}
        self._all_subs: List[_Subscription] = []
        self._next_id = 0

    def _targets(self, event: Event) -> List[EventHandler]:
        with self._lock:
            subs = list(self._subscribers.get(event.type, ()))
            subs.extend(self._all_subs)
        return [sub.handler for sub in subs]

    def emit(self, event: Event) -> None:
        """Deliver the event to each handler on its own thread."""
        for handler in self._targets(event):
            threading.Thread(target=handler, args=(event,), daemon=True).start()

    def emit_sync(self, event: Event) -> None:
        """Deliver the event to each handler in turn, blocking until all return."""
        for handler in self._targets(event):
            handler(event)

    def _new_id(self) -> int:
        sub_id = self._next_id
        self._next_id += 1
        return sub_id

    def subscribe(self, event_type: EventType, handler: EventHandler) -> Callable[[], None]:
        """Register a handler for one event type; return an unsubscribe function."""
        with self._lock:
            sub_id = self._new_id()
            self._subscribers.setdefault(event_type, []).append(_Subscription(sub_id, handler))

        def unsubscribe() -> None:
            with self._lock:
                subs = self._subscribers.get(event_type, [])
                self._subscribers[event_type] = [s for s in subs if s.id != sub_id]

        return unsubscribe

    def subscribe_multiple(
        self, event_types: Iterable[EventType], handler: EventHandler
    ) -> Callable[[], None]:
        """Register a handler for several event types; return one unsubscribe function."""
        unsubscribers = [self.subscribe(et, handler) for et in event_types]

        def unsubscribe() -> None:
            for unsub in unsubscribers:
                unsub()

        return unsubscribe

    def subscribe_all(self, handler: EventHandler) -> Callable[[], None]:
        """Register a handler for every event; return an unsubscribe function."""
        with self._lock:
            sub_id = self._new_id()
            self._all_subs.append(_Subscription(sub_id, handler))

        def unsubscribe() -> None:
            with self._lock:
                self._all_subs = [s for s in self._all_subs if s.id != sub_id]

        return unsubscribe

    def subscriber_count(self) -> int:
        """Return the total number of subscriptions."""
        with self._lock:
            return len(self._all_subs) + sum(len(s) for s in self._subscribers.values())

    def clear(self) -> None:
        """Remove every subscriber."""
        with self._lock:
            self._subscribers = {}
            self._all_subs = []