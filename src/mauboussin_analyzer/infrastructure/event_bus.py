"""Event bus infrastructure for the Mauboussin analysis toolkit.

A synchronous pub-sub bus carries the record's mutation events and the
session's report events to whoever listens (a console, an edit log, a
presentation layer's autosave).  Handler errors are caught and logged so a
failing subscriber never breaks an edit.

``EventStore`` keeps an in-memory log of the events of one editing session.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable, Iterable
from typing import NamedTuple

from mauboussin_analyzer.domain.events import DomainEvent

logger = logging.getLogger(__name__)

Handler = Callable[[DomainEvent], None]


class _Subscription(NamedTuple):
    event_type: type[DomainEvent] | None  # None: every event
    handler: Handler

    def matches(self, event: DomainEvent) -> bool:
        return self.event_type is None or isinstance(event, self.event_type)


# ===================================================================== #
#  Event Bus                                                             #
# ===================================================================== #

class EventBus:
    """Synchronous publisher for analysis events.

    Subscriptions are kept in one ordered list and dispatched in the order
    they were made.  A typed subscription also receives subclasses of its
    event type, so subscribing to ``DomainEvent`` is equivalent to
    :meth:`subscribe_all`.  A handler that raises is logged and the
    remaining handlers still run.

    Usage::

        bus = EventBus()
        bus.subscribe(DimensionScoreChanged, on_score)
        record = AnalysisRecord(event_bus=bus)
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscriptions: list[_Subscription] = []

    # -- subscription -------------------------------------------------------

    def subscribe(self, event_type: type[DomainEvent], handler: Handler) -> None:
        """Call *handler* for every published ``event_type`` (or subclass)."""
        self._add(_Subscription(event_type, handler))

    def subscribe_all(self, handler: Handler) -> None:
        """Call *handler* for every published event."""
        self._add(_Subscription(None, handler))

    def unsubscribe(self, event_type: type[DomainEvent], handler: Handler) -> bool:
        """Drop one typed subscription; ``False`` when there was none."""
        return self._remove(_Subscription(event_type, handler))

    def unsubscribe_all(self, handler: Handler) -> bool:
        """Drop one catch-all subscription; ``False`` when there was none."""
        return self._remove(_Subscription(None, handler))

    def _add(self, subscription: _Subscription) -> None:
        with self._lock:
            self._subscriptions.append(subscription)

    def _remove(self, subscription: _Subscription) -> bool:
        with self._lock:
            if subscription not in self._subscriptions:
                return False
            self._subscriptions.remove(subscription)
            return True

    # -- publishing ---------------------------------------------------------

    def publish(self, event: DomainEvent) -> None:
        """Deliver *event* to every matching handler."""
        with self._lock:
            targets = [s.handler for s in self._subscriptions if s.matches(event)]

        for handler in targets:
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %r failed on %s from %r",
                    handler, type(event).__name__, event.source_id,
                )

    def publish_many(self, events: Iterable[DomainEvent]) -> None:
        for event in events:
            self.publish(event)

    # -- introspection ------------------------------------------------------

    def handler_count(self, event_type: type[DomainEvent] | None = None) -> int:
        """Subscriptions made for exactly *event_type*, or all when ``None``."""
        with self._lock:
            if event_type is None:
                return len(self._subscriptions)
            return sum(1 for s in self._subscriptions if s.event_type is event_type)

    def clear(self) -> None:
        with self._lock:
            self._subscriptions.clear()


# ===================================================================== #
#  Event Store                                                           #
# ===================================================================== #

class EventStore:
    """Append-only log of the events of one editing session.

    Parameters
    ----------
    max_size:
        Keep at most this many events, dropping the oldest first.  ``0``
        keeps everything.

    Wire it to a bus with :meth:`attach`::

        store = EventStore()
        store.attach(bus)
    """

    def __init__(self, max_size: int = 0) -> None:
        if max_size < 0:
            raise ValueError(f"max_size must be >= 0, got {max_size}")
        self._events: deque[DomainEvent] = deque(maxlen=max_size or None)
        self._lock = threading.Lock()

    def attach(self, bus: EventBus) -> None:
        """Log every event published on *bus* from now on."""
        bus.subscribe_all(self.append)

    def append(self, event: DomainEvent) -> None:
        with self._lock:
            self._events.append(event)

    def get_events(
        self,
        event_type: type[DomainEvent] | None = None,
        source_id: str | None = None,
    ) -> list[DomainEvent]:
        """Logged events, oldest first, filtered by type and/or source."""
        with self._lock:
            events = list(self._events)
        return [
            e for e in events
            if (event_type is None or isinstance(e, event_type))
            and (source_id is None or e.source_id == source_id)
        ]

    @property
    def latest(self) -> DomainEvent | None:
        with self._lock:
            return self._events[-1] if self._events else None

    def count(self) -> int:
        with self._lock:
            return len(self._events)

    def __len__(self) -> int:
        return self.count()

    def clear(self) -> None:
        with self._lock:
            self._events.clear()
