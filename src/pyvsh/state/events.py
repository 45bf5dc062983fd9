"""Synchronous event fan-out.

Listeners are purely observational. Delivery happens after the commit, in
subscription order; a listener that raises is logged and skipped so it can
neither undo the commit nor starve the listeners after it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pyvsh.models.events import LedgerEvent

_logger = logging.getLogger(__name__)

EventListener = Callable[[LedgerEvent], None]


class EventBus:
    """Zero-or-more listeners for one ledger."""

    def __init__(self) -> None:
        self._listeners: list[EventListener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: EventListener) -> Callable[[], None]:
        """Register *listener* and return a callable that unregisters it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            self.unsubscribe(listener)

        return _unsubscribe

    def unsubscribe(self, listener: EventListener) -> None:
        # Unknown listeners are ignored so unsubscribe callables are idempotent.
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, event: LedgerEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                _logger.warning(
                    "Event listener %r failed for %s at block=%d",
                    listener,
                    event.event,
                    event.block_number,
                    exc_info=True,
                )
