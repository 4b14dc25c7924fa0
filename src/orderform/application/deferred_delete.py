"""Deferred order deletion.

A delete request is acknowledged at once but only reaches the store after
a fixed delay, on a cancelable timer. While a deletion is pending, further
requests for the same id are ignored, so the order is removed at most once.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from orderform.application.order_store import OrderStore

logger = logging.getLogger(__name__)

DELETE_DELAY_SECONDS = 0.5

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


def _daemon_timer(interval: float, function: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(interval, function)
    timer.daemon = True
    return timer


class DeferredDeleter:

    def __init__(
        self,
        store: OrderStore,
        delay: float = DELETE_DELAY_SECONDS,
        timer_factory: TimerFactory = _daemon_timer,
        on_deleted: Callable[[int], None] | None = None,
    ) -> None:
        self._store = store
        self._delay = delay
        self._timer_factory = timer_factory
        self._on_deleted = on_deleted
        self._pending: dict[int, threading.Timer] = {}
        self._lock = threading.RLock()

    @property
    def pending(self) -> set[int]:
        with self._lock:
            return set(self._pending)

    def schedule(self, order_id: int) -> bool:
        """Queue *order_id* for deletion. False if it is already queued."""
        with self._lock:
            if order_id in self._pending:
                logger.debug("Delete of order #%s already pending", order_id)
                return False
            timer = self._timer_factory(self._delay, lambda: self._fire(order_id))
            self._pending[order_id] = timer
        timer.start()
        return True

    def cancel(self, order_id: int) -> bool:
        with self._lock:
            timer = self._pending.pop(order_id, None)
        if timer is None:
            return False
        timer.cancel()
        logger.debug("Delete of order #%s cancelled", order_id)
        return True

    def wait(self, timeout: float | None = None) -> None:
        """Block until every pending deletion has run."""
        with self._lock:
            timers = list(self._pending.values())
        for timer in timers:
            timer.join(timeout)

    def _fire(self, order_id: int) -> None:
        with self._lock:
            if self._pending.pop(order_id, None) is None:
                # cancelled between expiry and here
                return
            removed = self._store.delete(order_id)
        if removed and self._on_deleted is not None:
            self._on_deleted(order_id)
