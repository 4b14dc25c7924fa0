"""Order Store: the in-memory order list and its storage bridge.

The store owns the ordered collection of orders. ``load()`` reads the
storage slot once at startup; every successful mutation ends with an
explicit ``persist()``. A failed mutation leaves both the collection and
the stored slot untouched.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from orderform.application import order_records
from orderform.domain.exceptions import DuplicateId, NotFound
from orderform.domain.model.catalog import CATALOG, Catalog
from orderform.domain.model.order import Order
from orderform.domain.repository.key_value_storage import KeyValueStorage

logger = logging.getLogger(__name__)

ORDERS_SLOT = "handicraftOrders"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class OrderStore:

    def __init__(
        self,
        storage: KeyValueStorage,
        slot: str = ORDERS_SLOT,
        catalog: Catalog = CATALOG,
        clock_ms: Callable[[], int] = _now_ms,
    ) -> None:
        self._storage = storage
        self._slot = slot
        self._catalog = catalog
        self._clock_ms = clock_ms
        self._orders: list[Order] = []
        self._lock = threading.RLock()

    # --- Storage boundary -----------------------------------------------------

    def load(self) -> None:
        with self._lock:
            raw = self._storage.get_item(self._slot)
            self._orders = [] if raw is None else order_records.loads(raw, self._catalog)
            logger.debug("Loaded %d orders from slot %r", len(self._orders), self._slot)

    def persist(self) -> None:
        with self._lock:
            self._storage.set_item(self._slot, order_records.dumps(self._orders))
            logger.debug("Persisted %d orders to slot %r", len(self._orders), self._slot)

    # --- Queries --------------------------------------------------------------

    def list(self) -> list[Order]:
        with self._lock:
            return list(self._orders)

    def get(self, order_id: int) -> Order:
        with self._lock:
            index = self._index_of(order_id)
            if index is None:
                raise NotFound(f"Order #{order_id} not found")
            return self._orders[index]

    def next_id(self) -> int:
        """A timestamp id, bumped past the highest id already in use."""
        with self._lock:
            candidate = self._clock_ms()
            if self._orders:
                candidate = max(candidate, max(o.id for o in self._orders) + 1)
            return candidate

    # --- Mutations ------------------------------------------------------------
    # Lookup, change and persist happen under one hold of the lock; the
    # deferred deleter calls delete() from its timer thread.

    def create(self, order: Order) -> None:
        with self._lock:
            if self._index_of(order.id) is not None:
                raise DuplicateId(f"Order #{order.id} already exists")
            self._orders.append(order)
            logger.info("Created order #%s for %s", order.id, order.customer_name)
            self.persist()

    def update(self, order: Order) -> None:
        with self._lock:
            index = self._index_of(order.id)
            if index is None:
                raise NotFound(f"Order #{order.id} not found")
            self._orders[index] = order
            logger.info("Updated order #%s", order.id)
            self.persist()

    def delete(self, order_id: int) -> bool:
        """Remove an order. Returns False if there was nothing to remove."""
        with self._lock:
            index = self._index_of(order_id)
            if index is None:
                logger.debug("Delete of unknown order #%s ignored", order_id)
                return False
            del self._orders[index]
            logger.info("Deleted order #%s", order_id)
            self.persist()
            return True

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, order_id: int) -> int | None:
        for i, order in enumerate(self._orders):
            if order.id == order_id:
                return i
        return None
