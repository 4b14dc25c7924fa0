"""Tests for the OrderStore and its storage bridge.

Uses the in-memory storage fake, no file I/O.
"""

import json
import threading

import pytest

from orderform.application.order_store import ORDERS_SLOT, OrderStore
from orderform.domain.exceptions import DuplicateId, NotFound
from orderform.domain.model.order import (
    DeliveryMethod,
    LineItem,
    Order,
    PaymentMethod,
)
from orderform.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeClock, InMemoryStorage


def _order(order_id: int, name: str = "Ana", **overrides) -> Order:
    values = dict(
        id=order_id,
        customer_name=name,
        contact_phone="09171234567",
        delivery_method=DeliveryMethod.PICKUP,
        address="",
        payment_method=PaymentMethod.CASH,
        notes="",
        items=[LineItem("Rose", Quantity(2), Money(100))],
        total_price=Money(200),
    )
    values.update(overrides)
    return Order(**values)


def _setup(raw: str | None = None) -> tuple[OrderStore, InMemoryStorage]:
    storage = InMemoryStorage({ORDERS_SLOT: raw} if raw is not None else None)
    store = OrderStore(storage, clock_ms=FakeClock(1_000))
    store.load()
    return store, storage


def _stored_ids(storage: InMemoryStorage) -> list[int]:
    return [r["id"] for r in json.loads(storage.get_item(ORDERS_SLOT))]


class TestLoad:

    def test_missing_slot_loads_empty(self):
        store, _ = _setup()
        assert store.list() == []

    def test_load_reads_records(self):
        store, _ = _setup(json.dumps([
            {
                "id": 5,
                "customerName": "Ben",
                "contactInfo": "09170000000",
                "notes": "",
                "deliveryMethod": "Delivery",
                "address": "Main St",
                "paymentMethod": "GCash",
                "items": [{"product": "Tulips", "quantity": 2, "price": 80}],
                "totalPrice": 160,
            }
        ]))
        [order] = store.list()
        assert order.id == 5
        assert order.delivery_method is DeliveryMethod.DELIVERY
        assert order.payment_method is PaymentMethod.GCASH
        assert order.total_price == Money(160)


class TestCreate:

    def test_appends_and_persists(self):
        store, storage = _setup()
        store.create(_order(1))
        store.create(_order(2, "Ben"))
        assert [o.id for o in store.list()] == [1, 2]
        assert _stored_ids(storage) == [1, 2]

    def test_duplicate_id_rejected_and_store_unchanged(self):
        store, storage = _setup()
        store.create(_order(1))
        writes = storage.writes
        with pytest.raises(DuplicateId):
            store.create(_order(1, "Impostor"))
        assert [o.customer_name for o in store.list()] == ["Ana"]
        assert storage.writes == writes


class TestUpdate:

    def test_replaces_in_place(self):
        store, storage = _setup()
        for i, name in enumerate(["Ana", "Ben", "Cy"], start=1):
            store.create(_order(i, name))
        store.update(_order(2, "Benjamin"))
        assert [o.customer_name for o in store.list()] == ["Ana", "Benjamin", "Cy"]
        assert json.loads(storage.get_item(ORDERS_SLOT))[1]["customerName"] == "Benjamin"

    def test_missing_id_rejected_and_store_unchanged(self):
        store, storage = _setup()
        store.create(_order(1))
        before = store.list()
        writes = storage.writes
        with pytest.raises(NotFound):
            store.update(_order(99))
        assert store.list() == before
        assert storage.writes == writes


class TestDelete:

    def test_removes_and_persists(self):
        store, storage = _setup()
        store.create(_order(1))
        store.create(_order(2))
        assert store.delete(1) is True
        assert [o.id for o in store.list()] == [2]
        assert _stored_ids(storage) == [2]

    def test_missing_id_is_noop(self):
        store, storage = _setup()
        store.create(_order(1))
        writes = storage.writes
        assert store.delete(42) is False
        assert [o.id for o in store.list()] == [1]
        assert storage.writes == writes


class TestQueries:

    def test_get(self):
        store, _ = _setup()
        store.create(_order(1))
        assert store.get(1).customer_name == "Ana"

    def test_get_missing(self):
        store, _ = _setup()
        with pytest.raises(NotFound, match="#3"):
            store.get(3)

    def test_list_is_a_copy(self):
        store, _ = _setup()
        store.create(_order(1))
        store.list().clear()
        assert len(store.list()) == 1

    def test_next_id_uses_clock(self):
        store, _ = _setup()
        assert store.next_id() == 1_000

    def test_next_id_skips_past_existing(self):
        store, _ = _setup()
        store.create(_order(1_000))
        store.create(_order(1_500))
        assert store.next_id() == 1_501


class TestRoundTrip:

    def test_persist_then_load_preserves_list(self):
        store, storage = _setup()
        store.create(_order(1))
        store.create(
            _order(
                2,
                "Ben",
                delivery_method=DeliveryMethod.DELIVERY,
                address="12 Garden St",
                payment_method=PaymentMethod.GCASH,
                notes="Ring twice",
                items=[
                    LineItem("Rose", Quantity(1), Money(100)),
                    LineItem("Keychains", Quantity(4), Money(50)),
                ],
                total_price=Money(300),
            )
        )
        before = store.list()
        store.persist()

        reloaded = OrderStore(storage)
        reloaded.load()
        assert reloaded.list() == before

    def test_legacy_record_upgraded_on_load(self):
        legacy = [
            {
                "id": 10,
                "customerName": "Old Timer",
                "contactInfo": "09181112222",
                "deliveryMethod": "Pickup",
                "address": "",
                "product": "Tulips",
                "quantity": 3,
                "totalPrice": 240,
            }
        ]
        store, storage = _setup(json.dumps(legacy))
        [order] = store.list()
        assert order.items == [LineItem("Tulips", Quantity(3), Money(80))]
        assert order.payment_method is PaymentMethod.CASH

        store.persist()
        record = json.loads(storage.get_item(ORDERS_SLOT))[0]
        assert record["items"] == [{"product": "Tulips", "quantity": 3, "price": 80}]
        assert "product" not in record


class _GatedStorage(InMemoryStorage):
    """Holds the next write open until ``release`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.armed = False
        self.writing = threading.Event()
        self.release = threading.Event()

    def set_item(self, key: str, value: str) -> None:
        if self.armed:
            self.armed = False
            self.writing.set()
            self.release.wait(5)
        super().set_item(key, value)


class TestConcurrentMutations:

    def test_delete_waits_for_update_to_finish_persisting(self):
        storage = _GatedStorage()
        store = OrderStore(storage)
        for i, name in enumerate(["Ana", "Ben", "Cy"], start=1):
            store.create(_order(i, name))

        storage.armed = True
        updater = threading.Thread(target=store.update, args=(_order(3, "Cyrus"),))
        updater.start()
        assert storage.writing.wait(5)

        deleter = threading.Thread(target=store.delete, args=(1,))
        deleter.start()
        deleter.join(0.1)
        assert deleter.is_alive()

        storage.release.set()
        updater.join(5)
        deleter.join(5)

        assert [(o.id, o.customer_name) for o in store.list()] == [(2, "Ben"), (3, "Cyrus")]
        assert _stored_ids(storage) == [2, 3]
        assert json.loads(storage.get_item(ORDERS_SLOT))[1]["customerName"] == "Cyrus"
