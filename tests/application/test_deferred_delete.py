"""Tests for deferred deletion.

Timers are faked so firing is explicit; one test uses a real short timer.
"""

from orderform.application.deferred_delete import DELETE_DELAY_SECONDS, DeferredDeleter
from orderform.application.form_controller import FormController
from orderform.application.order_store import OrderStore
from orderform.domain.model.order import (
    DeliveryMethod,
    LineItem,
    Order,
    PaymentMethod,
)
from orderform.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeTimerFactory, InMemoryStorage


def _order(order_id: int) -> Order:
    return Order(
        id=order_id,
        customer_name="Ana",
        contact_phone="09171234567",
        delivery_method=DeliveryMethod.PICKUP,
        address="",
        payment_method=PaymentMethod.CASH,
        notes="",
        items=[LineItem("Rose", Quantity(1), Money(100))],
        total_price=Money(100),
    )


def _setup(*ids: int, **kwargs) -> tuple[DeferredDeleter, OrderStore, FakeTimerFactory]:
    store = OrderStore(InMemoryStorage())
    for order_id in ids:
        store.create(_order(order_id))
    timers = FakeTimerFactory()
    return DeferredDeleter(store, timer_factory=timers, **kwargs), store, timers


class TestSchedule:

    def test_store_untouched_until_timer_fires(self):
        deleter, store, timers = _setup(1, 2)
        assert deleter.schedule(1) is True
        assert [o.id for o in store.list()] == [1, 2]
        assert deleter.pending == {1}

        timers.timers[0].fire()
        assert [o.id for o in store.list()] == [2]
        assert deleter.pending == set()

    def test_uses_fixed_delay(self):
        deleter, _, timers = _setup(1)
        deleter.schedule(1)
        assert timers.timers[0].interval == DELETE_DELAY_SECONDS
        assert timers.timers[0].started

    def test_repeat_request_while_pending_ignored(self):
        deleter, store, timers = _setup(1, 2)
        deleter.schedule(1)
        assert deleter.schedule(1) is False
        assert len(timers.timers) == 1
        timers.timers[0].fire()
        assert [o.id for o in store.list()] == [2]

    def test_late_duplicate_fire_does_not_double_remove(self):
        deleter, store, timers = _setup(1, 2)
        deleter.schedule(1)
        timers.timers[0].fire()
        timers.timers[0].fire()
        assert [o.id for o in store.list()] == [2]

    def test_can_reschedule_after_fire(self):
        deleter, store, timers = _setup(1)
        deleter.schedule(1)
        timers.timers[0].fire()
        assert deleter.schedule(1) is True
        timers.timers[1].fire()
        assert store.list() == []

    def test_unknown_id_is_harmless(self):
        deleter, store, timers = _setup(1)
        deleter.schedule(99)
        timers.timers[0].fire()
        assert [o.id for o in store.list()] == [1]


class TestCancel:

    def test_cancel_keeps_order(self):
        deleter, store, timers = _setup(1)
        deleter.schedule(1)
        assert deleter.cancel(1) is True
        assert timers.timers[0].cancelled
        timers.timers[0].fire()
        assert [o.id for o in store.list()] == [1]

    def test_cancel_after_expiry_but_before_run(self):
        deleter, store, timers = _setup(1)
        deleter.schedule(1)
        timer = timers.timers[0]
        deleter.cancel(1)
        timer.function()
        assert [o.id for o in store.list()] == [1]

    def test_cancel_unknown(self):
        deleter, _, _ = _setup()
        assert deleter.cancel(5) is False


class TestCallback:

    def test_on_deleted_called_once(self):
        deleted: list[int] = []
        deleter, _, timers = _setup(1, on_deleted=deleted.append)
        deleter.schedule(1)
        timers.timers[0].fire()
        assert deleted == [1]

    def test_on_deleted_not_called_for_missing(self):
        deleted: list[int] = []
        deleter, _, timers = _setup(on_deleted=deleted.append)
        deleter.schedule(1)
        timers.timers[0].fire()
        assert deleted == []


class TestRealTimer:

    def test_wait_blocks_until_deleted(self):
        store = OrderStore(InMemoryStorage())
        store.create(_order(1))
        deleter = DeferredDeleter(store, delay=0.01)
        deleter.schedule(1)
        deleter.wait(timeout=5)
        assert store.list() == []
        assert deleter.pending == set()

    def test_form_leaves_edit_mode_after_timer_delete(self):
        store = OrderStore(InMemoryStorage())
        order = _order(1)
        store.create(order)
        form = FormController(store)
        form.start_editing(order)

        deleter = DeferredDeleter(store, delay=0.01, on_deleted=form.order_deleted)
        deleter.schedule(1)
        deleter.wait(timeout=5)

        assert store.list() == []
        assert form.editing is None
