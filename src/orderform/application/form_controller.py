"""Application service: the order form.

Holds everything that is transient while an order is being typed in: the
draft, the item being composed, field errors, the flash notice and which
saved order (if any) is being edited. Submitting hands a finalized Order
to the OrderStore.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from orderform.application.order_store import OrderStore
from orderform.domain.exceptions import (
    EmptyCart,
    InvalidQuantity,
    UnknownProduct,
    ValidationFailed,
)
from orderform.domain.model.catalog import CATALOG, DEFAULT_PRODUCT, Catalog
from orderform.domain.model.order import (
    DeliveryMethod,
    LineItem,
    Order,
    OrderDraft,
    PaymentMethod,
    add_line_item,
    compute_total,
    finalize_order,
    remove_line_item,
)
from orderform.domain.model.value_objects import PHONE_MAX_DIGITS, Money

logger = logging.getLogger(__name__)

FLASH_SECONDS = 3.0

_TEXT_FIELDS = ("customer_name", "contact_phone", "address", "notes")


@dataclass(frozen=True)
class FlashNotice:
    message: str
    expires_at: float


@dataclass
class CurrentItem:
    product: str = DEFAULT_PRODUCT
    quantity: int | str = 1


class FormController:

    def __init__(
        self,
        store: OrderStore,
        catalog: Catalog = CATALOG,
        clock: Callable[[], float] = time.monotonic,
        flash_seconds: float = FLASH_SECONDS,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._clock = clock
        self._flash_seconds = flash_seconds
        self._flash: FlashNotice | None = None
        self.draft = OrderDraft()
        self.current_item = CurrentItem()
        self.errors: dict[str, str] = {}
        self._editing: Order | None = None
        self._deleted_ids: set[int] = set()
        self._deleted_lock = threading.Lock()

    # --- Flash notices --------------------------------------------------------

    @property
    def flash(self) -> str | None:
        """The current notice, or None once it has expired."""
        if self._flash is None:
            return None
        if self._clock() >= self._flash.expires_at:
            self._flash = None
            return None
        return self._flash.message

    def _raise_flash(self, message: str) -> None:
        self._flash = FlashNotice(message, self._clock() + self._flash_seconds)

    def clear_flash(self) -> None:
        self._flash = None

    # --- Field editing --------------------------------------------------------

    def set_field(self, name: str, value: str) -> bool:
        """Apply a form edit. Returns False if the input was refused."""
        if name == "contact_phone":
            if not value.isascii() or not (value == "" or value.isdigit()):
                self._raise_flash("Only numbers allowed!")
                return False
            if len(value) > PHONE_MAX_DIGITS:
                self._raise_flash("Max 11 digits!")
                return False
            self.clear_flash()

        if name in _TEXT_FIELDS:
            setattr(self.draft, name, value)
        elif name == "delivery_method":
            self.draft.delivery_method = DeliveryMethod(value)
        elif name == "payment_method":
            self.draft.payment_method = PaymentMethod(value)
        else:
            raise ValueError(f"Unknown form field {name!r}")

        self.errors.pop(name, None)
        return True

    # --- Cart -----------------------------------------------------------------

    @property
    def items(self) -> list[LineItem]:
        return list(self.draft.items)

    @property
    def total(self) -> Money:
        return compute_total(self.draft.items)

    def set_current_item(
        self, product: str | None = None, quantity: int | str | None = None
    ) -> None:
        if product is not None:
            self.current_item.product = product
        if quantity is not None:
            self.current_item.quantity = quantity

    def add_item(self) -> bool:
        try:
            self.draft.items = add_line_item(
                self.draft.items,
                self.current_item.product,
                self.current_item.quantity,
                self._catalog,
            )
        except InvalidQuantity:
            self._raise_flash("Quantity must be at least 1")
            return False
        except UnknownProduct as exc:
            self._raise_flash(str(exc))
            return False

        self.current_item = CurrentItem()
        self.clear_flash()
        return True

    def remove_item(self, index: int) -> None:
        self.draft.items = remove_line_item(self.draft.items, index)

    # --- Edit mode ------------------------------------------------------------

    @property
    def editing(self) -> Order | None:
        """The saved order being edited, if any."""
        self._apply_deletions()
        return self._editing

    def start_editing(self, order: Order) -> None:
        self._editing = order
        self.draft = order.to_draft()
        self.errors = {}

    def cancel_editing(self) -> None:
        self._editing = None
        self.reset()

    def order_deleted(self, order_id: int) -> None:
        """Note a deleted order. Safe to call from the deleter's timer thread.

        The form leaves edit mode the next time ``editing`` is read on the
        thread that owns the form.
        """
        with self._deleted_lock:
            self._deleted_ids.add(order_id)

    def _apply_deletions(self) -> None:
        with self._deleted_lock:
            deleted, self._deleted_ids = self._deleted_ids, set()
        if self._editing is not None and self._editing.id in deleted:
            logger.debug("Order #%s deleted while being edited", self._editing.id)
            self.cancel_editing()

    def reset(self) -> None:
        self.draft = OrderDraft()
        self.current_item = CurrentItem()
        self.errors = {}
        self.clear_flash()

    # --- Submission -----------------------------------------------------------

    def submit(self) -> Order | None:
        """Validate and save the draft.

        Returns the saved Order, or None when the draft was rejected; in
        that case ``errors`` and ``flash`` say why.
        """
        editing = self.editing
        existing_id = editing.id if editing is not None else None
        try:
            order = finalize_order(self.draft, self._store.next_id, existing_id)
        except EmptyCart as exc:
            self._raise_flash(str(exc))
            return None
        except ValidationFailed as exc:
            self.errors = exc.fields
            return None

        if editing is not None:
            self._store.update(order)
        else:
            self._store.create(order)

        self._editing = None
        self.reset()
        return order
