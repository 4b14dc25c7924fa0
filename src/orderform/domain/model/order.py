"""Order aggregate: the core of the domain.

An Order is only ever built from a validated draft by ``finalize_order``.
The cart helpers are pure: they return a new item list and never touch
the one passed in.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from orderform.domain.exceptions import EmptyCart, ValidationError, ValidationFailed
from orderform.domain.model.catalog import CATALOG, Catalog
from orderform.domain.model.value_objects import Money, Quantity, is_valid_phone


class DeliveryMethod(Enum):
    PICKUP = "Pickup"
    DELIVERY = "Delivery"


class PaymentMethod(Enum):
    CASH = "Cash"
    GCASH = "GCash"


@dataclass(frozen=True)
class LineItem:
    """One product entry in a cart.

    ``unit_price`` is the catalog price at the moment the item was added
    and is never refreshed afterwards.
    """

    product: str
    quantity: Quantity
    unit_price: Money  # locked at add time

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class OrderDraft:
    """The in-progress order as typed by the user. Nothing here is checked."""

    customer_name: str = ""
    contact_phone: str = ""
    delivery_method: DeliveryMethod = DeliveryMethod.PICKUP
    address: str = ""
    payment_method: PaymentMethod = PaymentMethod.CASH
    notes: str = ""
    items: list[LineItem] = field(default_factory=list)


@dataclass
class Order:
    """A submitted order.

    ``total_price`` is stored, not derived: it is the cart total at the
    time the order was finalized.
    """

    id: int
    customer_name: str
    contact_phone: str
    delivery_method: DeliveryMethod
    address: str
    payment_method: PaymentMethod
    notes: str
    items: list[LineItem]
    total_price: Money

    def to_draft(self) -> OrderDraft:
        """Reopen the order for editing."""
        return OrderDraft(
            customer_name=self.customer_name,
            contact_phone=self.contact_phone,
            delivery_method=self.delivery_method,
            address=self.address,
            payment_method=self.payment_method,
            notes=self.notes,
            items=list(self.items),
        )


# ---------------------------------------------------------------------------
# Cart operations
# ---------------------------------------------------------------------------


def add_line_item(
    items: Sequence[LineItem],
    product: str,
    quantity: int | str,
    catalog: Catalog = CATALOG,
) -> list[LineItem]:
    """Return *items* plus a new line for *product* at today's price."""
    qty = Quantity.parse(quantity)
    price = catalog.price_of(product)
    return [*items, LineItem(product=product, quantity=qty, unit_price=price)]


def remove_line_item(items: Sequence[LineItem], index: int) -> list[LineItem]:
    """Return *items* without the line at *index*."""
    if not 0 <= index < len(items):
        raise ValidationError(
            f"No line item at position {index} (cart has {len(items)})"
        )
    return [item for i, item in enumerate(items) if i != index]


def compute_total(items: Sequence[LineItem]) -> Money:
    result = Money.zero()
    for item in items:
        result = result + item.subtotal
    return result


# ---------------------------------------------------------------------------
# Validation & finalization
# ---------------------------------------------------------------------------


def validate_order(draft: OrderDraft) -> OrderDraft:
    """Check a draft before it may become an Order.

    An empty cart blocks everything else and raises ``EmptyCart``.
    Otherwise every field check runs and all failures are reported
    together in a single ``ValidationFailed``.
    """
    if not draft.items:
        raise EmptyCart()

    errors: dict[str, str] = {}

    if not draft.customer_name.strip():
        errors["customer_name"] = "Name is required"

    if not draft.contact_phone.strip():
        errors["contact_phone"] = "Contact info required"
    elif not is_valid_phone(draft.contact_phone):
        errors["contact_phone"] = "Must start with 09 (11 digits)"

    if draft.delivery_method is DeliveryMethod.DELIVERY and not draft.address.strip():
        errors["address"] = "Address required for delivery"

    if errors:
        raise ValidationFailed(errors)
    return draft


def finalize_order(
    draft: OrderDraft,
    id_factory: Callable[[], int],
    existing_id: int | None = None,
) -> Order:
    """Turn a draft into an Order.

    Edits keep *existing_id*; new orders draw one from *id_factory*.
    """
    validate_order(draft)

    order_id = existing_id if existing_id is not None else id_factory()
    is_pickup = draft.delivery_method is DeliveryMethod.PICKUP

    return Order(
        id=order_id,
        customer_name=draft.customer_name.strip(),
        contact_phone=draft.contact_phone,
        delivery_method=draft.delivery_method,
        address="" if is_pickup else draft.address,
        payment_method=draft.payment_method,
        notes=draft.notes,
        items=list(draft.items),
        total_price=compute_total(draft.items),
    )
