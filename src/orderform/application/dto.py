"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderform.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (product name + quantity)."""

    product_name: str
    quantity: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single line item as displayed to the user."""

    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "₱100"
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    customer_name: str
    contact_phone: str
    payment_method: str
    delivery_method: str
    address: str
    notes: str
    items: list[OrderLineItemDTO]
    total: str


def to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        customer_name=order.customer_name,
        contact_phone=order.contact_phone,
        payment_method=order.payment_method.value,
        delivery_method=order.delivery_method.value,
        address=order.address,
        notes=order.notes,
        items=[
            OrderLineItemDTO(
                product_name=item.product,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                subtotal=str(item.subtotal),
            )
            for item in order.items
        ],
        total=str(order.total_price),
    )
