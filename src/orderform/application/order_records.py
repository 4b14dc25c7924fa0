"""Mapping between Orders and their stored JSON records.

Records use the camelCase keys the shop's saved data has always used.
Older records predate the cart and carry a single top-level
``product``/``quantity`` pair; those are upgraded to a one-line ``items``
list on load, priced from the catalog as it stands at load time.
"""

from __future__ import annotations

import json
import logging

from orderform.domain.exceptions import CorruptStorage, DomainException
from orderform.domain.model.catalog import CATALOG, Catalog
from orderform.domain.model.order import (
    DeliveryMethod,
    LineItem,
    Order,
    PaymentMethod,
    compute_total,
)
from orderform.domain.model.value_objects import Money, Quantity

logger = logging.getLogger(__name__)


def to_record(order: Order) -> dict:
    return {
        "id": order.id,
        "customerName": order.customer_name,
        "contactInfo": order.contact_phone,
        "notes": order.notes,
        "deliveryMethod": order.delivery_method.value,
        "address": order.address,
        "paymentMethod": order.payment_method.value,
        "items": [
            {
                "product": item.product,
                "quantity": item.quantity.value,
                "price": item.unit_price.amount,
            }
            for item in order.items
        ],
        "totalPrice": order.total_price.amount,
    }


def from_record(raw: dict, catalog: Catalog = CATALOG) -> Order:
    if "items" in raw and raw["items"] is not None:
        items = [_item_from_record(i, catalog) for i in raw["items"]]
    else:
        logger.warning("Upgrading legacy single-product order #%s", raw.get("id"))
        legacy = {"product": raw.get("product"), "quantity": raw.get("quantity", 1)}
        items = [_item_from_record(legacy, catalog)]

    total = raw.get("totalPrice")
    total_price = compute_total(items) if total is None else Money(int(total))

    return Order(
        id=int(raw["id"]),
        customer_name=raw.get("customerName", ""),
        contact_phone=raw.get("contactInfo", ""),
        delivery_method=DeliveryMethod(raw.get("deliveryMethod") or "Pickup"),
        address=raw.get("address") or "",
        payment_method=PaymentMethod(raw.get("paymentMethod") or "Cash"),
        notes=raw.get("notes") or "",
        items=items,
        total_price=total_price,
    )


def _item_from_record(raw: dict, catalog: Catalog) -> LineItem:
    product = raw["product"]
    price = raw.get("price")
    if price is None:
        price = _catalog_price_or_zero(product, catalog)
    return LineItem(
        product=product,
        quantity=Quantity.parse(raw["quantity"]),
        unit_price=Money(int(price)),
    )


def _catalog_price_or_zero(product: str, catalog: Catalog) -> int:
    if product in catalog:
        return catalog.price_of(product).amount
    logger.warning("Product %r no longer in catalog; pricing it at 0", product)
    return 0


# --- Whole-slot helpers -------------------------------------------------------


def dumps(orders: list[Order]) -> str:
    return json.dumps([to_record(o) for o in orders], indent=2, ensure_ascii=False)


def loads(text: str, catalog: Catalog = CATALOG) -> list[Order]:
    """Parse a whole slot. Records that cannot be read are logged and skipped."""
    try:
        raws = json.loads(text)
    except json.JSONDecodeError as exc:
        raise CorruptStorage(f"Saved orders are not valid JSON: {exc}") from exc
    if not isinstance(raws, list):
        raise CorruptStorage(
            f"Saved orders must be a JSON array, got {type(raws).__name__}"
        )

    orders: list[Order] = []
    for position, raw in enumerate(raws):
        try:
            orders.append(from_record(raw, catalog))
        except (DomainException, KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Skipping unreadable order record #%d: %s", position, exc)
    return orders
