"""Domain service: Invoice rendering.

Maps a finalized Order onto the fixed invoice layout. Deterministic and
side-effect free; the date shown is derived from the order id, which is a
millisecond timestamp.
"""

from __future__ import annotations

from datetime import datetime

from orderform.domain.model.invoice import (
    FooterBlock,
    HeaderBlock,
    Invoice,
    ItemTable,
    MetadataBlock,
    NotesBlock,
    TotalLine,
)
from orderform.domain.model.order import DeliveryMethod, Order

SHOP_NAME = "VyVy's Garden"
LOGO_ASSET = "logo.png"
INVOICE_CAPTION = "Order Invoice"
FOOTER_CAPTION = "Thank you for supporting our small business!"
TABLE_HEADER = ("Item", "Price", "Qty", "Subtotal")


def invoice_file_name(customer_name: str) -> str:
    safe = customer_name.replace("/", "_").replace("\\", "_")
    return f"Invoice_{safe}.pdf"


def order_date(order_id: int) -> str:
    """Local calendar date of a timestamp id, as M/D/YYYY."""
    d = datetime.fromtimestamp(order_id / 1000)
    return f"{d.month}/{d.day}/{d.year}"


def render(order: Order) -> Invoice:
    fields = [
        ("Order ID", str(order.id)),
        ("Date", order_date(order.id)),
        ("Customer", order.customer_name),
        ("Contact", order.contact_phone),
        ("Payment", order.payment_method.value),
        ("Method", order.delivery_method.value),
    ]
    if order.delivery_method is DeliveryMethod.DELIVERY:
        fields.append(("Addr", order.address))

    rows = tuple(
        (item.product, str(item.unit_price), str(item.quantity), str(item.subtotal))
        for item in order.items
    )

    blocks = [
        HeaderBlock(shop_name=SHOP_NAME, logo_asset=LOGO_ASSET, caption=INVOICE_CAPTION),
        MetadataBlock(fields=tuple(fields)),
        ItemTable(header=TABLE_HEADER, rows=rows),
        TotalLine(text=f"Total Amount: {order.total_price}"),
    ]
    if order.notes:
        blocks.append(NotesBlock(text=f"Note: {order.notes}"))
    blocks.append(FooterBlock(caption=FOOTER_CAPTION))

    return Invoice(file_name=invoice_file_name(order.customer_name), blocks=tuple(blocks))
