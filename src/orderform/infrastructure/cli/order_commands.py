"""CLI commands for orders.

Each command drives the same FormController the interactive form uses, so
a refused edit or a failed submission reports exactly what the form would.
"""

from __future__ import annotations

from pathlib import Path

import click

from orderform.application.dto import OrderDTO, OrderItemSpec, to_dto
from orderform.application.form_controller import FormController
from orderform.application.order_store import OrderStore
from orderform.domain.exceptions import DomainException
from orderform.domain.model.order import DeliveryMethod, PaymentMethod
from orderform.infrastructure.bootstrap import (
    deferred_deleter,
    export_invoice_handler,
    form_controller,
    order_store,
)

_DELIVERY_CHOICES = click.Choice([m.value for m in DeliveryMethod])
_PAYMENT_CHOICES = click.Choice([m.value for m in PaymentMethod])

_FIELD_LABELS = {
    "customer_name": "--customer",
    "contact_phone": "--phone",
    "address": "--address",
}


def _open_store(data_dir: Path) -> OrderStore:
    try:
        return order_store(data_dir)
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _parse_items(raw_items: tuple[str, ...]) -> list[OrderItemSpec]:
    """Parse ('Rose:2', 'Tulips:1') into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw_items:
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductName:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{name}'."
            )
        specs.append(OrderItemSpec(product_name=name.strip(), quantity=qty))
    return specs


def _apply(form: FormController, fields: dict[str, str | None]) -> None:
    for name, value in fields.items():
        if value is None:
            continue
        if not form.set_field(name, value):
            raise click.ClickException(form.flash or f"Invalid value for {name}")


def _fill_cart(form: FormController, specs: list[OrderItemSpec]) -> None:
    for spec in specs:
        form.set_current_item(product=spec.product_name, quantity=spec.quantity)
        if not form.add_item():
            raise click.ClickException(form.flash or "Could not add item")


def _submit(form: FormController) -> OrderDTO:
    try:
        saved = form.submit()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if saved is None:
        if form.errors:
            lines = [
                f"{_FIELD_LABELS.get(field, field)}: {message}"
                for field, message in form.errors.items()
            ]
            raise click.ClickException("\n".join(lines))
        raise click.ClickException(form.flash or "Order was not saved")
    return to_dto(saved)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}")
    click.echo(f"Customer: {dto.customer_name}  ({dto.contact_phone})")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo(f"Method:   {dto.delivery_method}")
    if dto.address:
        click.echo(f"Address:  {dto.address}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*48}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*48}")
    click.echo(f"  {'Order Total':<27} {dto.total:>21}")


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Contact number, 09XXXXXXXXX.")
@click.option("--item", "items", multiple=True, required=True, help="Item as 'Product:Qty'; repeatable.")
@click.option("--delivery", type=_DELIVERY_CHOICES, default=DeliveryMethod.PICKUP.value, show_default=True)
@click.option("--address", default="", help="Delivery address.")
@click.option("--payment", type=_PAYMENT_CHOICES, default=PaymentMethod.CASH.value, show_default=True)
@click.option("--notes", default="", help="Special requests.")
@click.pass_obj
def order_create(
    obj: dict,
    customer: str,
    phone: str,
    items: tuple[str, ...],
    delivery: str,
    address: str,
    payment: str,
    notes: str,
) -> None:
    """Submit a new order."""
    specs = _parse_items(items)
    form = form_controller(_open_store(obj["data_dir"]))

    _apply(
        form,
        {
            "customer_name": customer,
            "contact_phone": phone,
            "delivery_method": delivery,
            "address": address,
            "payment_method": payment,
            "notes": notes,
        },
    )
    _fill_cart(form, specs)
    dto = _submit(form)

    click.echo(f"Order #{dto.id} saved.")
    _display_order(dto)


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to edit.")
@click.option("--customer", default=None, help="Customer name.")
@click.option("--phone", default=None, help="Contact number, 09XXXXXXXXX.")
@click.option("--item", "items", multiple=True, help="Replace the cart; 'Product:Qty', repeatable.")
@click.option("--delivery", type=_DELIVERY_CHOICES, default=None)
@click.option("--address", default=None, help="Delivery address.")
@click.option("--payment", type=_PAYMENT_CHOICES, default=None)
@click.option("--notes", default=None, help="Special requests.")
@click.pass_obj
def order_update(
    obj: dict,
    order_id: int,
    customer: str | None,
    phone: str | None,
    items: tuple[str, ...],
    delivery: str | None,
    address: str | None,
    payment: str | None,
    notes: str | None,
) -> None:
    """Edit a saved order. Unspecified fields keep their values."""
    specs = _parse_items(items) if items else []
    store = _open_store(obj["data_dir"])
    form = form_controller(store)

    try:
        form.start_editing(store.get(order_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _apply(
        form,
        {
            "customer_name": customer,
            "contact_phone": phone,
            "delivery_method": delivery,
            "address": address,
            "payment_method": payment,
            "notes": notes,
        },
    )
    if specs:
        form.draft.items = []
        _fill_cart(form, specs)
    dto = _submit(form)

    click.echo(f"Order #{dto.id} updated.")
    _display_order(dto)


@click.command("list")
@click.pass_obj
def order_list(obj: dict) -> None:
    """List saved orders."""
    orders = [to_dto(o) for o in _open_store(obj["data_dir"]).list()]
    if not orders:
        click.echo("No orders placed yet.")
        return

    click.echo(f"{'ID':<15} {'Customer':<20} {'Items':<30} {'Total':>8}")
    click.echo("-" * 76)
    for dto in orders:
        summary = ", ".join(f"{i.quantity}x {i.product_name}" for i in dto.items)
        click.echo(f"{dto.id:<15} {dto.customer_name:<20} {summary:<30} {dto.total:>8}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(obj: dict, order_id: int) -> None:
    """Show details of a saved order."""
    try:
        order = _open_store(obj["data_dir"]).get(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    _display_order(to_dto(order))


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.pass_obj
def order_delete(obj: dict, order_id: int) -> None:
    """Delete a saved order."""
    store = _open_store(obj["data_dir"])
    try:
        store.get(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    deleter = deferred_deleter(store)
    deleter.schedule(order_id)
    deleter.wait()
    click.echo(f"Order #{order_id} deleted.")


@click.command("invoice")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to export.")
@click.option(
    "--out",
    "out_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory to write the PDF into.",
)
@click.pass_obj
def order_invoice(obj: dict, order_id: int, out_dir: Path) -> None:
    """Export a PDF invoice for a saved order."""
    handler = export_invoice_handler(_open_store(obj["data_dir"]))
    try:
        path = handler.handle(order_id, out_dir)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Invoice written to {path}")
