import logging
from pathlib import Path

import click

from orderform.infrastructure.bootstrap import DEFAULT_DATA_DIR
from orderform.infrastructure.cli.catalog_commands import catalog_list
from orderform.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_invoice,
    order_list,
    order_show,
    order_update,
)


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_DATA_DIR,
    show_default=True,
    help="Directory holding the saved orders.",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Debug logging.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, verbose: bool) -> None:
    """Handicraft Order Form"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"data_dir": data_dir}


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def catalog() -> None:
    """Browse the product catalog."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_invoice)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_update)
catalog.add_command(catalog_list)
