"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from orderform.domain.model.catalog import CATALOG


@click.command("list")
def catalog_list() -> None:
    """List the products and their prices."""
    click.echo(f"{'Product':<20} {'Price':>10}")
    click.echo("-" * 31)
    for name in CATALOG.products():
        click.echo(f"{name:<20} {str(CATALOG.price_of(name)):>10}")
