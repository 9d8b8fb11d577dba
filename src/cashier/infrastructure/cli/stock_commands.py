"""CLI commands for browsing stock availability."""

from __future__ import annotations

import click

from cashier.application.search_stock import SearchStockHandler
from cashier.domain.exceptions import DomainException
from cashier.infrastructure.cli.session import open_ledger


@click.command("search")
@click.argument("query", default="")
@click.option("--all", "load_all", is_flag=True, default=False, help="Page through every match.")
def stock_search(query: str, load_all: bool) -> None:
    """Search stock and show what can still be sold."""
    try:
        handler = SearchStockHandler(ledger=open_ledger())
        lines = handler.handle(query, load_all=load_all)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No stock found.")
        return

    click.echo(
        f"{'SKU':<12} {'Product':<24} {'Price':>12} {'Stock':>7} {'Reserved':>9} {'Available':>10}"
    )
    click.echo("-" * 79)
    for line in lines:
        click.echo(
            f"{line.sku:<12} {line.name:<24} {line.unit_price:>12} "
            f"{line.sellable:>7} {line.reserved:>9} {line.available:>10}"
        )
