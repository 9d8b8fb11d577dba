"""CLI command for submitting the live cart as an order."""

from __future__ import annotations

import click

from cashier.application.checkout import CheckoutHandler
from cashier.domain.exceptions import DomainException
from cashier.infrastructure.cli.session import close_ledger, open_ledger


@click.command("checkout")
@click.option("--customer", default=None, help="Customer name (defaults to walk-in).")
def checkout(customer: str | None) -> None:
    """Submit the live cart as an order."""
    try:
        ledger = open_ledger()
        receipt = CheckoutHandler(ledger).handle(customer_name=customer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    close_ledger(ledger)
    order = f"Order #{receipt.order_id}" if receipt.order_id else "Order"
    click.echo(f"{order} created for {receipt.customer_name}.")
    click.echo(f"Items: {receipt.item_count}  Total: {receipt.total}")
