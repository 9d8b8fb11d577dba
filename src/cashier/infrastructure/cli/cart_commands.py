"""CLI commands for the live cart and saved carts."""

from __future__ import annotations

import click

from cashier.application.add_item import AddItemHandler
from cashier.application.adjust_item import AdjustItemHandler
from cashier.application.list_saved_carts import ListSavedCartsHandler
from cashier.application.show_cart import ShowCartHandler
from cashier.domain.exceptions import DomainException, InsufficientStockError
from cashier.infrastructure.cli.session import close_ledger, open_ledger


def _display_cart(dto) -> None:
    """Shared formatting for displaying the live cart."""
    label = dto.name or "(unsaved)"
    if dto.cart_id:
        label = f"{label}  [{dto.cart_id}]"
    click.echo(f"Cart: {label}")
    if dto.unsaved_changes:
        click.echo("Unsaved changes.")
    click.echo()

    if not dto.items:
        click.echo("  Cart is empty.")
        return

    click.echo(f"  {'SKU':<12} {'Product':<24} {'Qty':>5} {'Price':>12} {'Total':>12} {'Avail':>6}")
    click.echo(f"  {'-'*76}")
    for item in dto.items:
        available = "?" if item.available is None else item.available
        click.echo(
            f"  {item.sku:<12} {item.name:<24} {item.quantity:>5} "
            f"{item.unit_price:>12} {item.line_total:>12} {available:>6}"
        )
    click.echo(f"  {'-'*76}")
    click.echo(f"  {'Cart Total':<43} {dto.total:>25}")


def _insufficient(exc: InsufficientStockError) -> click.ClickException:
    return click.ClickException(
        f"Insufficient inventory. Available: {exc.available}, Requested: {exc.requested}"
    )


@click.command("show")
def cart_show() -> None:
    """Show the live cart."""
    try:
        handler = ShowCartHandler(ledger=open_ledger())
        dto = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("add")
@click.argument("code")
def cart_add(code: str) -> None:
    """Add one unit of the product with SKU (or id) CODE."""
    try:
        ledger = open_ledger()
        line = AddItemHandler(ledger).handle(code)
    except InsufficientStockError as exc:
        raise _insufficient(exc)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    close_ledger(ledger)
    click.echo(f"{line.name} x{line.quantity}")


@click.command("adjust")
@click.argument("sku")
@click.option("--by", "delta", type=int, default=1, show_default=True, help="Quantity change, may be negative.")
def cart_adjust(sku: str, delta: int) -> None:
    """Step a cart line up or down."""
    try:
        ledger = open_ledger()
        line = AdjustItemHandler(ledger).handle(sku, delta)
    except InsufficientStockError as exc:
        raise _insufficient(exc)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    close_ledger(ledger)
    if line is None:
        click.echo(f"'{sku}' removed from the cart.")
    else:
        click.echo(f"{line.name} x{line.quantity}")


@click.command("remove")
@click.argument("sku")
def cart_remove(sku: str) -> None:
    """Remove a line from the cart."""
    try:
        ledger = open_ledger()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for line in ledger.lines:
        if line.sku == sku or line.product_id == sku:
            ledger.remove_line(line.product_id)
    close_ledger(ledger)
    click.echo(f"'{sku}' removed from the cart.")


@click.command("new")
@click.option("--yes", is_flag=True, default=False, help="Discard unsaved work without asking.")
def cart_new(yes: bool) -> None:
    """Start a new, empty cart."""
    try:
        ledger = open_ledger()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if ledger.has_unsaved_changes and not yes:
        click.confirm("Create a new cart? Current cart will be cleared.", abort=True)

    ledger.new_cart()
    close_ledger(ledger)
    click.echo("Started a new cart.")


@click.command("save")
@click.option("--name", default=None, help="Cart name (defaults to a timestamp).")
def cart_save(name: str | None) -> None:
    """Save the live cart, or update it if it was saved before."""
    try:
        ledger = open_ledger()
        updating = ledger.current_cart_id is not None
        saved = ledger.save_cart(name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    close_ledger(ledger)
    verb = "updated" if updating else "saved"
    click.echo(f"Cart '{saved.name}' {verb}  [{saved.id}]  total {saved.total}")


@click.command("load")
@click.argument("cart_id")
@click.option("--yes", is_flag=True, default=False, help="Replace unsaved work without asking.")
def cart_load(cart_id: str, yes: bool) -> None:
    """Make a saved cart the live cart."""
    try:
        ledger = open_ledger()
        if ledger.has_unsaved_changes and ledger.current_cart_id != cart_id and not yes:
            click.confirm("Load this cart? Current cart will be replaced.", abort=True)
        ledger.load_cart(cart_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    close_ledger(ledger)
    click.echo(f"Loaded cart '{ledger.current_cart_name}'.")


@click.command("delete")
@click.argument("cart_id")
@click.option("--yes", is_flag=True, default=False, help="Delete without asking.")
def cart_delete(cart_id: str, yes: bool) -> None:
    """Delete a saved cart."""
    if not yes:
        click.confirm("Are you sure you want to delete this cart?", abort=True)

    try:
        ledger = open_ledger()
        ledger.delete_cart(cart_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    close_ledger(ledger)
    click.echo(f"Cart {cart_id} deleted.")


@click.command("list")
def cart_list() -> None:
    """List saved carts."""
    try:
        handler = ListSavedCartsHandler(ledger=open_ledger())
        carts = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not carts:
        click.echo("No saved carts.")
        return

    click.echo(f"  {'ID':<38} {'Name':<24} {'Items':>6} {'Total':>12} {'Updated':>22}")
    click.echo("-" * 107)
    for cart in carts:
        marker = "*" if cart.is_current else " "
        click.echo(
            f"{marker} {cart.id:<38} {cart.name:<24} {cart.item_count:>6} "
            f"{cart.total:>12} {cart.updated_at:>22}"
        )
