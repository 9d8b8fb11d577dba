import logging

import click

from cashier.infrastructure.bootstrap import config
from cashier.infrastructure.cli.cart_commands import (
    cart_add,
    cart_adjust,
    cart_delete,
    cart_list,
    cart_load,
    cart_new,
    cart_remove,
    cart_save,
    cart_show,
)
from cashier.infrastructure.cli.checkout_commands import checkout
from cashier.infrastructure.cli.stock_commands import stock_search
from cashier.infrastructure.log import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log debug output.")
def cli(verbose: bool) -> None:
    """Cashier: cart reservations against live stock."""
    try:
        level = logging.DEBUG if verbose else config().log_level
    except ValueError as exc:
        raise click.ClickException(str(exc))
    configure_logging(level)


@cli.group()
def stock() -> None:
    """Browse stock."""


@cli.group()
def cart() -> None:
    """Edit the live cart and manage saved carts."""


# Register subcommands
stock.add_command(stock_search)
cart.add_command(cart_show)
cart.add_command(cart_add)
cart.add_command(cart_adjust)
cart.add_command(cart_remove)
cart.add_command(cart_new)
cart.add_command(cart_save)
cart.add_command(cart_load)
cart.add_command(cart_delete)
cart.add_command(cart_list)
cli.add_command(checkout)
