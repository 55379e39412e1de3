import logging

import click

from pos.infrastructure.bootstrap import settings
from pos.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_dec,
    cart_discount,
    cart_inc,
    cart_pay,
    cart_release,
    cart_remove,
    cart_scan,
    cart_show,
)
from pos.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_stock,
    product_update,
)
from pos.infrastructure.cli.sale_commands import checkout, sale_list, sale_receipt


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at INFO level.")
def cli(verbose: bool) -> None:
    """POS — point-of-sale cart, checkout and receipts"""
    logging.basicConfig(
        level=logging.INFO if verbose else settings().log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


@cli.group()
def product() -> None:
    """Manage the product catalogue."""


@cli.group()
def cart() -> None:
    """Build the sale in progress."""


@cli.group()
def sale() -> None:
    """Browse recorded sales."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
product.add_command(product_stock)
cart.add_command(cart_add)
cart.add_command(cart_scan)
cart.add_command(cart_inc)
cart.add_command(cart_dec)
cart.add_command(cart_remove)
cart.add_command(cart_clear)
cart.add_command(cart_show)
cart.add_command(cart_discount)
cart.add_command(cart_pay)
cart.add_command(cart_release)
cli.add_command(checkout)
sale.add_command(sale_list)
sale.add_command(sale_receipt)
