"""CLI commands for the cart and its payment."""

from __future__ import annotations

import click

from pos.application.add_to_cart import AddToCartHandler
from pos.application.change_quantity import ChangeQuantityHandler
from pos.application.clear_cart import ClearCartHandler
from pos.application.dto import CartDTO
from pos.application.release_submission import ReleaseSubmissionHandler
from pos.application.remove_item import RemoveItemHandler
from pos.application.set_order_discount import SetOrderDiscountHandler
from pos.application.set_payment import SetPaymentHandler
from pos.application.show_cart import ShowCartHandler
from pos.domain.exceptions import DomainException
from pos.domain.model.value_objects import PaymentMethod
from pos.infrastructure.bootstrap import cart_repository, product_repository


def display_cart(dto: CartDTO) -> None:
    """Shared formatting for displaying the cart."""
    if not dto.lines:
        click.echo("Cart is empty.")
        return

    click.echo(
        f"  {'ID':<5} {'Product':<20} {'Qty':>5} {'Price':>12} {'Disc':>10} {'Total':>14}"
    )
    click.echo(f"  {'-'*71}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:<5} {line.product_name:<20} {line.quantity:>5} "
            f"{line.catalog_price:>12} {line.discount:>10} {line.line_total:>14}"
        )
    click.echo(f"  {'-'*71}")
    click.echo(f"  {'Original Total':<40} {dto.original_total:>31}")
    click.echo(f"  {'Item Discounts':<40} {'-' + dto.item_discounts:>31}")
    click.echo(f"  {'Subtotal':<40} {dto.subtotal:>31}")
    if dto.order_discount_pct != "0.00":
        label = f"Order Discount ({dto.order_discount_pct}%)"
        click.echo(f"  {label:<40} {'-' + dto.order_discount:>31}")
    click.echo(f"  {'Total':<40} {dto.grand_total:>31}")
    click.echo()
    click.echo(f"  Payment: {dto.payment_method}")
    if dto.tendered is not None:
        click.echo(f"  Tendered: {dto.tendered}   Balance: {dto.balance}")
    if dto.blocked_reason:
        click.echo(f"  Checkout blocked: {dto.blocked_reason}")
    else:
        click.echo("  Ready for checkout.")


def _run(handler_call) -> CartDTO:
    try:
        return handler_call()
    except DomainException as exc:
        raise click.ClickException(str(exc))


@click.command("add")
@click.option("--product", required=True, help="Product ID or name.")
@click.option("--qty", default=None, help="Quantity (clamped to the stock on hand).")
@click.option("--discount", default=None, help="Discount per unit (clamped to the price).")
def cart_add(product: str, qty: str | None, discount: str | None) -> None:
    """Add a product to the cart."""
    handler = AddToCartHandler(
        cart_repo=cart_repository(), product_repo=product_repository()
    )
    display_cart(_run(lambda: handler.handle(product, quantity=qty, discount=discount)))


@click.command("scan")
@click.option("--barcode", required=True, help="Scanned barcode.")
@click.option("--qty", default=None, help="Quantity (clamped to the stock on hand).")
@click.option("--discount", default=None, help="Discount per unit (clamped to the price).")
def cart_scan(barcode: str, qty: str | None, discount: str | None) -> None:
    """Add a product to the cart by barcode."""
    handler = AddToCartHandler(
        cart_repo=cart_repository(), product_repo=product_repository()
    )
    display_cart(
        _run(lambda: handler.handle(barcode, quantity=qty, discount=discount, by_barcode=True))
    )


@click.command("inc")
@click.option("--id", "product_id", required=True, help="Product ID of the line.")
def cart_inc(product_id: str) -> None:
    """Add one unit to a cart line."""
    handler = ChangeQuantityHandler(cart_repo=cart_repository())
    display_cart(_run(lambda: handler.handle(product_id, 1)))


@click.command("dec")
@click.option("--id", "product_id", required=True, help="Product ID of the line.")
def cart_dec(product_id: str) -> None:
    """Take one unit off a cart line (removes it at zero)."""
    handler = ChangeQuantityHandler(cart_repo=cart_repository())
    display_cart(_run(lambda: handler.handle(product_id, -1)))


@click.command("remove")
@click.option("--id", "product_id", required=True, help="Product ID of the line.")
def cart_remove(product_id: str) -> None:
    """Remove a line from the cart."""
    handler = RemoveItemHandler(cart_repo=cart_repository())
    display_cart(_run(lambda: handler.handle(product_id)))


@click.command("clear")
def cart_clear() -> None:
    """Discard the cart, order discount and payment."""
    handler = ClearCartHandler(cart_repo=cart_repository())
    _run(handler.handle)
    click.echo("Cart cleared.")


@click.command("show")
def cart_show() -> None:
    """Show the cart with its totals."""
    handler = ShowCartHandler(cart_repo=cart_repository())
    display_cart(_run(handler.handle))


@click.command("discount")
@click.option("--percent", required=True, help="Order discount in percent (0-100).")
def cart_discount(percent: str) -> None:
    """Set the order-wide percentage discount."""
    handler = SetOrderDiscountHandler(cart_repo=cart_repository())
    display_cart(_run(lambda: handler.handle(percent)))


@click.command("pay")
@click.option(
    "--method",
    required=True,
    type=click.Choice([m.value for m in PaymentMethod], case_sensitive=False),
    help="Payment method.",
)
@click.option("--amount", default=None, help="Cash handed over by the customer.")
def cart_pay(method: str, amount: str | None) -> None:
    """Record how the customer pays."""
    handler = SetPaymentHandler(cart_repo=cart_repository())
    display_cart(_run(lambda: handler.handle(method, amount)))


@click.command("release")
def cart_release() -> None:
    """Mark an interrupted submission as failed so the sale can be retried.

    Run ``pos sale list`` first: the sale may already have been recorded.
    """
    handler = ReleaseSubmissionHandler(cart_repo=cart_repository())
    display_cart(_run(handler.handle))
