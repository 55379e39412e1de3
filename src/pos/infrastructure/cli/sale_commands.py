"""CLI commands for checkout and recorded sales."""

from __future__ import annotations

import click

from pos.application.checkout import CheckoutHandler
from pos.application.dto import ReceiptDTO
from pos.application.list_sales import ListSalesHandler
from pos.application.show_receipt import ShowReceiptHandler
from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import (
    cart_repository,
    product_repository,
    sale_repository,
    settings,
    user_context,
)


def display_receipt(dto: ReceiptDTO) -> None:
    """Shared formatting for printing a receipt."""
    click.echo(f"Sale #{dto.sale_id}  ({dto.payment_method})")
    click.echo(f"Date:     {dto.sale_date}")
    click.echo(f"Cashier:  {dto.cashier_id}")
    if dto.customer_id:
        click.echo(f"Customer: {dto.customer_id}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>12} {'Disc':>12} {'Total':>14}")
    click.echo(f"  {'-'*67}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} {line.unit_price:>12} "
            f"{line.discount:>12} {line.line_total:>14}"
        )
    click.echo(f"  {'-'*67}")
    click.echo(f"  {'Original Total':<40} {dto.original_total:>27}")
    click.echo(f"  {'Item Discounts':<40} {'-' + dto.item_discounts:>27}")
    click.echo(f"  {'Sub Total':<40} {dto.subtotal:>27}")
    if dto.order_discount_pct != "0.00":
        label = f"Order Discount ({dto.order_discount_pct}%)"
        click.echo(f"  {label:<40} {'-' + dto.order_discount:>27}")
    click.echo(f"  {'Grand Total':<40} {dto.grand_total:>27}")
    click.echo(f"  {'Pay Amount':<40} {dto.payment_amount:>27}")
    click.echo(f"  {'Balance':<40} {dto.balance:>27}")


@click.command("checkout")
@click.option("--customer", "customer_id", default=None, type=int, help="Customer ID.")
def checkout(customer_id: int | None) -> None:
    """Submit the cart as a sale and print the receipt."""
    handler = CheckoutHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        sale_repo=sale_repository(),
        user_context=user_context(),
    )

    try:
        dto = handler.handle(customer_id=customer_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_receipt(dto)


@click.command("list")
def sale_list() -> None:
    """List recorded sales."""
    handler = ListSalesHandler(sale_repo=sale_repository(), currency=settings().currency)
    rows = handler.handle()

    if not rows:
        click.echo("No sales recorded.")
        return

    click.echo(f"{'ID':<6} {'Date':<22} {'Method':<8} {'Items':>6} {'Total':>16}")
    click.echo("-" * 62)
    for row in rows:
        click.echo(
            f"{row.sale_id:<6} {row.sale_date:<22} {row.payment_method:<8} "
            f"{row.item_count:>6} {row.grand_total:>16}"
        )


@click.command("receipt")
@click.option("--id", "sale_id", required=True, type=int, help="Sale ID to reprint.")
def sale_receipt(sale_id: int) -> None:
    """Reprint the receipt of a recorded sale."""
    handler = ShowReceiptHandler(sale_repo=sale_repository(), currency=settings().currency)

    try:
        dto = handler.handle(sale_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_receipt(dto)
