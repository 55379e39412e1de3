"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from pos.application.add_product import AddProductHandler
from pos.application.list_products import ListProductsHandler
from pos.application.set_stock import SetStockHandler
from pos.application.update_product import UpdateProductHandler
from pos.domain.exceptions import DomainException
from pos.infrastructure.bootstrap import product_repository, settings


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Sale price (e.g. 500.00).")
@click.option("--stock", default=0, type=int, help="Units in stock.")
@click.option("--barcode", default=None, help="Barcode to scan the product by.")
@click.option("--category", default=None, help="Category name.")
@click.option("--brand", default=None, help="Brand name.")
def product_add(
    name: str,
    price: str,
    stock: int,
    barcode: str | None,
    category: str | None,
    brand: str | None,
) -> None:
    """Add a new product to the catalogue."""
    handler = AddProductHandler(
        product_repo=product_repository(), currency=settings().currency
    )

    try:
        product = handler.handle(
            name=name, price=price, stock=stock, barcode=barcode,
            category=category, brand=brand,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.available_qty} in stock)"
    )


@click.command("list")
@click.option("--category", default=None, help="Only products in this category.")
@click.option("--brand", default=None, help="Only products of this brand.")
@click.option("--search", default=None, help="Text to look for in the name or barcode.")
def product_list(category: str | None, brand: str | None, search: str | None) -> None:
    """List products in the catalogue, optionally filtered."""
    handler = ListProductsHandler(product_repo=product_repository())
    products = handler.handle(category=category, brand=brand, search=search)

    if not products:
        click.echo("No products found.")
        return

    click.echo(
        f"{'ID':<6} {'Name':<20} {'Category':<12} {'Brand':<12} "
        f"{'Barcode':<14} {'Price':>14} {'Stock':>6}"
    )
    click.echo("-" * 90)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.category or '':<12} {p.brand or '':<12} "
            f"{p.barcode or '':<14} {str(p.price):>14} {p.available_qty:>6}"
        )


@click.command("update")
@click.option("--product", required=True, help="Product ID or name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--barcode", default=None, help="New barcode; empty string clears it.")
@click.option("--category", default=None, help="New category; empty string clears it.")
@click.option("--brand", default=None, help="New brand; empty string clears it.")
def product_update(
    product: str,
    price: str | None,
    barcode: str | None,
    category: str | None,
    brand: str | None,
) -> None:
    """Update a product's price, barcode, category or brand."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        updated = handler.handle(
            product_ref=product, price=price, barcode=barcode,
            category=category, brand=brand,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{updated.id} '{updated.name}' now {updated.price}"
        f" (barcode {updated.barcode or 'none'})"
    )


@click.command("stock")
@click.option("--product", required=True, help="Product ID or name.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
def product_stock(product: str, quantity: int) -> None:
    """Set the stock level of a product."""
    handler = SetStockHandler(product_repo=product_repository())

    try:
        updated = handler.handle(product_ref=product, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{updated.name}' set to {updated.available_qty}")
