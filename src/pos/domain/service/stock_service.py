"""Domain service: deduct sold units from catalogue stock.

The two-phase approach (validate-then-mutate) ensures we never leave
stock partly deducted if one product of the sale fails validation.
"""

from __future__ import annotations

from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.model.cart import Cart
from pos.domain.model.product import Product
from pos.domain.model.sale import Sale
from pos.domain.repository.product_repository import ProductRepository


class StockService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def check_cart(self, cart: Cart) -> None:
        """Fail fast if any cart line needs more units than are in stock."""
        self._load_and_validate(
            (line.product_id, line.quantity.value) for line in cart.lines
        )

    def deduct_for_sale(self, sale: Sale) -> None:
        """Deduct every sold quantity.

          Phase 1 — load and validate every product of the sale.
          Phase 2 — mutate and persist.
        """
        products = self._load_and_validate(
            (item.product_id, item.qty) for item in sale.items
        )
        for product, qty in products:
            product.deduct_stock(qty)
            self._product_repo.save(product)

    def _load_and_validate(self, quantities) -> list[tuple[Product, int]]:
        # The same product never appears on two lines, so no summing needed.
        checked: list[tuple[Product, int]] = []
        for product_id, qty in quantities:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            if qty > product.available_qty:
                raise ValidationError(
                    f"Insufficient stock for {product.name} "
                    f"(need {qty}, have {product.available_qty})"
                )
            checked.append((product, qty))
        return checked
