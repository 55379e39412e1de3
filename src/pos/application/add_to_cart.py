"""Application service: Add To Cart use case.

Mirrors the quantity/discount dialog: the typed quantity is clamped to
the stock on hand and the discount to the product price, silently.
"""

from __future__ import annotations

import logging
from typing import Any

from pos.application.dto import CartDTO
from pos.application.show_cart import to_cart_dto
from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.model.product import Product
from pos.domain.repository.cart_repository import CartRepository
from pos.domain.repository.product_repository import ProductRepository
from pos.domain.service.pricing import clamp_quantity

logger = logging.getLogger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(
        self,
        product_ref: str,
        quantity: Any = None,
        discount: Any = None,
        by_barcode: bool = False,
    ) -> CartDTO:
        """Add a product to the cart.

        ``product_ref`` is a barcode when ``by_barcode`` is set, otherwise
        a product ID or name.  A blank quantity means 1, a blank discount
        means none.
        """
        product = self._resolve(product_ref, by_barcode)
        if not product.in_stock:
            raise ValidationError(f"{product.name} is out of stock")

        qty = clamp_quantity(quantity, product.available_qty)

        session = self._cart_repo.load()
        line = session.add_item(product, qty, discount)
        self._cart_repo.save(session)

        logger.info(
            "Added %d x %s (discount %s) -> line qty %d",
            qty,
            product.name,
            line.per_unit_discount,
            line.quantity.value,
        )
        return to_cart_dto(session)

    def _resolve(self, product_ref: str, by_barcode: bool) -> Product:
        ref = (product_ref or "").strip()
        if not ref:
            raise ValidationError("Product reference is required")

        if by_barcode:
            product = self._product_repo.get_by_barcode(ref)
        else:
            product = self._product_repo.find(ref)

        if product is None:
            kind = "barcode" if by_barcode else "product"
            raise EntityNotFoundError(f"No {kind} matching '{ref}'")
        return product
