"""Application service: Update Product use case.

Changes the price, barcode, category or brand of a catalogue product.
Lines already in the cart keep the price they were added with until the
product is added again; recorded sales are never touched.
"""

from __future__ import annotations

import logging

from pos.application.add_product import clean_label
from pos.domain.exceptions import EntityNotFoundError, ValidationError
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money
from pos.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_ref: str,
        price: str | None = None,
        barcode: str | None = None,
        category: str | None = None,
        brand: str | None = None,
    ) -> Product:
        if all(v is None for v in (price, barcode, category, brand)):
            raise ValidationError(
                "Nothing to update: give a new price, barcode, category or brand"
            )

        product = self._product_repo.find(product_ref)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_ref}'")

        if price is not None:
            product.update_price(Money.of(price, product.price.currency).rounded())

        if barcode is not None:
            code = barcode.strip() or None
            holder = self._product_repo.get_by_barcode(code) if code else None
            if holder is not None and holder.id != product.id:
                raise ValidationError(
                    f"Barcode '{code}' is already used by {holder.name}"
                )
            product.barcode = code

        if category is not None:
            product.category = clean_label(category)
        if brand is not None:
            product.brand = clean_label(brand)

        self._product_repo.save(product)
        logger.info(
            "Updated %s: price %s, barcode %s, category %s, brand %s",
            product.name, product.price, product.barcode, product.category, product.brand,
        )
        return product
