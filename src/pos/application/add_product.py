"""Application service: Add Product use case.

Products get sequential numeric IDs.  Names are unique ignoring case,
and so are barcodes when given.
"""

from __future__ import annotations

import logging

from pos.domain.exceptions import ValidationError
from pos.domain.model.product import Product
from pos.domain.model.value_objects import DEFAULT_CURRENCY, Money
from pos.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._product_repo = product_repo
        self._currency = currency

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        barcode: str | None = None,
        category: str | None = None,
        brand: str | None = None,
    ) -> Product:
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError("Product name is required")
        if self._product_repo.get_by_name(clean_name) is not None:
            raise ValidationError(f"Product '{clean_name}' already exists")

        code = (barcode or "").strip() or None
        if code is not None and self._product_repo.get_by_barcode(code) is not None:
            raise ValidationError(f"Barcode '{code}' is already in use")

        product = Product(
            id=self._next_id(),
            name=clean_name,
            price=Money.zero(self._currency),
            barcode=code,
            category=clean_label(category),
            brand=clean_label(brand),
        )
        product.update_price(Money.of(price, self._currency).rounded())
        product.set_stock(stock)

        self._product_repo.save(product)
        logger.info("Added product #%s %s at %s", product.id, product.name, product.price)
        return product

    def _next_id(self) -> str:
        numeric = [int(p.id) for p in self._product_repo.list_all() if p.id.isdigit()]
        return str(max(numeric, default=0) + 1)


def clean_label(value: str | None) -> str | None:
    """Trimmed category or brand name; blank means none."""
    return (value or "").strip() or None
