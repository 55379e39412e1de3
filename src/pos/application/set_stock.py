"""Application service: Set Stock use case."""

from __future__ import annotations

from pos.domain.exceptions import EntityNotFoundError
from pos.domain.model.product import Product
from pos.domain.repository.product_repository import ProductRepository


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_ref: str, quantity: int) -> Product:
        """Set the stock on hand for a product given by ID or name."""
        product = self._product_repo.find(product_ref)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_ref}'")

        product.set_stock(quantity)
        self._product_repo.save(product)
        return product
