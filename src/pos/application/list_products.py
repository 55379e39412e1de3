"""Application service: List Products use case (query).

Category, brand and search text narrow the catalogue together; a
product is listed only if it matches every filter given.  Blank filters
are ignored.
"""

from __future__ import annotations

from pos.domain.model.product import Product
from pos.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        category: str | None = None,
        brand: str | None = None,
        search: str | None = None,
    ) -> list[Product]:
        products = self._product_repo.list_all()
        filters = (
            (category, self._product_repo.list_by_category),
            (brand, self._product_repo.list_by_brand),
            (search, self._product_repo.search),
        )
        for value, lookup in filters:
            text = (value or "").strip()
            if not text:
                continue
            wanted = {p.id for p in lookup(text)}
            products = [p for p in products if p.id in wanted]
        return products
