"""Catalogue lookups needed by the cart, stock and product use cases.

Implemented by the JSON store in infrastructure and by the in-memory
fake in the tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None: ...

    @abstractmethod
    def get_by_barcode(self, barcode: str) -> Product | None: ...

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Case-insensitive exact match on the product name."""

    @abstractmethod
    def list_all(self) -> list[Product]: ...

    @abstractmethod
    def list_by_category(self, category: str) -> list[Product]:
        """Products whose category matches, ignoring case."""

    @abstractmethod
    def list_by_brand(self, brand: str) -> list[Product]:
        """Products whose brand matches, ignoring case."""

    @abstractmethod
    def search(self, text: str) -> list[Product]:
        """Products whose name or barcode contains ``text``, ignoring case."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Insert or replace the product with the same ID."""

    def find(self, ref: str) -> Product | None:
        """Resolve a cashier-typed reference: product ID first, then name."""
        return self.get_by_id(ref) or self.get_by_name(ref)
