"""JSON-file-backed implementation of ProductRepository.

The catalogue is a single JSON array.  Prices are stored as strings so
they reload as exact Decimals.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from decimal import Decimal
from pathlib import Path
from typing import Any

from pos.domain.model.product import Product
from pos.domain.model.value_objects import DEFAULT_CURRENCY, Money
from pos.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._first(lambda p: p.id == product_id)

    def get_by_barcode(self, barcode: str) -> Product | None:
        return self._first(lambda p: p.barcode is not None and p.barcode == barcode)

    def get_by_name(self, name: str) -> Product | None:
        wanted = name.strip().lower()
        return self._first(lambda p: p.name.lower() == wanted)

    def list_all(self) -> list[Product]:
        return self._load()

    def list_by_category(self, category: str) -> list[Product]:
        wanted = category.strip().lower()
        return self._all(lambda p: (p.category or "").lower() == wanted)

    def list_by_brand(self, brand: str) -> list[Product]:
        wanted = brand.strip().lower()
        return self._all(lambda p: (p.brand or "").lower() == wanted)

    def search(self, text: str) -> list[Product]:
        needle = text.strip().lower()
        return self._all(
            lambda p: needle in p.name.lower() or needle in (p.barcode or "").lower()
        )

    def save(self, product: Product) -> None:
        products = [p for p in self._load() if p.id != product.id]
        products.append(product)
        products.sort(key=lambda p: int(p.id) if p.id.isdigit() else 0)
        self._persist(products)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(item: dict[str, Any]) -> Product:
        currency = item.get("currency") or DEFAULT_CURRENCY
        return Product(
            id=str(item["id"]),
            name=item["name"],
            price=Money(Decimal(str(item["price"])), currency),
            available_qty=int(item.get("available_qty") or 0),
            barcode=item.get("barcode"),
            category=item.get("category"),
            brand=item.get("brand"),
        )

    @staticmethod
    def _to_raw(product: Product) -> dict[str, Any]:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "available_qty": product.available_qty,
            "barcode": product.barcode,
            "category": product.category,
            "brand": product.brand,
        }

    # --- File helpers ---------------------------------------------------------

    def _first(self, match: Callable[[Product], bool]) -> Product | None:
        return next((p for p in self._load() if match(p)), None)

    def _all(self, match: Callable[[Product], bool]) -> list[Product]:
        return [p for p in self._load() if match(p)]

    def _load(self) -> list[Product]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return [self._to_domain(item) for item in raw]

    def _persist(self, products: list[Product]) -> None:
        raw = [self._to_raw(p) for p in products]
        self._file_path.write_text(
            json.dumps(raw, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
