"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Settings are read on
each call so ``POS_DATA_DIR`` can be changed between invocations (and
in tests).
"""

from __future__ import annotations

from pos.infrastructure.config import Settings, load_settings
from pos.infrastructure.persistence.json_cart_repository import JsonCartRepository
from pos.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from pos.infrastructure.persistence.json_sale_repository import JsonSaleRepository
from pos.infrastructure.user_context import SettingsUserContext


def settings() -> Settings:
    return load_settings()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def sale_repository() -> JsonSaleRepository:
    return JsonSaleRepository(settings().data_dir / "sales.json")


def cart_repository() -> JsonCartRepository:
    s = settings()
    return JsonCartRepository(s.data_dir / "cart.json", currency=s.currency)


def user_context() -> SettingsUserContext:
    return SettingsUserContext(settings().cashier_id)
