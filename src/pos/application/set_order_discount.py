"""Application service: Set Order Discount use case."""

from __future__ import annotations

from typing import Any

from pos.application.dto import CartDTO
from pos.application.show_cart import to_cart_dto
from pos.domain.repository.cart_repository import CartRepository


class SetOrderDiscountHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, percentage: Any) -> CartDTO:
        """Set the order-wide discount; values outside 0-100 are clamped."""
        session = self._cart_repo.load()
        session.set_order_discount(percentage)
        self._cart_repo.save(session)
        return to_cart_dto(session)
