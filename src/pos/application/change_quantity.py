"""Application service: Change Quantity use case (cart +/- buttons).

Quantity may drop to zero, which removes the line.
"""

from __future__ import annotations

from pos.application.dto import CartDTO
from pos.application.show_cart import to_cart_dto
from pos.domain.repository.cart_repository import CartRepository


class ChangeQuantityHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, product_id: str, delta: int) -> CartDTO:
        session = self._cart_repo.load()
        session.change_qty(product_id, delta)
        self._cart_repo.save(session)
        return to_cart_dto(session)
