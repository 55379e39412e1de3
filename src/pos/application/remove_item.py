"""Application service: Remove Item use case."""

from __future__ import annotations

from pos.application.dto import CartDTO
from pos.application.show_cart import to_cart_dto
from pos.domain.repository.cart_repository import CartRepository


class RemoveItemHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, product_id: str) -> CartDTO:
        session = self._cart_repo.load()
        session.remove_item(product_id)
        self._cart_repo.save(session)
        return to_cart_dto(session)
