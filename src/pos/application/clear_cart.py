"""Application service: Clear Cart use case.

Cancels the sale in progress: lines, order discount and payment are
all discarded.
"""

from __future__ import annotations

from pos.domain.repository.cart_repository import CartRepository


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self) -> None:
        session = self._cart_repo.load()
        session.cancel()
        self._cart_repo.save(session)
