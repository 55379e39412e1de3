"""Application service: Set Payment use case.

Records the payment method and, for cash, the amount handed over.
An amount short of the total is accepted here; it only blocks checkout.
"""

from __future__ import annotations

from pos.application.dto import CartDTO
from pos.application.show_cart import to_cart_dto
from pos.domain.model.value_objects import Money, PaymentMethod
from pos.domain.repository.cart_repository import CartRepository


class SetPaymentHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, method: str, tendered: str | None = None) -> CartDTO:
        session = self._cart_repo.load()
        payment_method = PaymentMethod.parse(method)
        amount = None
        if tendered is not None and tendered.strip():
            amount = Money.of(tendered, session.cart.currency).rounded()
        session.set_payment(payment_method, amount)
        self._cart_repo.save(session)
        return to_cart_dto(session)
