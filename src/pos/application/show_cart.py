"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from pos.application.dto import CartDTO, CartLineDTO
from pos.domain.model.checkout import CheckoutSession
from pos.domain.repository.cart_repository import CartRepository


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self) -> CartDTO:
        return to_cart_dto(self._cart_repo.load())


# --- Mapping ------------------------------------------------------------------


def to_cart_dto(session: CheckoutSession) -> CartDTO:
    """Shared by every cart use case that echoes the cart back."""
    totals = session.totals
    settlement = session.settlement
    return CartDTO(
        status=session.status.value,
        lines=[
            CartLineDTO(
                product_id=line.product_id,
                product_name=line.product_name,
                quantity=line.quantity.value,
                catalog_price=str(line.catalog_unit_price),
                discount=str(line.per_unit_discount),
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
            )
            for line in session.cart.lines
        ],
        original_total=str(totals.original_total),
        item_discounts=str(totals.item_discounts),
        subtotal=str(totals.subtotal),
        order_discount_pct=f"{totals.order_discount_pct:.2f}",
        order_discount=str(totals.order_discount),
        grand_total=str(totals.grand_total),
        payment_method=session.payment_method.value,
        tendered=str(session.tendered) if session.tendered is not None else None,
        balance=str(settlement.balance),
        can_checkout=session.can_checkout,
        blocked_reason=session.blocked_reason,
    )
