"""Sale — the immutable record of a completed checkout.

A Sale snapshots the cart lines and every derived figure at the moment
of checkout.  ``to_payload()`` renders the record in the shape the
sales store keeps: camelCase keys, amounts as two-decimal strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from pos.domain.exceptions import ValidationError
from pos.domain.model.checkout import CheckoutSession
from pos.domain.model.value_objects import Money, PaymentMethod, round2


def _amount(value: Money | Decimal) -> str:
    raw = value.amount if isinstance(value, Money) else value
    return f"{round2(raw):.2f}"


@dataclass(frozen=True)
class SaleItem:
    product_id: str
    product_name: str
    qty: int
    price: Money  # unit price after the per-unit discount
    discount: Money  # per-unit discount
    total_price: Money

    def to_payload(self) -> dict[str, Any]:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "qty": self.qty,
            "price": _amount(self.price),
            "discount": _amount(self.discount),
            "totalPrice": _amount(self.total_price),
        }


@dataclass
class Sale:
    """Snapshot of a checkout.

    Use ``Sale.from_session()`` for new sales; ``id`` and ``sale_date``
    are filled in by the repository when the sale is persisted.
    """

    id: int | None
    payment_method: PaymentMethod
    user_id: int
    customer_id: int | None
    items: list[SaleItem]
    original_total: Money
    item_discounts: Money
    subtotal: Money
    order_discount_percentage: Decimal
    order_discount: Money
    total_amount: Money
    payment_amount: Money
    balance: Money
    sale_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def from_session(
        session: CheckoutSession,
        user_id: int,
        customer_id: int | None = None,
    ) -> Sale:
        if session.cart.is_empty:
            raise ValidationError("Sale must contain at least one item")

        totals = session.totals
        settlement = session.settlement
        currency = session.cart.currency

        if session.payment_method is PaymentMethod.CASH:
            paid = session.tendered or Money.zero(currency)
        else:
            # Non-cash tenders are not counted; record the exact total.
            paid = totals.grand_total

        items = [
            SaleItem(
                product_id=line.product_id,
                product_name=line.product_name,
                qty=line.quantity.value,
                price=line.unit_price,
                discount=line.per_unit_discount,
                total_price=line.line_total,
            )
            for line in session.cart.lines
        ]

        return Sale(
            id=None,
            payment_method=session.payment_method,
            user_id=user_id,
            customer_id=customer_id,
            items=items,
            original_total=totals.original_total,
            item_discounts=totals.item_discounts,
            subtotal=totals.subtotal,
            order_discount_percentage=totals.order_discount_pct,
            order_discount=totals.order_discount,
            total_amount=totals.grand_total,
            payment_amount=paid.rounded(),
            balance=settlement.balance,
        )

    @property
    def total_discount(self) -> Money:
        return self.item_discounts + self.order_discount

    def to_payload(self) -> dict[str, Any]:
        return {
            "saleId": self.id,
            "saleDate": self.sale_date.isoformat(),
            "paymentMethod": self.payment_method.value,
            "userId": self.user_id,
            "customerId": self.customer_id,
            "currency": self.total_amount.currency,
            "originalTotal": _amount(self.original_total),
            "itemDiscounts": _amount(self.item_discounts),
            "subtotal": _amount(self.subtotal),
            "orderDiscountPercentage": _amount(self.order_discount_percentage),
            "orderDiscount": _amount(self.order_discount),
            "totalAmount": _amount(self.total_amount),
            "totalDiscount": _amount(self.total_discount),
            "paymentAmount": _amount(self.payment_amount),
            "balance": _amount(self.balance),
            "saleItems": [item.to_payload() for item in self.items],
        }
