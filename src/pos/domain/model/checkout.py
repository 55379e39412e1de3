"""CheckoutSession aggregate — the cart plus how it will be paid.

The checkout flow is linear:

    BUILDING -> READY_TO_PAY -> SUBMITTING -> COMPLETED | FAILED

BUILDING and READY_TO_PAY follow the cart (empty or not).  A FAILED
submission keeps the cart and totals and can be submitted again.
``cancel()`` returns any state before SUBMITTING to an empty BUILDING.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from pos.domain.exceptions import CheckoutBlockedError, ValidationError
from pos.domain.model.cart import Cart, LineItem
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money, PaymentMethod
from pos.domain.service.pricing import (
    CartTotals,
    Settlement,
    clamp_percentage,
    settle,
)


class CheckoutStatus(Enum):
    BUILDING = "BUILDING"
    READY_TO_PAY = "READY_TO_PAY"
    SUBMITTING = "SUBMITTING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass
class CheckoutSession:
    """Aggregate root for one register's sale in progress.

    All cart edits go through the session so its status stays in step
    with the cart contents.
    """

    cart: Cart = field(default_factory=Cart)
    order_discount_pct: Decimal = Decimal("0")
    payment_method: PaymentMethod = PaymentMethod.CASH
    tendered: Money | None = None
    status: CheckoutStatus = CheckoutStatus.BUILDING

    # --- Cart edits -----------------------------------------------------------

    def add_item(self, product: Product, quantity: int, discount: Any) -> LineItem:
        self._assert_editable()
        line = self.cart.add_or_merge(product, quantity, discount)
        self._follow_cart()
        return line

    def change_qty(self, product_id: str, delta: int) -> LineItem | None:
        self._assert_editable()
        line = self.cart.change_qty(product_id, delta)
        self._follow_cart()
        return line

    def remove_item(self, product_id: str) -> None:
        self._assert_editable()
        self.cart.remove_line(product_id)
        self._follow_cart()

    def set_order_discount(self, pct: Any) -> Decimal:
        self._assert_editable()
        self.order_discount_pct = clamp_percentage(pct)
        return self.order_discount_pct

    def set_payment(self, method: PaymentMethod, tendered: Money | None = None) -> None:
        self._assert_editable()
        self.payment_method = method
        self.tendered = tendered

    # --- Derived figures ------------------------------------------------------

    @property
    def totals(self) -> CartTotals:
        return self.cart.totals(self.order_discount_pct)

    @property
    def settlement(self) -> Settlement:
        return settle(self.totals.grand_total, self.tendered, self.payment_method)

    @property
    def blocked_reason(self) -> str | None:
        """Why checkout is not allowed right now, or None if it is."""
        if self.status == CheckoutStatus.SUBMITTING:
            return "A sale is already being submitted"
        if self.cart.is_empty:
            return "Cart is empty"
        if not self.settlement.is_sufficient:
            paid = self.tendered or Money.zero(self.cart.currency)
            return (
                f"Insufficient payment: tendered {paid}, "
                f"total is {self.totals.grand_total}"
            )
        return None

    @property
    def can_checkout(self) -> bool:
        return self.blocked_reason is None

    # --- State transitions ----------------------------------------------------

    def begin_submit(self) -> None:
        """Transition READY_TO_PAY|FAILED -> SUBMITTING."""
        reason = self.blocked_reason
        if reason is not None:
            raise CheckoutBlockedError(reason)
        if self.status not in (CheckoutStatus.READY_TO_PAY, CheckoutStatus.FAILED):
            raise CheckoutBlockedError(
                f"Cannot submit from {self.status.value} status"
            )
        self.status = CheckoutStatus.SUBMITTING

    def complete(self) -> None:
        """Transition SUBMITTING -> COMPLETED and start over with an empty cart."""
        self._assert_submitting()
        self.cart.clear()
        self._reset_payment()
        self.status = CheckoutStatus.COMPLETED

    def fail(self) -> None:
        """Transition SUBMITTING -> FAILED, keeping the cart for a retry."""
        self._assert_submitting()
        self.status = CheckoutStatus.FAILED

    def cancel(self) -> None:
        """Discard the cart and go back to BUILDING."""
        if self.status == CheckoutStatus.SUBMITTING:
            raise ValidationError("Cannot cancel while a sale is being submitted")
        self.cart.clear()
        self._reset_payment()
        self.status = CheckoutStatus.BUILDING

    # --- Internal helpers -----------------------------------------------------

    def _follow_cart(self) -> None:
        if self.cart.is_empty:
            self.status = CheckoutStatus.BUILDING
        else:
            self.status = CheckoutStatus.READY_TO_PAY

    def _reset_payment(self) -> None:
        self.order_discount_pct = Decimal("0")
        self.payment_method = PaymentMethod.CASH
        self.tendered = None

    def _assert_editable(self) -> None:
        if self.status == CheckoutStatus.SUBMITTING:
            raise ValidationError(
                "Cannot change the sale while it is being submitted"
            )

    def _assert_submitting(self) -> None:
        if self.status != CheckoutStatus.SUBMITTING:
            raise ValidationError(
                f"No submission in progress: current status is {self.status.value}"
            )
