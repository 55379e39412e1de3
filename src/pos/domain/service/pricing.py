"""Domain service: order pricing.

Every figure shown in the cart, submitted with a sale and reprinted on a
receipt comes from the functions in this module.  They are pure: no I/O,
no hidden state, safe to call on every cart edit.

Order of application:
  1. per-unit item discounts reduce each line (``compute_unit_price``);
  2. the lines fold into original total, item discounts and subtotal;
  3. the order-wide percentage applies to that *subtotal*, never to the
     original total (``apply_order_discount``);
  4. cash tender settles against the resulting grand total (``settle``).

Out-of-range quantities, discounts and percentages are clamped, not
rejected.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from pos.domain.model.value_objects import (
    DEFAULT_CURRENCY,
    Money,
    PaymentMethod,
    clamp,
    round2,
)
from pos.domain.service.coercion import coerce_number

if TYPE_CHECKING:
    from pos.domain.model.cart import LineItem

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")

# ---------------------------------------------------------------------------
# Discount step policy
# ---------------------------------------------------------------------------
# The +/- buttons of the add-to-cart dialog move the per-unit discount by a
# step that grows with the line subtotal.  Tiers are (lower bound, step),
# checked top-down; anything below the last bound uses DEFAULT_DISCOUNT_STEP.
DISCOUNT_STEP_TIERS: tuple[tuple[Decimal, Decimal], ...] = (
    (Decimal("1000"), Decimal("100")),
    (Decimal("100"), Decimal("10")),
)
DEFAULT_DISCOUNT_STEP = Decimal("5")


@dataclass(frozen=True)
class OrderDiscount:
    percentage: Decimal
    order_discount: Money
    grand_total: Money


@dataclass(frozen=True)
class Settlement:
    balance: Money
    is_sufficient: bool


@dataclass(frozen=True)
class CartTotals:
    """Derived figures for a cart; recomputed, never stored on their own.

    ``grand_total == original_total - item_discounts - order_discount``.
    """

    original_total: Money
    item_discounts: Money
    subtotal: Money
    order_discount_pct: Decimal
    order_discount: Money
    grand_total: Money

    @property
    def total_discount(self) -> Money:
        return self.item_discounts + self.order_discount


# --- Line items -------------------------------------------------------------


def compute_unit_price(catalog_unit_price: Money, discount: Money) -> Money:
    """Catalogue price less the per-unit discount, never below zero."""
    applied = clamp(discount.amount, _ZERO, catalog_unit_price.amount)
    return Money(catalog_unit_price.amount - applied, catalog_unit_price.currency)


def compute_line_total(unit_price: Money, qty: int) -> Money:
    return (unit_price * qty).rounded()


def clamp_quantity(requested: Any, available_qty: int) -> int:
    """Bring a typed-in quantity into ``[1, available_qty]``.

    Blank or unparseable input becomes 1.  Fractions are truncated.  The
    upper bound never drops below 1, so an out-of-stock product still
    yields 1 here; refusing the add is the caller's job.
    """
    number = coerce_number(requested)
    if number is None:
        return 1
    return clamp(int(number), 1, max(1, available_qty))


def step_quantity(current: int, delta: int, available_qty: int) -> int:
    return clamp(current + delta, 1, max(1, available_qty))


def clamp_discount(requested: Any, catalog_unit_price: Money) -> Money:
    """Bring a per-unit discount into ``[0, catalog_unit_price]``."""
    number = coerce_number(requested)
    if number is None:
        number = _ZERO
    within = clamp(number, _ZERO, catalog_unit_price.amount)
    # Rounding up to the cent may pass an unrounded price.
    bounded = min(round2(within), catalog_unit_price.amount)
    return Money(bounded, catalog_unit_price.currency)


def discount_step(subtotal: Money) -> Money:
    """Step for the discount +/- buttons, by ``DISCOUNT_STEP_TIERS``."""
    for lower_bound, step in DISCOUNT_STEP_TIERS:
        if subtotal.amount >= lower_bound:
            return Money(step, subtotal.currency)
    return Money(DEFAULT_DISCOUNT_STEP, subtotal.currency)


def step_discount(
    current: Money,
    line_subtotal: Money,
    catalog_unit_price: Money,
    direction: int,
) -> Money:
    """Move the per-unit discount one step up (+1) or down (-1).

    ``line_subtotal`` is the catalogue price times the dialog quantity.
    The result stays within ``[0, catalog_unit_price]``.
    """
    step = discount_step(line_subtotal).amount
    moved = current.amount + step * (1 if direction >= 0 else -1)
    return Money(
        clamp(moved, _ZERO, catalog_unit_price.amount), catalog_unit_price.currency
    )


# --- Order discount ---------------------------------------------------------


def clamp_percentage(pct: Any) -> Decimal:
    number = coerce_number(pct)
    if number is None:
        return _ZERO
    return clamp(number, _ZERO, _HUNDRED)


def order_discount_amount(subtotal: Decimal, pct: Any) -> Decimal:
    """``round2(subtotal * pct / 100)`` bounded by ``[0, subtotal]``."""
    base = max(subtotal, _ZERO)
    amount = round2(base * clamp_percentage(pct) / _HUNDRED)
    return clamp(amount, _ZERO, base)


def apply_order_discount(subtotal: Money, pct: Any) -> OrderDiscount:
    percentage = clamp_percentage(pct)
    discount = order_discount_amount(subtotal.amount, percentage)
    return OrderDiscount(
        percentage=percentage,
        order_discount=Money(discount, subtotal.currency),
        grand_total=Money(round2(subtotal.amount - discount), subtotal.currency),
    )


# --- Cart totals ------------------------------------------------------------


def compute_totals(
    lines: Iterable[LineItem],
    order_discount_pct: Any = 0,
    currency: str = DEFAULT_CURRENCY,
) -> CartTotals:
    original_total = Money.zero(currency)
    item_discounts = Money.zero(currency)
    for line in lines:
        original_total = original_total + line.original_total
        item_discounts = item_discounts + line.discount_total

    subtotal = original_total - item_discounts
    discount = apply_order_discount(subtotal, order_discount_pct)

    return CartTotals(
        original_total=original_total.rounded(),
        item_discounts=item_discounts.rounded(),
        subtotal=subtotal.rounded(),
        order_discount_pct=discount.percentage,
        order_discount=discount.order_discount,
        grand_total=discount.grand_total,
    )


# --- Payment ----------------------------------------------------------------


def settle(
    grand_total: Money,
    tendered: Money | None,
    payment_method: PaymentMethod,
) -> Settlement:
    """Work out change due and whether the payment covers the total.

    Only cash is checked against the total; card and other methods are
    always sufficient and never produce change.
    """
    zero = Money.zero(grand_total.currency)
    if payment_method is not PaymentMethod.CASH:
        return Settlement(balance=zero, is_sufficient=True)

    paid = tendered if tendered is not None else zero
    if paid < grand_total:
        return Settlement(balance=zero, is_sufficient=False)
    return Settlement(balance=(paid - grand_total).rounded(), is_sufficient=True)
