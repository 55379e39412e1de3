"""Domain service: rebuild receipt totals from a persisted sale record.

The sales store may hand back a record whose numeric fields are strings,
``null`` or missing altogether.  Each figure is resolved on its own:

    originalTotal            persisted | sum((price + discount) * qty)
    itemDiscounts            persisted | sum(discount * qty)
    subtotal                 persisted | max(0, originalTotal - itemDiscounts)
    orderDiscountPercentage  persisted clamped to [0, 100] | 0
    orderDiscount            persisted | order discount of subtotal at that pct
    grandTotal               persisted totalAmount | max(0, subtotal - orderDiscount)
    paymentAmount, balance   persisted | 0

Values too large to round to cents count as missing.  A missing field
never hides a present one, and nothing here raises on bad data: with no
usable fields and no items every figure is 0.00.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from pos.domain.exceptions import ValidationError
from pos.domain.model.value_objects import round2
from pos.domain.service.coercion import coerce_number
from pos.domain.service.pricing import clamp_percentage, order_discount_amount

_ZERO = Decimal("0")


@dataclass(frozen=True)
class ReceiptLine:
    product_id: str
    product_name: str
    qty: int
    unit_original_price: Decimal
    unit_discount: Decimal
    discount_total: Decimal
    line_total: Decimal


@dataclass(frozen=True)
class ReceiptTotals:
    original_total: Decimal
    item_discounts: Decimal
    subtotal: Decimal
    order_discount_percentage: Decimal
    order_discount: Decimal
    grand_total: Decimal
    payment_amount: Decimal
    balance: Decimal
    lines: tuple[ReceiptLine, ...] = ()


def _field(value: Any, default: Decimal) -> Decimal:
    """A persisted number, or ``default`` when it is missing or unusable."""
    number = coerce_number(value)
    if number is None:
        return default
    try:
        round2(number)
    except ValidationError:
        return default
    return number


def _cents(value: Decimal) -> Decimal:
    try:
        return round2(value)
    except ValidationError:
        return round2(_ZERO)


def _items(record: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    raw = record.get("saleItems")
    if not isinstance(raw, (list, tuple)):
        return []
    return [item for item in raw if isinstance(item, Mapping)]


def _project_line(item: Mapping[str, Any]) -> ReceiptLine:
    qty_number = _field(item.get("qty"), _ZERO)
    price = _field(item.get("price"), _ZERO)
    discount = _field(item.get("discount"), _ZERO)
    line_total = _field(item.get("totalPrice"), price * qty_number)

    name = item.get("productName") or item.get("name") or ""
    return ReceiptLine(
        product_id=str(item.get("productId") or ""),
        product_name=str(name),
        qty=int(qty_number),
        unit_original_price=_cents(price + discount),
        unit_discount=_cents(discount),
        discount_total=_cents(discount * qty_number),
        line_total=_cents(line_total),
    )


def _derived_order_discount(subtotal: Decimal, pct: Decimal) -> Decimal:
    try:
        return order_discount_amount(subtotal, pct)
    except ValidationError:
        return _ZERO


def project_receipt(record: Mapping[str, Any]) -> ReceiptTotals:
    """Resolve every receipt figure for ``record`` using the fallback chain."""
    items = _items(record)

    computed_original = _ZERO
    computed_item_discounts = _ZERO
    for item in items:
        qty = _field(item.get("qty"), _ZERO)
        price = _field(item.get("price"), _ZERO)
        discount = _field(item.get("discount"), _ZERO)
        computed_original += (price + discount) * qty
        computed_item_discounts += discount * qty

    original_total = _field(record.get("originalTotal"), computed_original)
    item_discounts = _field(record.get("itemDiscounts"), computed_item_discounts)
    subtotal = _field(
        record.get("subtotal"), max(_ZERO, original_total - item_discounts)
    )

    pct = clamp_percentage(record.get("orderDiscountPercentage"))
    order_discount = _field(
        record.get("orderDiscount"), _derived_order_discount(subtotal, pct)
    )
    grand_total = _field(
        record.get("totalAmount"), max(_ZERO, subtotal - order_discount)
    )

    return ReceiptTotals(
        original_total=_cents(original_total),
        item_discounts=_cents(item_discounts),
        subtotal=_cents(subtotal),
        order_discount_percentage=_cents(pct),
        order_discount=_cents(order_discount),
        grand_total=_cents(grand_total),
        payment_amount=_cents(_field(record.get("paymentAmount"), _ZERO)),
        balance=_cents(_field(record.get("balance"), _ZERO)),
        lines=tuple(_project_line(item) for item in items),
    )
