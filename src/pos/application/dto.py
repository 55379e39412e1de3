"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Amounts are already
formatted for display.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the cashier."""

    product_id: str
    product_name: str
    quantity: int
    catalog_price: str  # formatted, e.g. "Rs 500.00"
    discount: str  # per unit
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    """Output: the cart, its totals and whether it can be checked out."""

    status: str
    lines: list[CartLineDTO]
    original_total: str
    item_discounts: str
    subtotal: str
    order_discount_pct: str  # e.g. "10.00"
    order_discount: str
    grand_total: str
    payment_method: str
    tendered: str | None
    balance: str
    can_checkout: bool
    blocked_reason: str | None


@dataclass(frozen=True)
class ReceiptLineDTO:
    product_name: str
    quantity: int
    unit_price: str  # before discount
    discount: str  # total for the line
    line_total: str


@dataclass(frozen=True)
class ReceiptDTO:
    """Output: a printable receipt rebuilt from a persisted sale."""

    sale_id: int
    sale_date: str
    payment_method: str
    cashier_id: str
    customer_id: str
    lines: list[ReceiptLineDTO]
    original_total: str
    item_discounts: str
    subtotal: str
    order_discount_pct: str
    order_discount: str
    grand_total: str
    payment_amount: str
    balance: str


@dataclass(frozen=True)
class SaleSummaryDTO:
    """Output: one row of the sales history."""

    sale_id: int
    sale_date: str
    payment_method: str
    item_count: int
    grand_total: str
