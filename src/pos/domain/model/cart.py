"""Cart aggregate — the lines a cashier is ringing up.

The Cart owns its line items.  Totals are never stored: they are
recomputed from the lines by the pricing service on every read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pos.domain.exceptions import ValidationError
from pos.domain.model.product import Product
from pos.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from pos.domain.service.pricing import (
    CartTotals,
    clamp_discount,
    compute_line_total,
    compute_totals,
    compute_unit_price,
)


@dataclass
class LineItem:
    """One product in the cart.

    Invariants:
    - ``quantity`` is at least 1 (a line that reaches 0 is removed)
    - ``0 <= per_unit_discount <= catalog_unit_price``
    - ``unit_price == catalog_unit_price - per_unit_discount``
    """

    product_id: str
    product_name: str
    catalog_unit_price: Money
    quantity: Quantity
    per_unit_discount: Money

    def __post_init__(self) -> None:
        if self.per_unit_discount > self.catalog_unit_price:
            raise ValidationError(
                f"Discount {self.per_unit_discount} exceeds the price "
                f"{self.catalog_unit_price} of {self.product_name}"
            )

    @property
    def unit_price(self) -> Money:
        return compute_unit_price(self.catalog_unit_price, self.per_unit_discount)

    @property
    def line_total(self) -> Money:
        return compute_line_total(self.unit_price, self.quantity.value)

    @property
    def original_total(self) -> Money:
        return self.catalog_unit_price * self.quantity.value

    @property
    def discount_total(self) -> Money:
        return self.per_unit_discount * self.quantity.value


@dataclass
class Cart:
    """Aggregate root for the lines of a sale in progress."""

    lines: list[LineItem] = field(default_factory=list)
    currency: str = DEFAULT_CURRENCY

    # --- Mutations ------------------------------------------------------------

    def add_or_merge(self, product: Product, quantity: int, discount: Any) -> LineItem:
        """Add ``quantity`` units of ``product`` at a per-unit ``discount``.

        Adding a product that is already in the cart does not create a
        second line: the quantities are summed, while the discount and
        the catalogue price are replaced by this latest add.  Discounts
        are not averaged.
        """
        per_unit_discount = clamp_discount(discount, product.price)
        existing = self._find_line(product.id)

        if existing is None:
            line = LineItem(
                product_id=product.id,
                product_name=product.name,
                catalog_unit_price=product.price,
                quantity=Quantity(quantity),
                per_unit_discount=per_unit_discount,
            )
            self.lines.append(line)
            return line

        existing.quantity = Quantity(existing.quantity.value + Quantity(quantity).value)
        existing.catalog_unit_price = product.price
        existing.per_unit_discount = per_unit_discount
        existing.product_name = product.name
        return existing

    def remove_line(self, product_id: str) -> None:
        """Drop a line whatever its quantity."""
        self.lines.remove(self._get_line(product_id))

    def change_qty(self, product_id: str, delta: int) -> LineItem | None:
        """Adjust a line's quantity by ``delta``.

        Returns the updated line, or None when it dropped to zero and was
        removed.
        """
        line = self._get_line(product_id)
        new_qty = max(0, line.quantity.value + delta)
        if new_qty == 0:
            self.lines.remove(line)
            return None
        line.quantity = Quantity(new_qty)
        return line

    def clear(self) -> None:
        self.lines.clear()

    # --- Computed properties --------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self.lines)

    def totals(self, order_discount_pct: Any = 0) -> CartTotals:
        return compute_totals(self.lines, order_discount_pct, self.currency)

    # --- Internal helpers -----------------------------------------------------

    def _find_line(self, product_id: str) -> LineItem | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def _get_line(self, product_id: str) -> LineItem:
        line = self._find_line(product_id)
        if line is None:
            raise ValidationError(f"Product ID '{product_id}' is not in the cart")
        return line
