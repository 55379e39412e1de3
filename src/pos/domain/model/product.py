"""Product aggregate.

Products live independently of carts and sales. The pricing rules only
read a product's price and stock; the catalogue commands are the only
place that changes them.
"""

from __future__ import annotations

from dataclasses import dataclass

from pos.domain.exceptions import ValidationError
from pos.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the shop catalogue.

    ``available_qty`` is the stock on hand and caps how many units a
    single cart line may hold.  ``category`` and ``brand`` are plain
    names used to narrow the catalogue listing.
    """

    id: str
    name: str
    price: Money
    available_qty: int = 0
    barcode: str | None = None
    category: str | None = None
    brand: str | None = None

    @property
    def in_stock(self) -> bool:
        return self.available_qty > 0

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Lines already in a cart keep the price they were added with;
        persisted sales carry their own snapshot.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        self.available_qty = quantity

    def deduct_stock(self, quantity: int) -> None:
        """Remove sold units from stock."""
        if quantity <= 0:
            raise ValidationError("Deducted quantity must be positive")
        if quantity > self.available_qty:
            raise ValidationError(
                f"Insufficient stock for {self.name} "
                f"(need {quantity}, have {self.available_qty})"
            )
        self.available_qty -= quantity
