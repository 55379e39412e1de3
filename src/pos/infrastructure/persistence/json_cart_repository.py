"""JSON-file-backed implementation of CartRepository.

Keeps the register's session between CLI invocations.  Lines are
reconstituted as-is; totals are never stored, they are recomputed.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Any

from pos.domain.model.cart import Cart, LineItem
from pos.domain.model.checkout import CheckoutSession, CheckoutStatus
from pos.domain.model.value_objects import DEFAULT_CURRENCY, Money, PaymentMethod, Quantity
from pos.domain.repository.cart_repository import CartRepository


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file_path = file_path
        self._currency = currency
        self._ensure_file()

    # --- CartRepository interface ---------------------------------------------

    def load(self) -> CheckoutSession:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        if not raw:
            return CheckoutSession(cart=Cart(currency=self._currency))
        return self._to_domain(raw)

    def save(self, session: CheckoutSession) -> None:
        self._file_path.write_text(
            json.dumps(self._to_raw(session), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(session: CheckoutSession) -> dict[str, Any]:
        return {
            "status": session.status.value,
            "currency": session.cart.currency,
            "orderDiscountPercentage": str(session.order_discount_pct),
            "paymentMethod": session.payment_method.value,
            "tendered": (
                str(session.tendered.amount) if session.tendered is not None else None
            ),
            "lines": [
                {
                    "productId": line.product_id,
                    "productName": line.product_name,
                    "catalogUnitPrice": str(line.catalog_unit_price.amount),
                    "qty": line.quantity.value,
                    "perUnitDiscount": str(line.per_unit_discount.amount),
                }
                for line in session.cart.lines
            ],
        }

    def _to_domain(self, raw: dict[str, Any]) -> CheckoutSession:
        currency = raw.get("currency", self._currency)
        lines = [
            LineItem(
                product_id=i["productId"],
                product_name=i["productName"],
                catalog_unit_price=Money(Decimal(i["catalogUnitPrice"]), currency),
                quantity=Quantity(i["qty"]),
                per_unit_discount=Money(Decimal(i["perUnitDiscount"]), currency),
            )
            for i in raw.get("lines", [])
        ]
        tendered = raw.get("tendered")
        return CheckoutSession(
            cart=Cart(lines=lines, currency=currency),
            order_discount_pct=Decimal(raw.get("orderDiscountPercentage", "0")),
            payment_method=PaymentMethod(raw.get("paymentMethod", "CASH")),
            tendered=Money(Decimal(tendered), currency) if tendered is not None else None,
            status=CheckoutStatus(raw.get("status", CheckoutStatus.BUILDING.value)),
        )

    # --- File helpers ---------------------------------------------------------

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
