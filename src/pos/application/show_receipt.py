"""Application service: Show Receipt use case (query).

Receipts are always rebuilt from the persisted record, never from the
cart, so a reprint shows exactly what the sales store holds.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pos.application.dto import ReceiptDTO, ReceiptLineDTO
from pos.domain.exceptions import EntityNotFoundError
from pos.domain.model.value_objects import DEFAULT_CURRENCY, format_money
from pos.domain.repository.sale_repository import SaleRepository
from pos.domain.service.coercion import coerce_number
from pos.domain.service.receipt_projector import project_receipt


class ShowReceiptHandler:

    def __init__(self, sale_repo: SaleRepository, currency: str = DEFAULT_CURRENCY) -> None:
        self._sale_repo = sale_repo
        self._currency = currency

    def handle(self, sale_id: int) -> ReceiptDTO:
        record = self._sale_repo.get_record(sale_id)
        if record is None:
            raise EntityNotFoundError(f"Sale #{sale_id} not found")
        return to_receipt_dto(record, self._currency)


# --- Mapping ------------------------------------------------------------------


def format_sale_date(raw: Any) -> str:
    if not raw:
        return ""
    try:
        parsed = datetime.fromisoformat(str(raw))
    except ValueError:
        return str(raw)
    return parsed.strftime("%Y-%m-%d %H:%M UTC")


def to_receipt_dto(record: dict[str, Any], default_currency: str = DEFAULT_CURRENCY) -> ReceiptDTO:
    currency = record.get("currency") or default_currency
    totals = project_receipt(record)
    sale_id = coerce_number(record.get("saleId"))

    def money(value) -> str:
        return format_money(value, currency)

    return ReceiptDTO(
        sale_id=int(sale_id) if sale_id is not None else 0,
        sale_date=format_sale_date(record.get("saleDate")),
        payment_method=str(record.get("paymentMethod") or ""),
        cashier_id=str(record.get("userId") or ""),
        customer_id=str(record.get("customerId") or ""),
        lines=[
            ReceiptLineDTO(
                product_name=line.product_name or f"#{line.product_id}",
                quantity=line.qty,
                unit_price=money(line.unit_original_price),
                discount=money(line.discount_total),
                line_total=money(line.line_total),
            )
            for line in totals.lines
        ],
        original_total=money(totals.original_total),
        item_discounts=money(totals.item_discounts),
        subtotal=money(totals.subtotal),
        order_discount_pct=f"{totals.order_discount_percentage:.2f}",
        order_discount=money(totals.order_discount),
        grand_total=money(totals.grand_total),
        payment_amount=money(totals.payment_amount),
        balance=money(totals.balance),
    )
