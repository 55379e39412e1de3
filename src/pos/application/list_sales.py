"""Application service: List Sales use case (query)."""

from __future__ import annotations

from pos.application.dto import SaleSummaryDTO
from pos.application.show_receipt import format_sale_date
from pos.domain.model.value_objects import DEFAULT_CURRENCY, format_money
from pos.domain.repository.sale_repository import SaleRepository
from pos.domain.service.coercion import coerce_number
from pos.domain.service.receipt_projector import project_receipt


class ListSalesHandler:

    def __init__(self, sale_repo: SaleRepository, currency: str = DEFAULT_CURRENCY) -> None:
        self._sale_repo = sale_repo
        self._currency = currency

    def handle(self) -> list[SaleSummaryDTO]:
        summaries: list[SaleSummaryDTO] = []
        for record in self._sale_repo.list_records():
            totals = project_receipt(record)
            sale_id = coerce_number(record.get("saleId"))
            summaries.append(
                SaleSummaryDTO(
                    sale_id=int(sale_id) if sale_id is not None else 0,
                    sale_date=format_sale_date(record.get("saleDate")),
                    payment_method=str(record.get("paymentMethod") or ""),
                    item_count=sum(line.qty for line in totals.lines),
                    grand_total=format_money(
                        totals.grand_total, record.get("currency") or self._currency
                    ),
                )
            )
        return summaries
