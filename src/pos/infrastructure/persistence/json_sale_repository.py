"""JSON-file-backed implementation of SaleRepository.

Records are stored in their payload shape, amounts as strings, which is
also how they are handed back to readers.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pos.domain.model.sale import Sale
from pos.domain.repository.sale_repository import SaleRepository

logger = logging.getLogger(__name__)


class JsonSaleRepository(SaleRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- SaleRepository interface ---------------------------------------------

    def next_id(self) -> int:
        sales = self._load_raw()
        if not sales:
            return 1
        return max(int(s.get("saleId") or 0) for s in sales) + 1

    def save(self, sale: Sale) -> Sale:
        sales = self._load_raw()

        if sale.id is None:
            sale.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        record = sale.to_payload()
        replaced = False
        for i, raw in enumerate(sales):
            if int(raw.get("saleId") or 0) == sale.id:
                sales[i] = record
                replaced = True
                break
        if not replaced:
            sales.append(record)

        self._persist_raw(sales)
        logger.debug("Persisted sale #%s to %s", sale.id, self._file_path)
        return sale

    def get_record(self, sale_id: int) -> dict[str, Any] | None:
        for raw in self._load_raw():
            if int(raw.get("saleId") or 0) == sale_id:
                return raw
        return None

    def list_records(self) -> list[dict[str, Any]]:
        return self._load_raw()

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict[str, Any]]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, sales: list[dict[str, Any]]) -> None:
        self._file_path.write_text(
            json.dumps(sales, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
