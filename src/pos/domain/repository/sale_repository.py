"""Abstract repository for sales.

Sales go in as ``Sale`` objects but come back as raw records: the store
is free to return numbers as strings or leave fields out, and readers
are expected to cope (see ``receipt_projector``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pos.domain.model.sale import Sale


class SaleRepository(ABC):

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique sale ID."""

    @abstractmethod
    def save(self, sale: Sale) -> Sale:
        """Persist a new sale, assigning its ID, and return it."""

    @abstractmethod
    def get_record(self, sale_id: int) -> dict[str, Any] | None:
        """Return the persisted record for a sale, or None if not found."""

    @abstractmethod
    def list_records(self) -> list[dict[str, Any]]:
        """Return every persisted sale record, oldest first."""
