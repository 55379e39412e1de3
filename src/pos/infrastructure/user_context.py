"""UserContext backed by the configured cashier ID."""

from __future__ import annotations

from pos.domain.repository.user_context import UserContext


class SettingsUserContext(UserContext):

    def __init__(self, cashier_id: int) -> None:
        self._cashier_id = cashier_id

    def current_user_id(self) -> int:
        return self._cashier_id
