"""Who is operating the register."""

from __future__ import annotations

from abc import ABC, abstractmethod


class UserContext(ABC):

    @abstractmethod
    def current_user_id(self) -> int:
        """Return the ID of the logged-in cashier."""
