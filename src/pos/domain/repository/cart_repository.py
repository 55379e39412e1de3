"""Abstract repository for the register's checkout session."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.checkout import CheckoutSession


class CartRepository(ABC):

    @abstractmethod
    def load(self) -> CheckoutSession:
        """Return the current session, or a fresh empty one."""

    @abstractmethod
    def save(self, session: CheckoutSession) -> None:
        """Persist the session."""
