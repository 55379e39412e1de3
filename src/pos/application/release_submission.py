"""Application service: Release Submission use case.

A register process that dies while the sales store is being called
leaves the shared cart in SUBMITTING, and every later checkout is
refused.  Releasing marks that submission FAILED with its cart intact
so the sale can be retried.  Check the sale list first: the store may
have recorded the sale before the process died.
"""

from __future__ import annotations

import logging

from pos.application.dto import CartDTO
from pos.application.show_cart import to_cart_dto
from pos.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


class ReleaseSubmissionHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self) -> CartDTO:
        session = self._cart_repo.load()
        session.fail()
        self._cart_repo.save(session)
        logger.warning("Interrupted submission released; cart kept for retry")
        return to_cart_dto(session)
