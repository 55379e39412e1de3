"""Application service: Checkout use case.

Drives the checkout session through its submission:

1. Check stock for every cart line (nothing is changed yet).
2. ``begin_submit()`` refuses if checkout is blocked (empty cart,
   short cash payment, submission already in flight).  The SUBMITTING
   status is saved before the store is called, so a second register
   process sharing the cart file is refused too.
3. Snapshot the session into a Sale and hand it to the sales store.
4. On success complete and save the session, then deduct stock and
   return the receipt rebuilt from what the store echoes back.

If the store fails the session is marked FAILED with its cart intact,
so the cashier can simply try again.  There is no automatic retry.

Once the store has the sale the cart is never left payable: a stock
deduction failure after that point is reported against the recorded
sale instead.  A process killed mid-submission leaves the cart in
SUBMITTING; ``ReleaseSubmissionHandler`` turns that into FAILED.
"""

from __future__ import annotations

import logging

from pos.application.dto import ReceiptDTO
from pos.application.show_receipt import to_receipt_dto
from pos.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    ValidationError,
)
from pos.domain.model.sale import Sale
from pos.domain.repository.cart_repository import CartRepository
from pos.domain.repository.product_repository import ProductRepository
from pos.domain.repository.sale_repository import SaleRepository
from pos.domain.repository.user_context import UserContext
from pos.domain.service.stock_service import StockService

logger = logging.getLogger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        sale_repo: SaleRepository,
        user_context: UserContext,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._sale_repo = sale_repo
        self._user_context = user_context

    def handle(self, customer_id: int | None = None) -> ReceiptDTO:
        session = self._cart_repo.load()
        stock = StockService(self._product_repo)

        stock.check_cart(session.cart)
        session.begin_submit()
        self._cart_repo.save(session)

        sale = Sale.from_session(
            session,
            user_id=self._user_context.current_user_id(),
            customer_id=customer_id,
        )
        logger.info("Submitting sale: %s", sale.to_payload())

        try:
            saved = self._sale_repo.save(sale)
        except Exception:
            logger.exception("Saving sale failed; cart kept for retry")
            session.fail()
            self._cart_repo.save(session)
            raise

        logger.info("Sale #%s recorded, total %s", saved.id, saved.total_amount)

        session.complete()
        self._cart_repo.save(session)

        try:
            stock.deduct_for_sale(saved)
        except DomainException as exc:
            logger.exception("Sale #%s recorded but stock was not deducted", saved.id)
            raise ValidationError(
                f"Sale #{saved.id} was recorded, but stock could not be deducted: {exc}"
            ) from exc

        record = self._sale_repo.get_record(saved.id)  # type: ignore[arg-type]
        if record is None:
            raise EntityNotFoundError(f"Sale #{saved.id} not found after saving")
        return to_receipt_dto(record, saved.total_amount.currency)
