"""Integration tests for the Checkout use case."""

import pytest

from pos.application.add_to_cart import AddToCartHandler
from pos.application.checkout import CheckoutHandler
from pos.application.release_submission import ReleaseSubmissionHandler
from pos.application.set_order_discount import SetOrderDiscountHandler
from pos.application.set_payment import SetPaymentHandler
from pos.domain.exceptions import CheckoutBlockedError, ValidationError
from pos.domain.model.checkout import CheckoutStatus
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money
from tests.fakes import (
    FakeCartRepository,
    FakeProductRepository,
    FakeSaleRepository,
    FakeUserContext,
)


def _setup():
    products = [
        Product(id="1", name="Kettle", price=Money.of("500"), available_qty=10),
        Product(id="2", name="Toaster", price=Money.of("1000"), available_qty=5),
    ]
    cart_repo = FakeCartRepository()
    product_repo = FakeProductRepository(products)
    sale_repo = FakeSaleRepository()
    return cart_repo, product_repo, sale_repo


def _ring_up(cart_repo, product_repo, tendered="2000"):
    add = AddToCartHandler(cart_repo, product_repo)
    add.handle("1", "2", "25")
    add.handle("2", "1", "50")
    SetOrderDiscountHandler(cart_repo).handle("10")
    SetPaymentHandler(cart_repo).handle("cash", tendered)


def _checkout(cart_repo, product_repo, sale_repo, customer_id=None):
    handler = CheckoutHandler(cart_repo, product_repo, sale_repo, FakeUserContext())
    return handler.handle(customer_id)


class TestCheckoutHappyPath:

    def test_receipt_reflects_recorded_sale(self):
        cart_repo, product_repo, sale_repo = _setup()
        _ring_up(cart_repo, product_repo)

        receipt = _checkout(cart_repo, product_repo, sale_repo, customer_id=3)

        assert receipt.sale_id == 1
        assert receipt.payment_method == "CASH"
        assert receipt.cashier_id == "7"
        assert receipt.customer_id == "3"
        assert receipt.original_total == "Rs 2000.00"
        assert receipt.item_discounts == "Rs 100.00"
        assert receipt.subtotal == "Rs 1900.00"
        assert receipt.order_discount_pct == "10.00"
        assert receipt.order_discount == "Rs 190.00"
        assert receipt.grand_total == "Rs 1710.00"
        assert receipt.payment_amount == "Rs 2000.00"
        assert receipt.balance == "Rs 290.00"
        assert [line.product_name for line in receipt.lines] == ["Kettle", "Toaster"]

    def test_stock_deducted(self):
        cart_repo, product_repo, sale_repo = _setup()
        _ring_up(cart_repo, product_repo)

        _checkout(cart_repo, product_repo, sale_repo)

        assert product_repo.get_by_id("1").available_qty == 8
        assert product_repo.get_by_id("2").available_qty == 4

    def test_session_completed_and_cleared(self):
        cart_repo, product_repo, sale_repo = _setup()
        _ring_up(cart_repo, product_repo)

        _checkout(cart_repo, product_repo, sale_repo)

        session = cart_repo.load()
        assert session.status == CheckoutStatus.COMPLETED
        assert session.cart.is_empty
        assert session.tendered is None

    def test_card_payment_records_total_as_paid(self):
        cart_repo, product_repo, sale_repo = _setup()
        _ring_up(cart_repo, product_repo)
        SetPaymentHandler(cart_repo).handle("card")

        receipt = _checkout(cart_repo, product_repo, sale_repo)

        assert receipt.payment_method == "CARD"
        assert receipt.payment_amount == "Rs 1710.00"
        assert receipt.balance == "Rs 0.00"


class TestCheckoutBlocked:

    def test_empty_cart(self):
        cart_repo, product_repo, sale_repo = _setup()
        with pytest.raises(CheckoutBlockedError, match="Cart is empty"):
            _checkout(cart_repo, product_repo, sale_repo)
        assert sale_repo.list_records() == []

    def test_short_cash(self):
        cart_repo, product_repo, sale_repo = _setup()
        _ring_up(cart_repo, product_repo, tendered="1709.99")

        with pytest.raises(CheckoutBlockedError, match="Insufficient payment"):
            _checkout(cart_repo, product_repo, sale_repo)

        assert sale_repo.list_records() == []
        assert cart_repo.load().status == CheckoutStatus.READY_TO_PAY

    def test_stock_sold_elsewhere_refused_before_submission(self):
        cart_repo, product_repo, sale_repo = _setup()
        _ring_up(cart_repo, product_repo)
        product_repo.get_by_id("2").set_stock(0)

        with pytest.raises(ValidationError, match="Insufficient stock for Toaster"):
            _checkout(cart_repo, product_repo, sale_repo)

        assert sale_repo.list_records() == []
        assert product_repo.get_by_id("1").available_qty == 10


class TestCheckoutFailure:

    def test_store_failure_keeps_cart_and_marks_failed(self):
        cart_repo, product_repo, sale_repo = _setup()
        _ring_up(cart_repo, product_repo)
        sale_repo.fail_next = True

        with pytest.raises(ConnectionError):
            _checkout(cart_repo, product_repo, sale_repo)

        session = cart_repo.load()
        assert session.status == CheckoutStatus.FAILED
        assert session.cart.item_count == 3
        assert session.totals.grand_total == Money.of("1710")
        assert product_repo.get_by_id("1").available_qty == 10

    def test_retry_after_failure_succeeds(self):
        cart_repo, product_repo, sale_repo = _setup()
        _ring_up(cart_repo, product_repo)
        sale_repo.fail_next = True
        with pytest.raises(ConnectionError):
            _checkout(cart_repo, product_repo, sale_repo)

        receipt = _checkout(cart_repo, product_repo, sale_repo)

        assert receipt.grand_total == "Rs 1710.00"
        assert len(sale_repo.list_records()) == 1

    def test_submitting_status_saved_before_store_call(self):
        cart_repo, product_repo, sale_repo = _setup()
        _ring_up(cart_repo, product_repo)
        seen = []
        sale_repo.on_save = lambda sale: seen.append(cart_repo.load().status)

        _checkout(cart_repo, product_repo, sale_repo)

        assert seen == [CheckoutStatus.SUBMITTING]

    def test_second_register_refused_while_sale_in_flight(self):
        cart_repo, product_repo, sale_repo = _setup()
        _ring_up(cart_repo, product_repo)
        errors = []

        def second_register(sale):
            sale_repo.on_save = None
            try:
                _checkout(cart_repo, product_repo, sale_repo)
            except CheckoutBlockedError as exc:
                errors.append(str(exc))

        sale_repo.on_save = second_register
        _checkout(cart_repo, product_repo, sale_repo)

        assert errors == ["A sale is already being submitted"]
        assert len(sale_repo.list_records()) == 1

    def test_stock_failure_after_recording_does_not_reopen_cart(self):
        cart_repo, product_repo, sale_repo = _setup()
        _ring_up(cart_repo, product_repo)

        def sold_elsewhere(sale):
            product_repo.get_by_id("2").set_stock(0)

        sale_repo.on_save = sold_elsewhere

        with pytest.raises(ValidationError, match="Sale #1 was recorded, but stock"):
            _checkout(cart_repo, product_repo, sale_repo)

        session = cart_repo.load()
        assert session.status == CheckoutStatus.COMPLETED
        assert session.cart.is_empty
        assert product_repo.get_by_id("1").available_qty == 10

        sale_repo.on_save = None
        with pytest.raises(CheckoutBlockedError, match="Cart is empty"):
            _checkout(cart_repo, product_repo, sale_repo)
        assert len(sale_repo.list_records()) == 1


class TestReleaseSubmission:

    def _interrupted(self):
        cart_repo, product_repo, sale_repo = _setup()
        _ring_up(cart_repo, product_repo)

        def killed(sale):
            raise KeyboardInterrupt

        sale_repo.on_save = killed
        with pytest.raises(KeyboardInterrupt):
            _checkout(cart_repo, product_repo, sale_repo)
        sale_repo.on_save = None
        return cart_repo, product_repo, sale_repo

    def test_interrupted_submission_blocks_checkout(self):
        cart_repo, product_repo, sale_repo = self._interrupted()
        assert cart_repo.load().status == CheckoutStatus.SUBMITTING
        with pytest.raises(CheckoutBlockedError, match="already being submitted"):
            _checkout(cart_repo, product_repo, sale_repo)

    def test_release_marks_failed_and_allows_retry(self):
        cart_repo, product_repo, sale_repo = self._interrupted()

        dto = ReleaseSubmissionHandler(cart_repo).handle()

        assert dto.status == CheckoutStatus.FAILED.value
        assert dto.grand_total == "Rs 1710.00"
        receipt = _checkout(cart_repo, product_repo, sale_repo)
        assert receipt.sale_id == 1
        assert len(sale_repo.list_records()) == 1

    def test_release_without_submission_refused(self):
        cart_repo, _, _ = _setup()
        with pytest.raises(ValidationError, match="No submission in progress"):
            ReleaseSubmissionHandler(cart_repo).handle()
