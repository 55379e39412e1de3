"""Unit tests for rebuilding receipt figures from persisted sale records."""

from decimal import Decimal

from pos.domain.service.receipt_projector import project_receipt


def _items():
    return [
        {"productId": "1", "productName": "Kettle", "qty": 2, "price": "475.00", "discount": "25.00"},
        {"productId": "2", "productName": "Toaster", "qty": "1", "price": 950, "discount": 50},
    ]


class TestPersistedFieldsWin:

    def test_every_field_present(self):
        totals = project_receipt({
            "originalTotal": "2000.00",
            "itemDiscounts": "100.00",
            "subtotal": "1900.00",
            "orderDiscountPercentage": "10",
            "orderDiscount": "190.00",
            "totalAmount": "1710.00",
            "paymentAmount": "2000.00",
            "balance": "290.00",
            "saleItems": _items(),
        })
        assert totals.original_total == Decimal("2000.00")
        assert totals.subtotal == Decimal("1900.00")
        assert totals.order_discount == Decimal("190.00")
        assert totals.grand_total == Decimal("1710.00")
        assert totals.payment_amount == Decimal("2000.00")
        assert totals.balance == Decimal("290.00")

    def test_persisted_value_not_recomputed(self):
        # Deliberately inconsistent with the items: the stored figure wins.
        totals = project_receipt({"originalTotal": "5.00", "saleItems": _items()})
        assert totals.original_total == Decimal("5.00")


class TestFallbacks:

    def test_only_items_present(self):
        totals = project_receipt({"saleItems": _items()})
        assert totals.original_total == Decimal("2000.00")
        assert totals.item_discounts == Decimal("100.00")
        assert totals.subtotal == Decimal("1900.00")
        assert totals.order_discount == Decimal("0.00")
        assert totals.grand_total == Decimal("1900.00")

    def test_missing_order_discount_at_zero_percent(self):
        totals = project_receipt({
            "subtotal": "1900.00",
            "orderDiscount": None,
            "orderDiscountPercentage": 0,
        })
        assert totals.order_discount == Decimal("0.00")
        assert totals.grand_total == Decimal("1900.00")

    def test_order_discount_derived_from_percentage(self):
        totals = project_receipt({"orderDiscountPercentage": "10", "saleItems": _items()})
        assert totals.order_discount == Decimal("190.00")
        assert totals.grand_total == Decimal("1710.00")

    def test_null_and_garbage_treated_as_missing(self):
        totals = project_receipt({
            "originalTotal": None,
            "subtotal": "",
            "totalAmount": "n/a",
            "saleItems": _items(),
        })
        assert totals.original_total == Decimal("2000.00")
        assert totals.subtotal == Decimal("1900.00")
        assert totals.grand_total == Decimal("1900.00")

    def test_wide_persisted_subtotal_kept(self):
        totals = project_receipt({"subtotal": "1e30", "orderDiscountPercentage": 0})
        assert totals.subtotal == Decimal("1e30")
        assert totals.order_discount == Decimal("0.00")
        assert totals.grand_total == Decimal("1e30")

    def test_out_of_range_persisted_fields_treated_as_missing(self):
        totals = project_receipt({
            "subtotal": "1e80",
            "totalAmount": "1e99",
            "balance": "9e100",
            "saleItems": _items(),
        })
        assert totals.subtotal == Decimal("1900.00")
        assert totals.grand_total == Decimal("1900.00")
        assert totals.balance == Decimal("0.00")

    def test_out_of_range_item_fields_treated_as_missing(self):
        item = {"productId": "1", "qty": "1e70", "price": "10", "discount": "0"}
        totals = project_receipt({"saleItems": [item]})
        assert totals.original_total == Decimal("0.00")
        assert totals.lines[0].qty == 0

    def test_percentage_clamped(self):
        totals = project_receipt({"orderDiscountPercentage": 250, "saleItems": _items()})
        assert totals.order_discount_percentage == Decimal("100.00")
        assert totals.grand_total == Decimal("0.00")

    def test_empty_record_is_all_zero(self):
        totals = project_receipt({})
        assert totals.grand_total == Decimal("0.00")
        assert totals.payment_amount == Decimal("0.00")
        assert totals.lines == ()

    def test_non_list_items_ignored(self):
        assert project_receipt({"saleItems": "oops"}).lines == ()


class TestLines:

    def test_line_reconstructs_original_unit_price(self):
        line = project_receipt({"saleItems": _items()}).lines[0]
        assert line.product_name == "Kettle"
        assert line.qty == 2
        assert line.unit_original_price == Decimal("500.00")
        assert line.discount_total == Decimal("50.00")
        assert line.line_total == Decimal("950.00")

    def test_persisted_line_total_wins(self):
        item = dict(_items()[0], totalPrice="900.00")
        line = project_receipt({"saleItems": [item]}).lines[0]
        assert line.line_total == Decimal("900.00")
