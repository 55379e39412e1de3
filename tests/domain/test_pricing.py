"""Unit tests for the pricing service: line items, order discount, payment."""

from decimal import Decimal

import pytest

from pos.domain.model.value_objects import Money, PaymentMethod
from pos.domain.service.pricing import (
    apply_order_discount,
    clamp_discount,
    clamp_percentage,
    clamp_quantity,
    compute_line_total,
    compute_unit_price,
    discount_step,
    settle,
    step_discount,
    step_quantity,
)


class TestComputeUnitPrice:

    def test_subtracts_discount(self):
        assert compute_unit_price(Money.of("100"), Money.of("10")) == Money.of("90")

    @pytest.mark.parametrize("discount", ["100", "100.01", "250", "1000000"])
    def test_discount_at_or_above_price_gives_exactly_zero(self, discount):
        result = compute_unit_price(Money.of("100"), Money.of(discount))
        assert result.amount == Decimal("0")

    def test_zero_priced_product(self):
        assert compute_unit_price(Money.of("0"), Money.of("5")).is_zero


class TestComputeLineTotal:

    def test_multiplies_and_rounds(self):
        assert compute_line_total(Money.of("90"), 5) == Money.of("450.00")
        assert str(compute_line_total(Money.of("0.333"), 3)) == "Rs 1.00"


class TestClampQuantity:

    def test_within_range_unchanged(self):
        assert clamp_quantity(3, 10) == 3

    def test_above_stock_clamped_to_stock(self):
        assert clamp_quantity(50, 12) == 12

    def test_below_one_clamped_to_one(self):
        assert clamp_quantity(0, 12) == 1
        assert clamp_quantity(-4, 12) == 1

    def test_blank_or_garbage_becomes_one(self):
        assert clamp_quantity(None, 12) == 1
        assert clamp_quantity("", 12) == 1
        assert clamp_quantity("lots", 12) == 1

    def test_typed_string_is_parsed(self):
        assert clamp_quantity(" 4 ", 12) == 4

    def test_fraction_truncated(self):
        assert clamp_quantity("3.7", 12) == 3

    def test_out_of_stock_still_yields_one(self):
        assert clamp_quantity(5, 0) == 1


class TestStepQuantity:

    def test_increment_stops_at_stock(self):
        assert step_quantity(4, 1, 5) == 5
        assert step_quantity(5, 1, 5) == 5

    def test_decrement_stops_at_one(self):
        assert step_quantity(1, -1, 5) == 1


class TestClampDiscount:

    def test_above_price_clamped_to_price(self):
        assert clamp_discount("150", Money.of("100")) == Money.of("100")

    def test_negative_clamped_to_zero(self):
        assert clamp_discount("-5", Money.of("100")).is_zero

    def test_blank_is_zero(self):
        assert clamp_discount(None, Money.of("100")).is_zero
        assert clamp_discount("", Money.of("100")).is_zero

    def test_rounded_to_cents(self):
        assert clamp_discount("2.555", Money.of("100")).amount == Decimal("2.56")

    @pytest.mark.parametrize("huge", ["1e26", "1e30", "1e80"])
    def test_huge_discount_clamped_to_price(self, huge):
        assert clamp_discount(huge, Money.of("100")) == Money.of("100")

    def test_rounding_never_passes_unrounded_price(self):
        assert clamp_discount("1", Money.of("0.335")) == Money.of("0.335")


class TestDiscountStep:

    @pytest.mark.parametrize(
        "subtotal, step",
        [
            ("0", "5"),
            ("99", "5"),
            ("99.99", "5"),
            ("100", "10"),
            ("999", "10"),
            ("999.99", "10"),
            ("1000", "100"),
            ("25000", "100"),
        ],
    )
    def test_tiers(self, subtotal, step):
        assert discount_step(Money.of(subtotal)) == Money.of(step)


class TestStepDiscount:

    def test_step_up_uses_tier_of_line_subtotal(self):
        # 3 x 400 = 1200 -> step 100
        result = step_discount(Money.of("0"), Money.of("1200"), Money.of("400"), +1)
        assert result == Money.of("100")

    def test_step_up_capped_at_unit_price(self):
        result = step_discount(Money.of("8"), Money.of("10"), Money.of("10"), +1)
        assert result == Money.of("10")

    def test_step_down_floored_at_zero(self):
        result = step_discount(Money.of("3"), Money.of("50"), Money.of("50"), -1)
        assert result.is_zero


class TestApplyOrderDiscount:

    def test_percentage_of_subtotal(self):
        result = apply_order_discount(Money.of("1900"), 10)
        assert result.order_discount == Money.of("190.00")
        assert result.grand_total == Money.of("1710.00")

    def test_percentage_above_100_treated_as_100(self):
        result = apply_order_discount(Money.of("1900"), 150)
        assert result.percentage == Decimal("100")
        assert result.order_discount == Money.of("1900")
        assert result.grand_total.is_zero

    def test_negative_percentage_treated_as_zero(self):
        result = apply_order_discount(Money.of("50"), -10)
        assert result.order_discount.is_zero
        assert result.grand_total == Money.of("50")

    def test_discount_rounded_half_up(self):
        # 33.33 * 15% = 4.9995 -> 5.00
        result = apply_order_discount(Money.of("33.33"), 15)
        assert result.order_discount.amount == Decimal("5.00")
        assert result.grand_total.amount == Decimal("28.33")

    def test_string_percentage_accepted(self):
        assert clamp_percentage("12.5") == Decimal("12.5")
        assert clamp_percentage("n/a") == Decimal("0")


class TestSettle:

    def test_cash_short_by_one_cent_is_insufficient(self):
        result = settle(Money.of("100.00"), Money.of("99.99"), PaymentMethod.CASH)
        assert result.is_sufficient is False
        assert result.balance.is_zero

    def test_cash_exact_amount(self):
        result = settle(Money.of("100.00"), Money.of("100.00"), PaymentMethod.CASH)
        assert result.is_sufficient is True
        assert str(result.balance) == "Rs 0.00"

    def test_cash_overpayment_gives_change(self):
        result = settle(Money.of("100.00"), Money.of("150.00"), PaymentMethod.CASH)
        assert result.balance == Money.of("50.00")

    def test_cash_without_tender_is_insufficient(self):
        assert settle(Money.of("1"), None, PaymentMethod.CASH).is_sufficient is False

    @pytest.mark.parametrize("method", [PaymentMethod.CARD, PaymentMethod.OTHER])
    def test_non_cash_always_sufficient(self, method):
        result = settle(Money.of("100.00"), None, method)
        assert result.is_sufficient is True
        assert result.balance.is_zero

    @pytest.mark.parametrize("method", list(PaymentMethod))
    def test_zero_total_always_sufficient(self, method):
        assert settle(Money.of("0"), None, method).is_sufficient is True
