"""Money, quantities and payment methods, plus the cent-rounding helpers.

Value objects are immutable and compared by value.  Each one validates
itself on construction, so a negative Money or a zero Quantity cannot
exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import (
    ROUND_HALF_UP,
    Decimal,
    DecimalException,
    InvalidOperation,
    localcontext,
)
from enum import Enum
from functools import total_ordering

from pos.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "LKR"

_CENT = Decimal("0.01")

# Widest amount round2 accepts, in digits before the decimal point.
MAX_INTEGER_DIGITS = 60

# Codes without an entry here are rendered as "<CODE> <amount>".
CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "LKR": "Rs ",
}


def _to_decimal(value: str | float | int | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        # str() first so floats keep their shortest repr (0.1 -> "0.1").
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid money amount: {value!r}") from exc


def round2(value: str | float | int | Decimal) -> Decimal:
    """Round half away from zero to exactly two decimal places.

    Amounts with ``MAX_INTEGER_DIGITS`` or more digits before the point,
    and infinities, raise ValidationError.
    """
    number = _to_decimal(value)
    if number.is_finite() and number.adjusted() >= MAX_INTEGER_DIGITS:
        raise ValidationError(f"Money amount out of range: {value!r}")
    with localcontext() as ctx:
        ctx.prec = MAX_INTEGER_DIGITS + 2
        try:
            return number.quantize(_CENT, rounding=ROUND_HALF_UP)
        except DecimalException as exc:
            raise ValidationError(f"Invalid money amount: {value!r}") from exc


def clamp(value, lo, hi):
    """Return ``lo`` if value < lo, ``hi`` if value > hi, else ``value``."""
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def format_money(value: str | float | int | Decimal, currency: str | None = None) -> str:
    """Render an amount with two fractional digits and a currency prefix.

    Unknown currency codes never raise; they fall back to ``"<CODE> <amount>"``.
    """
    amount = round2(value)
    code = (currency or "").strip().upper()
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is not None:
        sign = "-" if amount < 0 else ""
        return f"{sign}{symbol}{abs(amount):.2f}"
    if code:
        return f"{code} {amount:.2f}"
    return f"{amount:.2f}"


@total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative amount in one currency.

    Amounts are Decimals end to end; a float never reaches a total.
    Intermediate results keep full precision and are rounded to cents
    with ``rounded()`` only where a figure is shown or stored.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Build from loosely typed input; garbage raises ValidationError."""
        return Money(_to_decimal(amount), currency)

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0.00"), currency)

    # --- Arithmetic -----------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._same_currency(other).amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        difference = self.amount - self._same_currency(other).amount
        if difference < 0:
            raise ValidationError(
                f"{self} minus {other} would give a negative amount"
            )
        return Money(difference, self.currency)

    def __mul__(self, factor: int | Decimal) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._same_currency(other).amount

    def rounded(self) -> Money:
        return Money(round2(self.amount), self.currency)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def __str__(self) -> str:
        return format_money(self.amount, self.currency)

    def _same_currency(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )
        return other


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    A line in the cart never holds zero units: it is removed instead.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


class PaymentMethod(Enum):
    CASH = "CASH"
    CARD = "CARD"
    OTHER = "OTHER"

    @staticmethod
    def parse(raw: str | PaymentMethod) -> PaymentMethod:
        if isinstance(raw, PaymentMethod):
            return raw
        try:
            return PaymentMethod(str(raw).strip().upper())
        except ValueError as exc:
            allowed = ", ".join(m.value for m in PaymentMethod)
            raise ValidationError(
                f"Unknown payment method {raw!r} (expected one of {allowed})"
            ) from exc
