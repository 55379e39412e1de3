"""Errors raised by the register's domain rules.

The CLI catches DomainException and shows the message to the cashier.
Anything else (a broken sales store, a corrupt data file) propagates.

Out-of-range quantities, discounts and percentages never raise: the
pricing rules clamp them.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input or state that cannot be clamped into something valid."""


class EntityNotFoundError(DomainException):
    """No product or sale matches the given reference."""


class CheckoutBlockedError(DomainException):
    """Checkout was attempted while the session does not allow it.

    The message is the session's blocked reason, e.g. an empty cart or
    cash short of the total.
    """
