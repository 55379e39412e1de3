"""Boundary adapter for loosely-typed numeric input.

Persisted sale records and typed-in form values may carry numbers as
strings, ``None`` or garbage.  Everything crossing into the pricing
rules goes through :func:`coerce_number` first so the formulas only
ever see clean ``Decimal`` values.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any


def coerce_number(value: Any) -> Decimal | None:
    """Return ``value`` as a finite Decimal, or None if it is not one.

    Accepted, in order:
      1. ``Decimal``, ``int`` and ``float`` instances (booleans are rejected);
      2. strings holding a number, surrounding whitespace ignored;
      3. objects exposing a Decimal ``amount`` (i.e. ``Money``).

    ``None``, empty strings, NaN and infinities all yield None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    elif isinstance(getattr(value, "amount", None), Decimal):
        number = value.amount
    else:
        return None
    return number if number.is_finite() else None
