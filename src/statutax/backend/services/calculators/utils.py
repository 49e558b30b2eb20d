"""Utility helpers for calculator modules."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from statutax.backend.errors import InvalidInput

CENT = Decimal("0.01")
ZERO = Decimal("0")

# Keeps cent-quantized amounts and their sums inside the default 28-digit context.
MAX_AMOUNT_EXPONENT = 24


def to_amount(value: Any, field_name: str) -> Decimal:
    """Return ``value`` as a non-negative ``Decimal`` or raise ``InvalidInput``.

    Floats are converted through their shortest string representation so that
    ``0.1`` becomes ``Decimal("0.1")`` rather than its binary expansion.
    """

    if isinstance(value, bool) or value is None:
        raise InvalidInput(f"Field '{field_name}' must be a number")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise InvalidInput(f"Field '{field_name}' must be a number") from exc
    else:
        raise InvalidInput(f"Field '{field_name}' must be a number")

    if not amount.is_finite():
        raise InvalidInput(f"Field '{field_name}' must be a finite number")
    if amount < 0:
        raise InvalidInput(f"Field '{field_name}' cannot be negative")
    if amount.adjusted() >= MAX_AMOUNT_EXPONENT:
        raise InvalidInput(f"Field '{field_name}' exceeds the supported range")
    return amount


def format_percentage(value: Decimal) -> str:
    """Return a human-readable percentage label for ``value``."""

    percentage = value * 100
    if percentage == percentage.to_integral_value():
        return f"{int(percentage)}%"
    return f"{percentage.quantize(CENT, rounding=ROUND_HALF_UP)}%"


def round_currency(value: Decimal) -> Decimal:
    """Round monetary amounts to two decimals, halves away from zero."""

    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidInput(f"Amount {value} exceeds the supported range") from exc
