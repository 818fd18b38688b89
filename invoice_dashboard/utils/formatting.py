"""
Currency helpers.

Amounts are stored as integer cents and shown as US dollar strings.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


def cents_to_decimal(cents: int) -> Decimal:
    """Convert integer cents to a two-place Decimal (``5000 -> Decimal("50.00")``)."""
    return (Decimal(cents) / 100).quantize(_CENT)


def decimal_to_cents(amount: Decimal) -> int:
    """Convert a currency amount to integer cents, rounding half-up to the cent."""
    return int(amount.quantize(_CENT, rounding=ROUND_HALF_UP) * 100)


def format_currency(cents: int) -> str:
    """Render integer cents as a localized dollar string, e.g. ``"$1,234.56"``."""
    value = cents_to_decimal(cents)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


__all__ = ["cents_to_decimal", "decimal_to_cents", "format_currency"]
