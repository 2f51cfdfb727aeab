"""Money formatting helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

MINOR_UNITS = Decimal("100")


def to_major_units(amount: int | float | Decimal) -> Decimal:
    """Convert an amount stored in minor units (cents) to a 2dp Decimal."""
    return (Decimal(str(amount)) / MINOR_UNITS).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_currency(amount: int | float | Decimal, currency_code: str) -> str:
    """Format a minor-units amount for display, e.g. ``USD 1,234.50``."""
    code = (currency_code or "").upper()
    return f"{code} {to_major_units(amount):,.2f}".strip()
