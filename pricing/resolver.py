# pricing/resolver.py
"""
Unit price resolution.

Every product carries two list prices: one for customers inside the local
service area and one for everybody else. Missing or malformed prices are
coerced to zero here, in one place, instead of leaking ``None`` into the
arithmetic downstream.
"""
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

ZERO = Decimal("0.00")
CENT = Decimal("0.01")


def q2(value: Any) -> Decimal:
    """Round to cents, half up."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def price_or_zero(value: Any) -> Decimal:
    """
    Coerce a stored or submitted price into a Decimal.

    None, blanks, non-numeric strings and non-finite numbers become 0.00.
    Never raises.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return ZERO
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not amount.is_finite():
        return ZERO
    return q2(amount)


def resolve_unit_price(product, is_local: bool) -> Decimal:
    field = "local_price" if is_local else "national_price"
    return price_or_zero(getattr(product, field, None))


def line_amount(line, is_local: bool) -> Decimal:
    """Unit price x quantity; gift lines are free."""
    if line.is_gift:
        return ZERO
    return q2(resolve_unit_price(line.product, is_local) * line.quantity)


def format_brl(value: Any) -> str:
    """``Decimal("1234.5")`` -> ``"R$ 1.234,50"``"""
    text = f"{price_or_zero(value):,.2f}"
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")
