# pricing/totals.py
"""
Cart total aggregation.

``compute_totals`` is a pure function of its inputs: call it again after any
change to the lines, the pricing context, the applied coupon or the chosen
shipping and it returns a fresh breakdown.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from .resolver import ZERO, line_amount, price_or_zero, q2


@dataclass(frozen=True)
class ShippingSelection:
    """A shipping option chosen by the customer. Only ``price`` matters here."""

    price: Decimal = ZERO
    currency: str = "BRL"
    name: str = ""
    company: str = ""
    delivery_time: Optional[int] = None


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    discount: Decimal
    shipping_cost: Decimal
    total: Decimal

    def as_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "discount": self.discount,
            "shipping_cost": self.shipping_cost,
            "total": self.total,
        }


def compute_subtotal(lines: Iterable, is_local: bool) -> Decimal:
    """Resolved unit price x quantity over the non-gift lines."""
    return q2(sum((line_amount(line, is_local) for line in lines), ZERO))


def coupon_discount(coupon, subtotal: Decimal) -> Decimal:
    """The coupon's discount clamped to ``[0, subtotal]``."""
    if coupon is None:
        return ZERO
    raw = price_or_zero(coupon.calculate_discount(subtotal))
    return min(max(raw, ZERO), max(subtotal, ZERO))


def compute_totals(lines, context, applied_coupon=None, shipping: Optional[ShippingSelection] = None) -> CartTotals:
    subtotal = compute_subtotal(lines, context.is_local)
    discount = coupon_discount(applied_coupon, subtotal)
    shipping_cost = price_or_zero(shipping.price) if shipping is not None else ZERO
    total = max(ZERO, subtotal - discount) + shipping_cost
    return CartTotals(
        subtotal=subtotal,
        discount=discount,
        shipping_cost=shipping_cost,
        total=q2(total),
    )


def present_totals(totals: CartTotals, context) -> dict:
    """
    Totals as shown to the customer. Without a known address the numbers are
    withheld and ``needs_address`` tells the client to ask for one.
    """
    if context.prices_disclosed:
        return {**{k: str(v) for k, v in totals.as_dict().items()}, "needs_address": False}
    return {**{k: None for k in totals.as_dict()}, "needs_address": True}
