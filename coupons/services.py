from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.utils import timezone

from pricing.resolver import format_brl
from pricing.totals import compute_subtotal
from .models import Coupon

logger = logging.getLogger(__name__)


class CouponValidationError(Exception):
    """A submitted coupon was rejected; ``reason`` is machine-readable."""

    NOT_FOUND = "not_found"
    NOT_YET_VALID = "not_yet_valid"
    EXPIRED = "expired"
    LIMIT_REACHED = "limit_reached"
    BELOW_MINIMUM = "below_minimum"

    def __init__(self, reason: str, message: str, minimum_amount: Optional[Decimal] = None):
        super().__init__(message)
        self.reason = reason
        self.message = message
        self.minimum_amount = minimum_amount

    def as_dict(self) -> dict:
        return {
            "reason": self.reason,
            "message": self.message,
            "minimum_amount": str(self.minimum_amount) if self.minimum_amount is not None else None,
        }


def normalize_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()


def find_active_coupon(code: Optional[str]) -> Optional[Coupon]:
    """Find an active coupon by exact (normalized) code."""
    code = normalize_code(code)
    if not code:
        return None
    return Coupon.objects.filter(code=code, is_active=True).first()


def check_coupon(coupon: Coupon, subtotal: Decimal, now: Optional[datetime] = None) -> Coupon:
    """Window, usage and minimum purchase checks for an already-fetched coupon."""
    now = now or timezone.now()

    if coupon.valid_from and now < coupon.valid_from:
        raise CouponValidationError(CouponValidationError.NOT_YET_VALID, "Cupom ainda não está válido")
    if coupon.valid_until and now > coupon.valid_until:
        raise CouponValidationError(CouponValidationError.EXPIRED, "Cupom expirado")

    # a usage limit of 0 means unlimited
    if coupon.usage_limit and coupon.used_count >= coupon.usage_limit:
        raise CouponValidationError(CouponValidationError.LIMIT_REACHED, "Cupom atingiu o limite de uso")

    minimum = coupon.min_purchase_amount or Decimal("0.00")
    if minimum > 0 and subtotal < minimum:
        raise CouponValidationError(
            CouponValidationError.BELOW_MINIMUM,
            f"Valor mínimo de compra: {format_brl(minimum)}",
            minimum_amount=minimum,
        )
    return coupon


def validate_coupon(code: Optional[str], lines, context, now: Optional[datetime] = None) -> Coupon:
    """
    Validate a submitted code against the cart.

    Returns the coupon to apply or raises ``CouponValidationError``. Nothing
    is written: ``used_count`` is left to order commit.
    """
    coupon = find_active_coupon(code)
    if coupon is None:
        logger.info("Coupon rejected: %r not found", normalize_code(code))
        raise CouponValidationError(CouponValidationError.NOT_FOUND, "Cupom inválido ou não encontrado")

    subtotal = compute_subtotal(lines, context.is_local)
    try:
        check_coupon(coupon, subtotal, now=now)
    except CouponValidationError as exc:
        logger.info("Coupon %s rejected: %s (subtotal %s)", coupon.code, exc.reason, subtotal)
        raise

    logger.info("Coupon %s accepted (subtotal %s)", coupon.code, subtotal)
    return coupon
