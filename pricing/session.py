# pricing/session.py
"""Applied coupon state for the current checkout, kept in the Django session."""
from __future__ import annotations

import logging

from coupons.services import find_active_coupon

logger = logging.getLogger(__name__)

SESSION_COUPON_KEY = "coupon_code"


def apply_coupon(session, coupon) -> None:
    session[SESSION_COUPON_KEY] = coupon.code
    session.modified = True


def clear_coupon(session) -> None:
    if session.pop(SESSION_COUPON_KEY, None) is not None:
        session.modified = True


def applied_coupon(session):
    """
    The coupon stored for this checkout. It is not re-validated here; a code
    that no longer matches an active coupon is dropped from the session.
    """
    code = session.get(SESSION_COUPON_KEY)
    if not code:
        return None
    coupon = find_active_coupon(code)
    if coupon is None:
        logger.info("Dropping stale coupon %s from session", code)
        clear_coupon(session)
    return coupon


def clear_checkout(session) -> None:
    """Cart cleared: the applied coupon goes with it."""
    clear_coupon(session)
