from __future__ import annotations

from typing import Optional

from .models import Address


def default_address_for(user) -> Optional[Address]:
    """The user's default address, falling back to the most recent one."""
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    addresses = Address.objects.filter(user=user)
    return addresses.filter(is_default=True).first() or addresses.order_by("-created_at").first()
