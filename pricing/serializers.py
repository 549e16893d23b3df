from __future__ import annotations

import logging
from collections import defaultdict
from typing import List, Tuple

from rest_framework import serializers

from catalog.services import active_gift_pairs, colors_by_id, products_by_id
from .cart import CartLine
from .resolver import price_or_zero
from .totals import ShippingSelection

logger = logging.getLogger(__name__)


class CartLineInputSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    color_id = serializers.IntegerField(min_value=1, required=False, allow_null=True, default=None)
    quantity = serializers.IntegerField(min_value=1, max_value=999)
    is_gift = serializers.BooleanField(required=False, default=False)
    parent_product_id = serializers.IntegerField(min_value=1, required=False, allow_null=True, default=None)


class ShippingInputSerializer(serializers.Serializer):
    # Quotes come from an external carrier API; unparseable prices count as zero
    price = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)
    currency = serializers.CharField(required=False, max_length=3, default="BRL")
    name = serializers.CharField(required=False, allow_blank=True, max_length=120, default="")
    company = serializers.CharField(required=False, allow_blank=True, max_length=120, default="")
    delivery_time = serializers.IntegerField(required=False, allow_null=True, min_value=0, default=None)


class QuoteSerializer(serializers.Serializer):
    lines = CartLineInputSerializer(many=True, allow_empty=True)
    shipping = ShippingInputSerializer(required=False, allow_null=True, default=None)


class ApplyCouponSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=64, trim_whitespace=True)
    lines = CartLineInputSerializer(many=True, allow_empty=True)


class CartChangeSerializer(serializers.Serializer):
    lines = CartLineInputSerializer(many=True, allow_empty=True)
    product_id = serializers.IntegerField(min_value=1)
    color_id = serializers.IntegerField(min_value=1, required=False, allow_null=True, default=None)
    quantity = serializers.IntegerField(min_value=0, max_value=999, default=1)


def shipping_from(data) -> ShippingSelection | None:
    """Validated shipping payload -> ShippingSelection."""
    if not data:
        return None
    return ShippingSelection(
        price=price_or_zero(data.get("price")),
        currency=data.get("currency") or "BRL",
        name=data.get("name") or "",
        company=data.get("company") or "",
        delivery_time=data.get("delivery_time"),
    )


def build_cart_lines(items) -> Tuple[List[CartLine], List[int]]:
    """
    Turn validated line payloads into ``CartLine`` snapshots.

    Unknown or inactive products are left out and returned separately. A gift
    claim counts only when an active gift link from a surviving non-gift line
    in this cart backs it; its quantity is capped at that parent's total
    quantity. Any other gift claim is priced as a regular line.
    """
    items = list(items or [])
    products = products_by_id(item["product_id"] for item in items)
    colors = colors_by_id(item["color_id"] for item in items if item.get("color_id"))

    parent_quantities = defaultdict(int)
    for item in items:
        if not item.get("is_gift") and item["product_id"] in products:
            parent_quantities[item["product_id"]] += item["quantity"]
    gift_ids = {item["product_id"] for item in items if item.get("is_gift")}
    gift_pairs = active_gift_pairs(set(parent_quantities), gift_ids)

    lines: List[CartLine] = []
    unavailable: List[int] = []
    for item in items:
        product = products.get(item["product_id"])
        if product is None:
            unavailable.append(item["product_id"])
            continue

        color = colors.get(item.get("color_id")) if item.get("color_id") else None
        if color is not None and color.product_id != product.pk:
            color = None

        quantity = item["quantity"]
        is_gift = bool(item.get("is_gift"))
        parent_id = item.get("parent_product_id")
        if is_gift and (parent_id, product.pk) not in gift_pairs:
            logger.warning("Unbacked gift line for product %s (parent %s); pricing it", product.pk, parent_id)
            is_gift, parent_id = False, None
        elif is_gift and quantity > parent_quantities[parent_id]:
            logger.warning("Gift line for product %s capped at %s", product.pk, parent_quantities[parent_id])
            quantity = parent_quantities[parent_id]

        lines.append(CartLine(
            product=product,
            quantity=quantity,
            color=color,
            is_gift=is_gift,
            parent_product_id=parent_id if is_gift else None,
        ))
    return lines, unavailable


def serialize_line(line: CartLine) -> dict:
    return {
        "product_id": line.product_id,
        "color_id": line.color_id,
        "quantity": line.quantity,
        "is_gift": line.is_gift,
        "parent_product_id": line.parent_product_id,
    }
