from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from .models import Product, ProductColor, ProductGift

logger = logging.getLogger(__name__)


def gifts_for_product(product: Product) -> List[Product]:
    """Active gift products configured for ``product``."""
    return [
        link.gift_product
        for link in product.gift_links.filter(is_active=True).select_related("gift_product")
    ]


def products_by_id(product_ids: Iterable[int]) -> Dict[int, Product]:
    ids = {int(pid) for pid in product_ids}
    if not ids:
        return {}
    found = {p.pk: p for p in Product.objects.filter(pk__in=ids, is_active=True)}
    missing = ids - set(found)
    if missing:
        logger.warning("Cart references unknown or inactive products: %s", sorted(missing))
    return found


def colors_by_id(color_ids: Iterable[int]) -> Dict[int, ProductColor]:
    ids = {int(cid) for cid in color_ids}
    if not ids:
        return {}
    return {c.pk: c for c in ProductColor.objects.filter(pk__in=ids, is_active=True)}


def active_gift_pairs(parent_ids: Iterable[int], gift_ids: Iterable[int]) -> set:
    """(product id, gift product id) pairs backed by an active gift link."""
    parent_ids, gift_ids = set(parent_ids), set(gift_ids)
    if not parent_ids or not gift_ids:
        return set()
    return set(
        ProductGift.objects.filter(
            product_id__in=parent_ids, gift_product_id__in=gift_ids, is_active=True,
        ).values_list("product_id", "gift_product_id")
    )
