# pricing/cart.py
"""
Cart snapshot helpers.

A cart is a plain list of ``CartLine`` values. Every helper here returns a new
list and leaves its input untouched, so callers can recompute totals after
each mutation without worrying about shared state.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class InsufficientStockError(Exception):
    """Requested quantity exceeds the variant's stock."""

    def __init__(self, available: int):
        self.available = available
        super().__init__(f"Estoque insuficiente. Disponível: {available} unidade(s)")


@dataclass(frozen=True)
class CartLine:
    product: object
    quantity: int = 1
    color: Optional[object] = None
    is_gift: bool = False
    parent_product_id: Optional[int] = None

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def color_id(self) -> Optional[int]:
        return getattr(self.color, "id", None)

    @property
    def key(self) -> Tuple[int, Optional[int], bool]:
        return (self.product_id, self.color_id, self.is_gift)


def _variant_stock(color) -> Optional[int]:
    if color is None:
        return None
    return getattr(color, "stock", None)


def _matches(line: CartLine, product_id: int, color_id: Optional[int]) -> bool:
    return line.product_id == product_id and line.color_id == color_id


def add_line(lines: Iterable[CartLine], product, color=None, quantity: int = 1) -> List[CartLine]:
    """
    Add ``quantity`` of a product (and variant) to the cart.

    Merges into the existing non-gift line with the same key. When the
    variant defines a stock, the quantity is clamped to what is left; if
    nothing is left, ``InsufficientStockError`` is raised.
    """
    lines = list(lines)
    key = (product.id, getattr(color, "id", None), False)
    existing = next((line for line in lines if line.key == key), None)
    current = existing.quantity if existing else 0

    stock = _variant_stock(color)
    if stock is not None and current + quantity > stock:
        allowed = stock - current
        if allowed <= 0:
            raise InsufficientStockError(stock)
        logger.debug("Clamped %s x%s to %s (stock %s)", product.id, quantity, allowed, stock)
        quantity = allowed

    if existing:
        return [replace(line, quantity=line.quantity + quantity) if line is existing else line for line in lines]
    return lines + [CartLine(product=product, quantity=quantity, color=color)]


def attach_gifts(lines: Iterable[CartLine], parent_product, gift_products: Iterable, quantity: int) -> List[CartLine]:
    """Replace the gift lines generated by ``parent_product``."""
    gift_products = list(gift_products)
    if not gift_products:
        return list(lines)
    kept = [
        line for line in lines
        if not (line.is_gift and line.parent_product_id == parent_product.id)
    ]
    gifts = [
        CartLine(product=gift, quantity=quantity, is_gift=True, parent_product_id=parent_product.id)
        for gift in gift_products
    ]
    return kept + gifts


def remove_line(lines: Iterable[CartLine], product_id: int, color_id: Optional[int] = None) -> List[CartLine]:
    """Remove a product line; gifts whose parent is gone go with it."""
    kept = [line for line in lines if line.is_gift or not _matches(line, product_id, color_id)]
    parents = {line.product_id for line in kept if not line.is_gift}
    return [
        line for line in kept
        if not (line.is_gift and line.parent_product_id is not None and line.parent_product_id not in parents)
    ]


def update_quantity(lines: Iterable[CartLine], product_id: int, quantity: int,
                    color_id: Optional[int] = None) -> List[CartLine]:
    lines = list(lines)
    if quantity <= 0:
        return remove_line(lines, product_id, color_id)

    target = next(
        (line for line in lines if not line.is_gift and _matches(line, product_id, color_id)),
        None,
    )
    if target is None:
        return lines

    stock = _variant_stock(target.color)
    if stock is not None and quantity > stock:
        raise InsufficientStockError(stock)
    return [replace(line, quantity=quantity) if line is target else line for line in lines]


def item_count(lines: Iterable[CartLine]) -> int:
    return sum(line.quantity for line in lines)
