# pricing/combos.py
"""
Combo expansion.

A combo is sold as a pseudo-product in the "Combos" category; its contents
and discount terms live in the ``Combo`` record sharing the product's slug.
Each combo line in a cart is expanded independently and concurrently: one
failed lookup leaves that line without detail and never affects the others.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from asgiref.sync import async_to_sync, sync_to_async

from catalog.models import Combo, default_combo_category
from .resolver import ZERO, format_brl, price_or_zero, q2, resolve_unit_price

logger = logging.getLogger(__name__)

COMBO_CATEGORY = "Combos"


def combo_category() -> str:
    return default_combo_category() or COMBO_CATEGORY


def combo_lines(lines) -> list:
    category = combo_category()
    return [line for line in lines if (getattr(line.product, "category", "") or "") == category]


def _format_percent(value: Decimal) -> str:
    text = format(value.normalize(), "f")
    return text.replace(".", ",")


@dataclass(frozen=True)
class ComboDiscount:
    kind: str  # "percentage" | "amount" | "none"
    value: Decimal = ZERO

    @property
    def label(self) -> str:
        if self.kind == "percentage":
            return f"{_format_percent(self.value)}% OFF"
        if self.kind == "amount":
            return f"{format_brl(self.value)} OFF"
        return ""

    def as_dict(self) -> dict:
        return {"kind": self.kind, "value": str(self.value), "label": self.label}


def combo_discount(combo, is_local: bool) -> ComboDiscount:
    """Display discount for the customer's location; percentage wins over amount."""
    if is_local:
        percentage, amount = combo.discount_percentage_local, combo.discount_amount_local
    else:
        percentage, amount = combo.discount_percentage_national, combo.discount_amount_national
    percentage = price_or_zero(percentage)
    amount = price_or_zero(amount)
    if percentage > 0:
        return ComboDiscount("percentage", percentage)
    if amount > 0:
        return ComboDiscount("amount", amount)
    return ComboDiscount("none", ZERO)


@dataclass(frozen=True)
class ComboMember:
    product: object
    quantity: int


@dataclass(frozen=True)
class ComboExpansion:
    combo: object
    items: Tuple[ComboMember, ...] = ()

    def original_price(self, is_local: bool) -> Decimal:
        """Sum of the members' own prices."""
        return q2(sum((resolve_unit_price(m.product, is_local) * m.quantity for m in self.items), ZERO))

    def savings(self, is_local: bool) -> Decimal:
        final_price = getattr(self.combo, "final_price", None)
        if final_price is None:
            return ZERO
        return max(ZERO, q2(self.original_price(is_local) - price_or_zero(final_price)))

    def as_dict(self, is_local: bool) -> dict:
        discount = combo_discount(self.combo, is_local)
        return {
            "combo_id": self.combo.id,
            "slug": self.combo.slug,
            "name": self.combo.name,
            "discount": discount.as_dict(),
            "original_price": str(self.original_price(is_local)),
            "savings": str(self.savings(is_local)),
            "items": [
                {
                    "product_id": m.product.id,
                    "name": m.product.name,
                    "quantity": m.quantity,
                    "images": list(getattr(m.product, "images", None) or []),
                }
                for m in self.items
            ],
        }


@dataclass(frozen=True)
class ExpansionResult:
    """Outcome of expanding one combo line: either an expansion or a reason."""

    product_id: int
    expansion: Optional[ComboExpansion] = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.expansion is not None

    @classmethod
    def success(cls, product_id: int, expansion: ComboExpansion) -> "ExpansionResult":
        return cls(product_id=product_id, expansion=expansion)

    @classmethod
    def failed(cls, product_id: int, reason: str) -> "ExpansionResult":
        return cls(product_id=product_id, reason=reason)


def _load_combo(slug: str) -> Optional[ComboExpansion]:
    combo = Combo.objects.filter(slug=slug, is_active=True).first()
    if combo is None:
        return None
    items = tuple(
        ComboMember(product=item.product, quantity=item.quantity)
        for item in combo.items.select_related("product")
    )
    return ComboExpansion(combo=combo, items=items)


async def fetch_combo_expansion(slug: str) -> Optional[ComboExpansion]:
    """One active combo by slug with its members; ``None`` when missing."""
    return await sync_to_async(_load_combo)(slug)


Fetcher = Callable[[str], Awaitable[Optional[ComboExpansion]]]


async def _expand_line(line, fetch: Fetcher) -> ExpansionResult:
    product_id = line.product.id
    slug = getattr(line.product, "slug", "")
    try:
        expansion = await fetch(slug)
    except Exception as exc:
        logger.warning("Combo lookup failed for product %s (%s)", product_id, slug, exc_info=True)
        return ExpansionResult.failed(product_id, f"lookup failed: {exc}")
    if expansion is None:
        logger.info("No active combo for product %s (%s)", product_id, slug)
        return ExpansionResult.failed(product_id, "combo not found")
    return ExpansionResult.success(product_id, expansion)


async def expand_combo_results(lines, fetch: Fetcher = fetch_combo_expansion) -> List[ExpansionResult]:
    """Expand every combo line concurrently; one result per combo line."""
    return list(await asyncio.gather(*(_expand_line(line, fetch) for line in combo_lines(lines))))


async def expand_combos(lines, fetch: Fetcher = fetch_combo_expansion) -> Dict[int, ComboExpansion]:
    """
    Map of product id -> expansion for the cart's combo lines.

    Built once after every lookup has settled; failed lines are left out.
    """
    results = await expand_combo_results(lines, fetch=fetch)
    return {result.product_id: result.expansion for result in results if result.ok}


def expand_combos_sync(lines, fetch: Fetcher = fetch_combo_expansion) -> Dict[int, ComboExpansion]:
    return async_to_sync(expand_combos)(lines, fetch=fetch)


@dataclass
class ComboBreakdown:
    """
    Combo details for one cart view.

    The map is rebuilt in full whenever the set of combo lines changes and is
    swapped in as a whole. Overlapping refreshes are not cancelled; whichever
    finishes last wins.
    """

    fetch: Fetcher = fetch_combo_expansion
    entries: Dict[int, ComboExpansion] = field(default_factory=dict)
    _signature: Optional[frozenset] = field(default=None, repr=False)

    @staticmethod
    def signature(lines) -> frozenset:
        return frozenset((line.product.id, getattr(line.product, "slug", "")) for line in combo_lines(lines))

    def is_stale(self, lines) -> bool:
        return self._signature != self.signature(lines)

    async def arefresh(self, lines) -> Dict[int, ComboExpansion]:
        if not self.is_stale(lines):
            return self.entries
        signature = self.signature(lines)
        entries = await expand_combos(lines, fetch=self.fetch)
        self.entries, self._signature = entries, signature
        return entries

    def refresh(self, lines) -> Dict[int, ComboExpansion]:
        return async_to_sync(self.arefresh)(lines)

    def get(self, product_id: int) -> Optional[ComboExpansion]:
        return self.entries.get(product_id)
