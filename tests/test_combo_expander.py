from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync

from pricing.cart import CartLine
from pricing.combos import (
    ComboBreakdown, ComboExpansion, ComboMember, combo_discount, combo_lines,
    expand_combo_results, expand_combos, expand_combos_sync, fetch_combo_expansion,
)
from tests.factories import (
    ComboFactory, ComboItemFactory, ComboProductFactory, ProductFactory,
)


def _combo_with_members(slug, *quantities, **combo_kwargs):
    combo = ComboFactory(slug=slug, **combo_kwargs)
    for qty in quantities:
        ComboItemFactory(combo=combo, quantity=qty)
    return combo


@pytest.mark.django_db
def test_combo_lines_selects_combo_category_only():
    combo_product = ComboProductFactory()
    regular = ProductFactory()
    lines = [CartLine(product=regular), CartLine(product=combo_product)]

    assert combo_lines(lines) == [lines[1]]


@pytest.mark.django_db
def test_fetch_combo_expansion_returns_members():
    combo = _combo_with_members("kit-verao", 1, 2, 3)

    expansion = async_to_sync(fetch_combo_expansion)("kit-verao")

    assert expansion.combo == combo
    assert [m.quantity for m in expansion.items] == [1, 2, 3]


@pytest.mark.django_db
def test_fetch_combo_expansion_ignores_inactive_combo():
    _combo_with_members("kit-off", 1, is_active=False)

    assert async_to_sync(fetch_combo_expansion)("kit-off") is None


@pytest.mark.django_db
def test_expansion_has_one_pair_per_member_item():
    product = ComboProductFactory(slug="kit-inverno")
    _combo_with_members("kit-inverno", 1, 1, 2, 5)

    expansions = expand_combos_sync([CartLine(product=product)])

    assert set(expansions) == {product.id}
    assert len(expansions[product.id].items) == 4


@pytest.mark.django_db
def test_missing_combo_leaves_line_without_detail():
    found = ComboProductFactory(slug="kit-a")
    missing = ComboProductFactory(slug="kit-sem-cadastro")
    _combo_with_members("kit-a", 1)

    expansions = expand_combos_sync([CartLine(product=found), CartLine(product=missing)])

    assert set(expansions) == {found.id}


def test_failed_lookup_does_not_affect_other_lines():
    ok_product = ProductFactory.build(id=1, slug="kit-ok", category="Combos")
    broken_product = ProductFactory.build(id=2, slug="kit-broken", category="Combos")
    regular = ProductFactory.build(id=3, slug="camiseta", category="Roupas")
    combo = ComboFactory.build(id=10, slug="kit-ok")
    member = ProductFactory.build(id=4)

    async def fetch(slug):
        if slug == "kit-broken":
            raise ConnectionError("store unavailable")
        return ComboExpansion(combo=combo, items=(ComboMember(member, 2),))

    lines = [CartLine(product=ok_product), CartLine(product=broken_product), CartLine(product=regular)]
    results = async_to_sync(expand_combo_results)(lines, fetch=fetch)
    expansions = async_to_sync(expand_combos)(lines, fetch=fetch)

    assert [(r.product_id, r.ok) for r in results] == [(1, True), (2, False)]
    assert "store unavailable" in results[1].reason
    assert list(expansions) == [1]


def test_same_combo_on_two_lines_gets_independent_entries():
    first = ProductFactory.build(id=1, slug="kit", category="Combos")
    second = ProductFactory.build(id=2, slug="kit", category="Combos")
    combo = ComboFactory.build(id=10, slug="kit")
    calls = []

    async def fetch(slug):
        calls.append(slug)
        return ComboExpansion(combo=combo, items=())

    expansions = async_to_sync(expand_combos)([CartLine(product=first), CartLine(product=second)], fetch=fetch)

    assert set(expansions) == {1, 2}
    assert calls == ["kit", "kit"]


def test_breakdown_rebuilds_only_when_combo_lines_change():
    kit = ProductFactory.build(id=1, slug="kit", category="Combos")
    other_kit = ProductFactory.build(id=2, slug="kit-2", category="Combos")
    regular = ProductFactory.build(id=3, category="Roupas")
    combo = ComboFactory.build(id=10)
    calls = []

    async def fetch(slug):
        calls.append(slug)
        return ComboExpansion(combo=combo, items=())

    breakdown = ComboBreakdown(fetch=fetch)
    breakdown.refresh([CartLine(product=kit)])
    breakdown.refresh([CartLine(product=kit, quantity=3), CartLine(product=regular)])
    assert calls == ["kit"]

    entries = breakdown.refresh([CartLine(product=other_kit)])
    assert calls == ["kit", "kit-2"]
    # stale entry for the removed line is gone
    assert set(entries) == {2}
    assert breakdown.get(1) is None


def test_combo_discount_uses_location_terms():
    combo = ComboFactory.build(
        discount_percentage_local=Decimal("30.00"),
        discount_percentage_national=Decimal("0.00"),
        discount_amount_national=Decimal("10.00"),
    )

    local = combo_discount(combo, True)
    national = combo_discount(combo, False)

    assert (local.kind, local.label) == ("percentage", "30% OFF")
    assert (national.kind, national.label) == ("amount", "R$ 10,00 OFF")


def test_combo_discount_percentage_wins_over_amount():
    combo = ComboFactory.build(discount_percentage_local=Decimal("12.50"), discount_amount_local=Decimal("15.00"))

    discount = combo_discount(combo, True)

    assert discount.kind == "percentage"
    assert discount.label == "12,5% OFF"


def test_combo_without_terms_has_no_discount():
    assert combo_discount(ComboFactory.build(), True).kind == "none"


def test_original_price_and_savings():
    a = ProductFactory.build(local_price=Decimal("40.00"), national_price=Decimal("50.00"))
    b = ProductFactory.build(local_price=Decimal("30.00"), national_price=Decimal("35.00"))
    combo = ComboFactory.build(final_price=Decimal("90.00"))
    expansion = ComboExpansion(combo=combo, items=(ComboMember(a, 1), ComboMember(b, 2)))

    assert expansion.original_price(True) == Decimal("100.00")
    assert expansion.savings(True) == Decimal("10.00")
    assert expansion.original_price(False) == Decimal("120.00")
    assert expansion.savings(False) == Decimal("30.00")


def test_savings_never_negative_and_zero_without_final_price():
    a = ProductFactory.build(local_price=Decimal("10.00"))

    assert ComboExpansion(ComboFactory.build(final_price=Decimal("50.00")), (ComboMember(a, 1),)).savings(True) == Decimal("0.00")
    assert ComboExpansion(ComboFactory.build(final_price=None), (ComboMember(a, 1),)).savings(True) == Decimal("0.00")
