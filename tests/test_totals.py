from decimal import Decimal

import pytest

from coupons.models import Coupon
from coupons.services import CouponValidationError, validate_coupon
from pricing.cart import CartLine
from pricing.context import PricingContext
from pricing.totals import CartTotals, ShippingSelection, compute_subtotal, compute_totals, present_totals
from tests.factories import ComboProductFactory, CouponFactory, ProductFactory


def _totals(subtotal, discount, shipping, total):
    return CartTotals(Decimal(subtotal), Decimal(discount), Decimal(shipping), Decimal(total))


@pytest.mark.django_db
def test_scenario_a_plain_cart(cart_a, local_ctx):
    assert compute_totals(cart_a, local_ctx) == _totals("200.00", "0.00", "0.00", "200.00")


@pytest.mark.django_db
def test_scenario_b_percentage_coupon(cart_a, local_ctx):
    coupon = CouponFactory(code="TEN", discount_type=Coupon.PERCENTAGE, discount_value=Decimal("10"))

    totals = compute_totals(cart_a, local_ctx, applied_coupon=coupon)

    assert totals == _totals("200.00", "20.00", "0.00", "180.00")


@pytest.mark.django_db
def test_scenario_c_rejected_coupon_leaves_total_unchanged(cart_a, local_ctx):
    CouponFactory(code="MIN500", min_purchase_amount=Decimal("500.00"))
    applied = None

    with pytest.raises(CouponValidationError) as excinfo:
        applied = validate_coupon("MIN500", cart_a, local_ctx)

    assert excinfo.value.reason == "below_minimum"
    assert compute_totals(cart_a, local_ctx, applied_coupon=applied).total == Decimal("200.00")


@pytest.mark.django_db
def test_scenario_d_gift_line_excluded(product_a, product_b, local_ctx):
    lines = [
        CartLine(product=product_a, quantity=1),
        CartLine(product=product_b, quantity=1, is_gift=True, parent_product_id=product_a.id),
    ]

    totals = compute_totals(lines, local_ctx)

    assert totals.subtotal == Decimal("100.00")
    assert totals.total == Decimal("100.00")


@pytest.mark.django_db
def test_scenario_e_shipping_added(cart_a, local_ctx):
    totals = compute_totals(cart_a, local_ctx, shipping=ShippingSelection(price=Decimal("25")))

    assert totals == _totals("200.00", "0.00", "25.00", "225.00")


@pytest.mark.django_db
def test_national_context_uses_national_price(cart_a, national_ctx):
    assert compute_totals(cart_a, national_ctx).subtotal == Decimal("260.00")


@pytest.mark.django_db
def test_fixed_coupon_is_capped_at_subtotal(product_b, local_ctx):
    coupon = CouponFactory(discount_type=Coupon.FIXED, discount_value=Decimal("80.00"))

    totals = compute_totals([CartLine(product=product_b)], local_ctx, applied_coupon=coupon)

    assert totals.discount == Decimal("50.00")
    assert totals.total == Decimal("0.00")


@pytest.mark.django_db
def test_total_never_drops_below_shipping(product_b, local_ctx):
    coupon = CouponFactory(discount_type=Coupon.FIXED, discount_value=Decimal("500.00"))
    shipping = ShippingSelection(price=Decimal("18.50"))

    totals = compute_totals([CartLine(product=product_b)], local_ctx, applied_coupon=coupon, shipping=shipping)

    assert totals.total == totals.shipping_cost == Decimal("18.50")


@pytest.mark.django_db
def test_combo_line_priced_at_its_own_price(local_ctx):
    combo_product = ComboProductFactory(local_price=Decimal("150.00"))

    assert compute_totals([CartLine(product=combo_product, quantity=2)], local_ctx).subtotal == Decimal("300.00")


def test_malformed_prices_count_as_zero(local_ctx):
    broken = ProductFactory.build(local_price=None)
    shipping = ShippingSelection(price="not-a-number")

    totals = compute_totals([CartLine(product=broken, quantity=3)], local_ctx, shipping=shipping)

    assert totals == _totals("0.00", "0.00", "0.00", "0.00")


def test_compute_totals_is_idempotent_and_pure(local_ctx):
    product = ProductFactory.build(id=1, local_price=Decimal("33.33"))
    coupon = CouponFactory.build(discount_type=Coupon.PERCENTAGE, discount_value=Decimal("15"))
    lines = [CartLine(product=product, quantity=3)]
    snapshot = list(lines)
    shipping = ShippingSelection(price=Decimal("9.90"))

    first = compute_totals(lines, local_ctx, coupon, shipping)
    second = compute_totals(lines, local_ctx, coupon, shipping)

    assert first == second
    assert lines == snapshot


@pytest.mark.parametrize("discount_type, value, prices, quantities", [
    (Coupon.PERCENTAGE, "10", ["19.99", "5.01"], [3, 1]),
    (Coupon.PERCENTAGE, "33.33", ["0.10"], [1]),
    (Coupon.PERCENTAGE, "100", ["250.00", "49.90"], [1, 2]),
    (Coupon.FIXED, "15", ["9.99"], [1]),
    (Coupon.FIXED, "15", ["9.99", "12.00"], [2, 1]),
    (Coupon.FIXED, "0.50", ["0.00"], [4]),
])
@pytest.mark.parametrize("shipping", ["0", "12.34"])
def test_total_properties_hold(discount_type, value, prices, quantities, shipping, local_ctx):
    lines = [
        CartLine(product=ProductFactory.build(id=i + 1, local_price=Decimal(price)), quantity=qty)
        for i, (price, qty) in enumerate(zip(prices, quantities))
    ]
    # a gift line never moves the totals
    lines.append(CartLine(product=ProductFactory.build(id=99, local_price=Decimal("500")), is_gift=True, parent_product_id=1))
    coupon = CouponFactory.build(discount_type=discount_type, discount_value=Decimal(value))

    totals = compute_totals(lines, local_ctx, coupon, ShippingSelection(price=Decimal(shipping)))
    subtotal = compute_subtotal(lines[:-1], True)

    assert totals.subtotal == subtotal
    assert Decimal("0") <= totals.discount <= totals.subtotal
    assert totals.total == max(Decimal("0"), totals.subtotal - totals.discount) + totals.shipping_cost
    assert totals.total >= totals.shipping_cost
    if discount_type == Coupon.FIXED:
        assert totals.discount == min(Decimal(value), subtotal)
    else:
        expected = (subtotal * Decimal(value) / 100).quantize(Decimal("0.01"))
        assert abs(totals.discount - expected) <= Decimal("0.01")


def test_present_totals_discloses_with_address(local_ctx):
    totals = _totals("200.00", "20.00", "0.00", "180.00")

    shown = present_totals(totals, local_ctx)

    assert shown == {
        "subtotal": "200.00", "discount": "20.00", "shipping_cost": "0.00",
        "total": "180.00", "needs_address": False,
    }


def test_present_totals_withholds_without_address():
    totals = _totals("200.00", "0.00", "0.00", "200.00")

    shown = present_totals(totals, PricingContext.unknown())

    assert shown["needs_address"] is True
    assert {k: v for k, v in shown.items() if k != "needs_address"} == {
        "subtotal": None, "discount": None, "shipping_cost": None, "total": None,
    }
