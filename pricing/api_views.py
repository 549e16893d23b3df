from __future__ import annotations

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.authentication import SessionAuthentication
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication

from catalog.models import Product, ProductColor
from catalog.services import gifts_for_product
from coupons.api_serializers import CouponSummarySerializer
from coupons.services import CouponValidationError, validate_coupon
from . import session as checkout
from .cart import InsufficientStockError, add_line, attach_gifts, item_count, update_quantity
from .combos import expand_combos_sync
from .context import PricingContext
from .resolver import line_amount, resolve_unit_price
from .serializers import (
    ApplyCouponSerializer, CartChangeSerializer, QuoteSerializer,
    build_cart_lines, serialize_line, shipping_from,
)
from .totals import compute_totals, present_totals

logger = logging.getLogger(__name__)


class CsrfExemptSessionAuthentication(SessionAuthentication):
    """Session auth for the storefront client; the checkout session carries the coupon."""

    def enforce_csrf(self, request):
        return


class PricingAPIView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = [JWTAuthentication, CsrfExemptSessionAuthentication]

    def pricing_context(self, request) -> PricingContext:
        return PricingContext.for_user(request.user)


def _line_payload(line, context: PricingContext) -> dict:
    data = serialize_line(line)
    data["name"] = line.product.name
    if context.prices_disclosed:
        data["unit_price"] = "0.00" if line.is_gift else str(resolve_unit_price(line.product, context.is_local))
        data["amount"] = str(line_amount(line, context.is_local))
    else:
        data["unit_price"] = data["amount"] = None
    return data


def quote_payload(lines, context, coupon=None, shipping=None, expansions=None, unavailable=()) -> dict:
    """Everything the cart page shows for one recompute."""
    totals = compute_totals(lines, context, applied_coupon=coupon, shipping=shipping)
    presented = present_totals(totals, context)
    return {
        "currency": getattr(settings, "STORE_CURRENCY", "BRL"),
        "is_local": context.is_local,
        "needs_address": presented.pop("needs_address"),
        "totals": presented,
        "lines": [_line_payload(line, context) for line in lines],
        "item_count": item_count(lines),
        "combos": {
            str(product_id): expansion.as_dict(context.is_local)
            for product_id, expansion in (expansions or {}).items()
        },
        "coupon": CouponSummarySerializer(coupon).data if coupon is not None else None,
        "unavailable_product_ids": list(unavailable),
    }


class QuoteView(PricingAPIView):
    """
    POST /api/pricing/quote/

    Prices a cart snapshot for the requesting customer, with the checkout's
    applied coupon and an optional shipping selection.
    """

    def post(self, request):
        serializer = QuoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        lines, unavailable = build_cart_lines(serializer.validated_data["lines"])
        context = self.pricing_context(request)
        shipping = shipping_from(serializer.validated_data.get("shipping"))
        coupon = checkout.applied_coupon(request.session)
        expansions = expand_combos_sync(lines)

        return Response(quote_payload(lines, context, coupon, shipping, expansions, unavailable))


class CouponView(PricingAPIView):
    """
    POST   /api/pricing/coupon/  validate a code against the cart and apply it
    DELETE /api/pricing/coupon/  remove the applied coupon
    """

    def post(self, request):
        serializer = ApplyCouponSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        lines, unavailable = build_cart_lines(serializer.validated_data["lines"])
        context = self.pricing_context(request)
        try:
            coupon = validate_coupon(serializer.validated_data["code"], lines, context)
        except CouponValidationError as exc:
            return Response(exc.as_dict(), status=status.HTTP_400_BAD_REQUEST)

        checkout.apply_coupon(request.session, coupon)
        return Response(quote_payload(lines, context, coupon, unavailable=unavailable))

    def delete(self, request):
        checkout.clear_coupon(request.session)
        return Response({"coupon": None})


class ClearCheckoutView(PricingAPIView):
    """POST /api/pricing/clear/ - the cart was emptied."""

    def post(self, request):
        checkout.clear_checkout(request.session)
        return Response({"status": "ok"})


def _sync_gifts(lines, product):
    """Gift lines follow the total quantity of the product across its variants."""
    quantity = sum(line.quantity for line in lines if not line.is_gift and line.product_id == product.pk)
    if quantity <= 0:
        return lines
    return attach_gifts(lines, product, gifts_for_product(product), quantity)


class CartAddView(PricingAPIView):
    """
    POST /api/pricing/cart/add/

    Adds a product to a cart snapshot and returns the new lines, with the
    product's gifts attached.
    """

    def post(self, request):
        serializer = CartChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        product = Product.objects.active().filter(pk=data["product_id"]).first()
        if product is None:
            return Response({"detail": "Produto não encontrado."}, status=status.HTTP_404_NOT_FOUND)
        color = None
        if data.get("color_id"):
            color = ProductColor.objects.filter(pk=data["color_id"], product=product, is_active=True).first()
            if color is None:
                return Response({"detail": "Cor não encontrada."}, status=status.HTTP_404_NOT_FOUND)

        quantity = max(1, data["quantity"])
        lines, _ = build_cart_lines(data["lines"])
        try:
            lines = add_line(lines, product, color=color, quantity=quantity)
        except InsufficientStockError as exc:
            return Response({"detail": str(exc), "available": exc.available}, status=status.HTTP_409_CONFLICT)

        lines = _sync_gifts(lines, product)
        return Response({"lines": [serialize_line(line) for line in lines], "item_count": item_count(lines)})


class CartUpdateView(PricingAPIView):
    """POST /api/pricing/cart/update/ - set a line's quantity; 0 removes it."""

    def post(self, request):
        serializer = CartChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        lines, _ = build_cart_lines(data["lines"])
        try:
            lines = update_quantity(lines, data["product_id"], data["quantity"], color_id=data.get("color_id"))
        except InsufficientStockError as exc:
            return Response({"detail": str(exc), "available": exc.available}, status=status.HTTP_409_CONFLICT)

        product = Product.objects.active().filter(pk=data["product_id"]).first()
        if product is not None:
            lines = _sync_gifts(lines, product)
        return Response({"lines": [serialize_line(line) for line in lines], "item_count": item_count(lines)})
