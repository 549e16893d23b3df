from __future__ import annotations

from rest_framework import serializers

from pricing.combos import combo_discount
from pricing.resolver import resolve_unit_price
from .models import Product, ProductColor, Combo, ComboItem


class PricedSerializerMixin:
    """Adds the requester's unit price, withheld until an address is known."""

    def _pricing_context(self):
        return self.context.get("pricing_context")

    def get_price(self, obj):
        ctx = self._pricing_context()
        if ctx is None or not ctx.prices_disclosed:
            return None
        return str(resolve_unit_price(obj, ctx.is_local))


class ProductColorSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductColor
        fields = ["id", "color_name", "color_hex", "images", "stock", "is_active"]
        read_only_fields = fields


class ProductSerializer(PricedSerializerMixin, serializers.ModelSerializer):
    colors = ProductColorSerializer(many=True, read_only=True)
    price = serializers.SerializerMethodField()
    is_combo = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id", "name", "slug", "short_description", "description", "category",
            "images", "stock", "is_featured", "is_combo", "price", "colors",
        ]
        read_only_fields = fields


class ComboItemSerializer(PricedSerializerMixin, serializers.ModelSerializer):
    product_id = serializers.IntegerField(source="product.id", read_only=True)
    name = serializers.CharField(source="product.name", read_only=True)
    images = serializers.JSONField(source="product.images", read_only=True)
    price = serializers.SerializerMethodField()

    class Meta:
        model = ComboItem
        fields = ["id", "product_id", "name", "images", "quantity", "price"]
        read_only_fields = fields

    def get_price(self, obj):
        return super().get_price(obj.product)


class ComboSerializer(serializers.ModelSerializer):
    items = ComboItemSerializer(many=True, read_only=True)
    discount = serializers.SerializerMethodField()

    class Meta:
        model = Combo
        fields = ["id", "name", "slug", "description", "final_price", "is_featured", "discount", "items"]
        read_only_fields = fields

    def get_discount(self, obj):
        ctx = self.context.get("pricing_context")
        is_local = bool(ctx and ctx.is_local)
        return combo_discount(obj, is_local).as_dict()
