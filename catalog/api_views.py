from __future__ import annotations

from django.db.models import Prefetch
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, filters
from rest_framework.permissions import AllowAny

from pricing.context import PricingContext
from .models import Product, ProductColor, Combo, ComboItem
from .api_serializers import ProductSerializer, ComboSerializer


class PricingContextMixin:
    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["pricing_context"] = PricingContext.for_user(getattr(self.request, "user", None))
        return context


class ProductViewSet(PricingContextMixin, viewsets.ReadOnlyModelViewSet):
    """Active catalog products, looked up by slug."""

    serializer_class = ProductSerializer
    permission_classes = [AllowAny]
    lookup_field = "slug"
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ["category", "is_featured"]
    search_fields = ["name", "short_description", "description"]
    ordering_fields = ["name", "created_at"]
    ordering = ["name"]

    def get_queryset(self):
        return Product.objects.active().prefetch_related(
            Prefetch("colors", queryset=ProductColor.objects.filter(is_active=True))
        )


class ComboViewSet(PricingContextMixin, viewsets.ReadOnlyModelViewSet):
    """Active combos with their member products."""

    serializer_class = ComboSerializer
    permission_classes = [AllowAny]
    lookup_field = "slug"
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ["is_featured"]
    ordering = ["name"]

    def get_queryset(self):
        return Combo.objects.filter(is_active=True).prefetch_related(
            Prefetch("items", queryset=ComboItem.objects.select_related("product"))
        )
