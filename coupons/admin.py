from __future__ import annotations
from django.contrib import admin
from .models import Coupon


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    list_display = ("code", "discount_type", "discount_value", "is_active", "valid_from", "valid_until", "used_count", "usage_limit", "created_at")
    list_filter = ("is_active", "discount_type", "valid_from", "valid_until")
    search_fields = ("code", "name")
    readonly_fields = ("used_count", "created_at", "updated_at")

    fieldsets = (
        (None, {"fields": ("code", "name", "description", "is_active")}),
        ("Discount", {"fields": ("discount_type", "discount_value", "min_purchase_amount")}),
        ("Validity", {"fields": ("valid_from", "valid_until", "usage_limit")}),
        ("Usage", {"fields": ("used_count",)}),
        ("Meta", {"fields": ("created_at", "updated_at")}),
    )
