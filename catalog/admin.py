from __future__ import annotations

from django.contrib import admin

from .models import Product, ProductColor, ProductGift, Combo, ComboItem


class ProductColorInline(admin.TabularInline):
    model = ProductColor
    extra = 0
    fields = ("color_name", "color_hex", "stock", "is_active")


class ProductGiftInline(admin.TabularInline):
    model = ProductGift
    fk_name = "product"
    extra = 0
    raw_id_fields = ("gift_product",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "local_price", "national_price", "stock", "is_active", "is_featured")
    list_filter = ("is_active", "is_featured", "category")
    search_fields = ("name", "slug", "product_code")
    prepopulated_fields = {"slug": ("name",)}
    readonly_fields = ("created_at", "updated_at")
    inlines = [ProductColorInline, ProductGiftInline]

    fieldsets = (
        (None, {"fields": ("name", "slug", "category", "product_code", "is_active", "is_featured")}),
        ("Pricing", {"fields": ("local_price", "national_price")}),
        ("Content", {"fields": ("short_description", "description", "images", "stock")}),
        ("Meta", {"fields": ("created_at", "updated_at")}),
    )


class ComboItemInline(admin.TabularInline):
    model = ComboItem
    extra = 1
    raw_id_fields = ("product",)


@admin.register(Combo)
class ComboAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "discount_percentage_local", "discount_percentage_national", "final_price", "is_active")
    list_filter = ("is_active", "is_featured")
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}
    inlines = [ComboItemInline]

    fieldsets = (
        (None, {"fields": ("name", "slug", "description", "is_active", "is_featured")}),
        ("Local terms", {"fields": ("discount_percentage_local", "discount_amount_local")}),
        ("National terms", {"fields": ("discount_percentage_national", "discount_amount_national")}),
        ("Display", {"fields": ("final_price",)}),
    )
