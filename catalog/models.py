from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator, RegexValidator
from django.db import models
from django.utils import timezone
from django.utils.text import slugify


def default_combo_category() -> str:
    return getattr(settings, "COMBO_CATEGORY", "Combos")


class ProductQuerySet(models.QuerySet):
    def active(self):
        return self.filter(is_active=True)

    def combos(self):
        return self.filter(category=default_combo_category())


class Product(models.Model):
    """
    A sellable product with two list prices: one for customers inside the
    local service area and one for everyone else.

    Combos are represented as products whose category is "Combos"; the bundle
    contents live in the Combo record sharing the same slug.
    """

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)
    description = models.TextField(blank=True)
    short_description = models.CharField(max_length=300, blank=True)
    category = models.CharField(
        max_length=64,
        blank=True,
        db_index=True,
        help_text='Free-text category; "Combos" marks a combo pseudo-product',
    )
    product_code = models.CharField(max_length=64, blank=True)

    local_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Price inside the local service area",
    )
    national_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Price everywhere else",
    )

    stock = models.PositiveIntegerField(default=0)
    images = models.JSONField(default=list, blank=True, help_text="Ordered list of image URLs")

    is_active = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_active", "category"], name="catalog_product_active_idx"),
        ]

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug and self.name:
            self.slug = slugify(self.name)[:220]
        super().save(*args, **kwargs)

    @property
    def is_combo(self) -> bool:
        return (self.category or "") == default_combo_category()


class ProductColor(models.Model):
    """Colour variant of a product; may override the product's stock."""

    hex_validator = RegexValidator(r'^#[0-9A-Fa-f]{6}$', 'Enter a valid hex color')

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="colors")
    color_name = models.CharField(max_length=60)
    color_hex = models.CharField(max_length=7, blank=True, validators=[hex_validator])
    images = models.JSONField(default=list, blank=True)
    stock = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Per-variant stock; empty means no variant-level limit",
    )
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["color_name"]

    def __str__(self) -> str:
        return f"{self.product.name} - {self.color_name}"


class ProductGift(models.Model):
    """A gift product auto-attached to the cart, at no cost, with its parent."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="gift_links")
    gift_product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="gifted_with")
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["product", "gift_product"], name="catalog_unique_product_gift"),
        ]

    def __str__(self) -> str:
        return f"{self.gift_product.name} with {self.product.name}"

    def clean(self):
        super().clean()
        if self.product_id and self.product_id == self.gift_product_id:
            raise ValidationError({"gift_product": "A product cannot be its own gift."})


class Combo(models.Model):
    """
    Bundle definition for a combo pseudo-product. The discount terms are
    descriptive: the cart charges the pseudo-product's own price.
    """

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True, help_text="Same slug as the combo product")
    description = models.TextField(blank=True)

    discount_percentage_local = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00")), MaxValueValidator(Decimal("100.00"))],
    )
    discount_percentage_national = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00")), MaxValueValidator(Decimal("100.00"))],
    )
    discount_amount_local = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    discount_amount_national = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    final_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Advertised bundle price",
    )

    is_active = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class ComboItem(models.Model):
    combo = models.ForeignKey(Combo, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="combo_memberships")
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.quantity}x {self.product.name} in {self.combo.name}"
