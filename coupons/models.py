from __future__ import annotations

from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.core.exceptions import ValidationError

from pricing.resolver import q2


class Coupon(models.Model):
    """Checkout coupon with a time window, a usage cap and a minimum purchase."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"
    DISCOUNT_TYPE_CHOICES = [
        (PERCENTAGE, "Percentage"),
        (FIXED, "Fixed amount"),
    ]

    code = models.CharField(
        max_length=64,
        unique=True,
        help_text="Unique coupon code, stored upper-case"
    )

    name = models.CharField(
        max_length=128,
        blank=True,
        help_text="Internal name for the coupon"
    )

    description = models.TextField(
        blank=True,
        max_length=500,
        help_text="Public description shown to customers"
    )

    discount_type = models.CharField(
        max_length=20,
        choices=DISCOUNT_TYPE_CHOICES,
        default=PERCENTAGE,
    )

    discount_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text="Percentage (0-100) or fixed amount, depending on the type"
    )

    min_purchase_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text="Minimum subtotal required to use this coupon"
    )

    usage_limit = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Maximum number of redemptions (empty means unlimited)"
    )

    used_count = models.PositiveIntegerField(
        default=0,
        help_text="Redemptions recorded at order commit time"
    )

    valid_from = models.DateTimeField(default=timezone.now)
    valid_until = models.DateTimeField(null=True, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=['is_active', 'valid_from', 'valid_until'], name='coupons_coupon_window_idx'),
        ]

    def clean(self):
        super().clean()

        if self.discount_value is None or self.discount_value <= 0:
            raise ValidationError({'discount_value': 'Discount value must be greater than 0.'})
        if self.discount_type == self.PERCENTAGE and self.discount_value > 100:
            raise ValidationError({'discount_value': 'Percentage cannot exceed 100.'})

        if self.valid_from and self.valid_until and self.valid_until <= self.valid_from:
            raise ValidationError({'valid_until': 'Valid until must be after valid from.'})

    def save(self, *args, **kwargs):
        self.code = (self.code or "").strip().upper()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        if self.discount_type == self.PERCENTAGE:
            return f"{self.code} (-{self.discount_value}%)"
        return f"{self.code} (-R$ {self.discount_value})"

    @property
    def is_percentage(self) -> bool:
        return self.discount_type == self.PERCENTAGE

    def remaining_uses(self):
        if not self.usage_limit:
            return None
        return max(0, self.usage_limit - self.used_count)

    def calculate_discount(self, subtotal) -> Decimal:
        """Raw discount for a subtotal; the caller clamps it to the subtotal."""
        subtotal = Decimal(subtotal or 0)
        value = Decimal(self.discount_value or 0)
        if self.discount_type == self.PERCENTAGE:
            discount = q2(subtotal * value / Decimal("100"))
        else:
            discount = value
        return max(Decimal('0.00'), discount)
