from __future__ import annotations

from decimal import Decimal

import django.core.validators
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Coupon",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.CharField(help_text="Unique coupon code, stored upper-case", max_length=64, unique=True)),
                ("name", models.CharField(blank=True, help_text="Internal name for the coupon", max_length=128)),
                ("description", models.TextField(blank=True, help_text="Public description shown to customers", max_length=500)),
                ("discount_type", models.CharField(choices=[("percentage", "Percentage"), ("fixed", "Fixed amount")], default="percentage", max_length=20)),
                ("discount_value", models.DecimalField(decimal_places=2, help_text="Percentage (0-100) or fixed amount, depending on the type", max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0.00"))])),
                ("min_purchase_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), help_text="Minimum subtotal required to use this coupon", max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0.00"))])),
                ("usage_limit", models.PositiveIntegerField(blank=True, help_text="Maximum number of redemptions (empty means unlimited)", null=True)),
                ("used_count", models.PositiveIntegerField(default=0, help_text="Redemptions recorded at order commit time")),
                ("valid_from", models.DateTimeField(default=django.utils.timezone.now)),
                ("valid_until", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["is_active", "valid_from", "valid_until"], name="coupons_coupon_window_idx")],
            },
        ),
    ]
