from __future__ import annotations

from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Product",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("slug", models.SlugField(max_length=220, unique=True)),
                ("description", models.TextField(blank=True)),
                ("short_description", models.CharField(blank=True, max_length=300)),
                ("category", models.CharField(blank=True, db_index=True, help_text='Free-text category; "Combos" marks a combo pseudo-product', max_length=64)),
                ("product_code", models.CharField(blank=True, max_length=64)),
                ("local_price", models.DecimalField(blank=True, decimal_places=2, help_text="Price inside the local service area", max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal("0.00"))])),
                ("national_price", models.DecimalField(blank=True, decimal_places=2, help_text="Price everywhere else", max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal("0.00"))])),
                ("stock", models.PositiveIntegerField(default=0)),
                ("images", models.JSONField(blank=True, default=list, help_text="Ordered list of image URLs")),
                ("is_active", models.BooleanField(default=True)),
                ("is_featured", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [models.Index(fields=["is_active", "category"], name="catalog_product_active_idx")],
            },
        ),
        migrations.CreateModel(
            name="Combo",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("slug", models.SlugField(help_text="Same slug as the combo product", max_length=220, unique=True)),
                ("description", models.TextField(blank=True)),
                ("discount_percentage_local", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal("0.00")), django.core.validators.MaxValueValidator(Decimal("100.00"))])),
                ("discount_percentage_national", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal("0.00")), django.core.validators.MaxValueValidator(Decimal("100.00"))])),
                ("discount_amount_local", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0.00"))])),
                ("discount_amount_national", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal("0.00"))])),
                ("final_price", models.DecimalField(blank=True, decimal_places=2, help_text="Advertised bundle price", max_digits=10, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("is_featured", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="ProductColor",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("color_name", models.CharField(max_length=60)),
                ("color_hex", models.CharField(blank=True, max_length=7, validators=[django.core.validators.RegexValidator("^#[0-9A-Fa-f]{6}$", "Enter a valid hex color")])),
                ("images", models.JSONField(blank=True, default=list)),
                ("stock", models.PositiveIntegerField(blank=True, help_text="Per-variant stock; empty means no variant-level limit", null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("product", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="colors", to="catalog.product")),
            ],
            options={
                "ordering": ["color_name"],
            },
        ),
        migrations.CreateModel(
            name="ProductGift",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("gift_product", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="gifted_with", to="catalog.product")),
                ("product", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="gift_links", to="catalog.product")),
            ],
            options={
                "constraints": [models.UniqueConstraint(fields=("product", "gift_product"), name="catalog_unique_product_gift")],
            },
        ),
        migrations.CreateModel(
            name="ComboItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("combo", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="catalog.combo")),
                ("product", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="combo_memberships", to="catalog.product")),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]
