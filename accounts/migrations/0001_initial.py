from __future__ import annotations

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Address",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("cep", models.CharField(help_text="Brazilian postal code", max_length=9, validators=[django.core.validators.RegexValidator(message="CEP must be entered as 00000-000 or 00000000.", regex="^\\d{5}-?\\d{3}$")])),
                ("street", models.CharField(max_length=200)),
                ("number", models.CharField(max_length=20)),
                ("complement", models.CharField(blank=True, max_length=100)),
                ("neighborhood", models.CharField(blank=True, max_length=100)),
                ("city", models.CharField(max_length=100)),
                ("state", models.CharField(help_text="Two-letter state code", max_length=2)),
                ("is_default", models.BooleanField(default=False, help_text="Address used for pricing and shipping")),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="addresses", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name_plural": "addresses",
                "ordering": ["-is_default", "-created_at"],
                "indexes": [models.Index(fields=["user", "is_default"], name="accounts_address_default_idx")],
            },
        ),
    ]
