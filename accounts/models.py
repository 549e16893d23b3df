from __future__ import annotations

from django.conf import settings
from django.core.validators import RegexValidator
from django.db import models
from django.utils import timezone


class Address(models.Model):
    """
    Customer address. The default address decides whether the customer sees
    local or national prices.
    """

    cep_validator = RegexValidator(
        regex=r'^\d{5}-?\d{3}$',
        message="CEP must be entered as 00000-000 or 00000000.",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="addresses",
    )
    cep = models.CharField(
        max_length=9,
        validators=[cep_validator],
        help_text="Brazilian postal code",
    )
    street = models.CharField(max_length=200)
    number = models.CharField(max_length=20)
    complement = models.CharField(max_length=100, blank=True)
    neighborhood = models.CharField(max_length=100, blank=True)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=2, help_text="Two-letter state code")
    is_default = models.BooleanField(
        default=False,
        help_text="Address used for pricing and shipping",
    )

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-is_default", "-created_at"]
        verbose_name_plural = "addresses"
        indexes = [
            models.Index(fields=["user", "is_default"], name="accounts_address_default_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.street}, {self.number} - {self.city}/{self.state} ({self.cep})"

    @property
    def cep_digits(self) -> str:
        return "".join(ch for ch in (self.cep or "") if ch.isdigit())

    def is_local_area(self) -> bool:
        """Whether this address falls inside a configured local service area."""
        return cep_in_local_area(self.cep)

    def save(self, *args, **kwargs):
        # Only one default per user
        if self.is_default and self.user_id:
            Address.objects.filter(user_id=self.user_id, is_default=True).exclude(pk=self.pk).update(is_default=False)
        super().save(*args, **kwargs)


def cep_in_local_area(cep: str | None, ranges=None) -> bool:
    digits = "".join(ch for ch in (cep or "") if ch.isdigit())
    if not digits:
        return False
    value = int(digits)
    if ranges is None:
        ranges = getattr(settings, "LOCAL_CEP_RANGES", [])
    return any(low <= value <= high for low, high in ranges)
