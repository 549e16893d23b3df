from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from .models import Coupon


class CouponSerializer(serializers.ModelSerializer):
    remaining_uses = serializers.SerializerMethodField()

    class Meta:
        model = Coupon
        fields = [
            'id', 'code', 'name', 'description',
            'discount_type', 'discount_value', 'min_purchase_amount',
            'is_active', 'valid_from', 'valid_until',
            'usage_limit', 'used_count', 'remaining_uses',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'used_count', 'remaining_uses', 'created_at', 'updated_at']

    def get_remaining_uses(self, obj):
        return obj.remaining_uses()

    def validate_code(self, value):
        code = (value or "").strip().upper()
        qs = Coupon.objects.filter(code=code)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("A coupon with this code already exists.")
        return code

    def validate(self, attrs):
        # Run the model's own rules on the merged instance state
        instance = Coupon(**{**self._current_values(), **attrs})
        try:
            instance.clean()
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.message_dict)
        return attrs

    def _current_values(self):
        if self.instance is None:
            return {}
        return {f: getattr(self.instance, f) for f in (
            'code', 'discount_type', 'discount_value', 'valid_from', 'valid_until',
        )}


class CouponSummarySerializer(serializers.ModelSerializer):
    """Public view of an applied coupon."""

    class Meta:
        model = Coupon
        fields = ['code', 'name', 'description', 'discount_type', 'discount_value', 'min_purchase_amount']
        read_only_fields = fields
