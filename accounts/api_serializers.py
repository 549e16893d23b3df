from __future__ import annotations

from rest_framework import serializers

from .models import Address


class AddressSerializer(serializers.ModelSerializer):
    is_local_area = serializers.SerializerMethodField()

    class Meta:
        model = Address
        fields = [
            "id", "cep", "street", "number", "complement", "neighborhood",
            "city", "state", "is_default", "is_local_area", "created_at",
        ]
        read_only_fields = ["id", "is_local_area", "created_at"]

    def get_is_local_area(self, obj) -> bool:
        return obj.is_local_area()

    def validate_state(self, value):
        return (value or "").strip().upper()
