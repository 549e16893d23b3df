from __future__ import annotations

from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from .models import Address
from .api_serializers import AddressSerializer


class AddressViewSet(viewsets.ModelViewSet):
    """The requesting customer's addresses. The default one drives pricing."""

    serializer_class = AddressSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        return Address.objects.filter(user=self.request.user)

    def perform_create(self, serializer):
        # First address becomes the default
        is_default = serializer.validated_data.get("is_default") or not self.get_queryset().exists()
        serializer.save(user=self.request.user, is_default=is_default)
