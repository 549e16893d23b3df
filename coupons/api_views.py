from __future__ import annotations

import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, filters
from rest_framework.permissions import IsAdminUser

from .models import Coupon
from .api_serializers import CouponSerializer

logger = logging.getLogger(__name__)


class CouponViewSet(viewsets.ModelViewSet):
    """Coupon management for staff. Customers redeem through the pricing API."""

    queryset = Coupon.objects.all().order_by('-created_at')
    serializer_class = CouponSerializer
    permission_classes = [IsAdminUser]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['is_active', 'discount_type']
    search_fields = ['code', 'name', 'description']
    ordering_fields = ['created_at', 'updated_at', 'used_count', 'valid_until']
    ordering = ['-created_at']

    def perform_create(self, serializer):
        obj = serializer.save()
        logger.info("Coupon created: %s by %s", obj.code, self.request.user)

    def perform_update(self, serializer):
        obj = serializer.save()
        logger.info("Coupon updated: %s by %s", obj.code, self.request.user)

    def perform_destroy(self, instance):
        logger.info("Coupon deleted: %s by %s", instance.code, self.request.user)
        instance.delete()
