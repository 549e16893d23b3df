from rest_framework.routers import SimpleRouter

from .api_views import CouponViewSet

# Mounted at /api/, so no browsable root view here
router = SimpleRouter()
router.register(r'coupons', CouponViewSet, basename='coupon')

urlpatterns = router.urls
