from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .api_views import ProductViewSet, ComboViewSet

router = DefaultRouter()
router.register(r'products', ProductViewSet, basename='product')
router.register(r'combos', ComboViewSet, basename='combo')

urlpatterns = [
    path('', include(router.urls)),
]
