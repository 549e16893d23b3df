# store_backend/urls.py
from __future__ import annotations

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView, SpectacularRedocView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

urlpatterns = [
    path("admin/", admin.site.urls),

    # Auth (session login for the browsable API, JWT for the storefront client)
    path("api/auth/", include("rest_framework.urls")),
    path("api/auth/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),

    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),

    path("api/accounts/", include(("accounts.api_urls", "accounts"), namespace="accounts")),
    path("api/catalog/", include(("catalog.api_urls", "catalog"), namespace="catalog")),
    path("api/", include(("coupons.api_urls", "coupons"), namespace="coupons")),
    path("api/pricing/", include(("pricing.api_urls", "pricing"), namespace="pricing")),
]
