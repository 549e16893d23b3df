from django.urls import path

from .api_views import CartAddView, CartUpdateView, ClearCheckoutView, CouponView, QuoteView

urlpatterns = [
    path("quote/", QuoteView.as_view(), name="quote"),
    path("coupon/", CouponView.as_view(), name="coupon"),
    path("clear/", ClearCheckoutView.as_view(), name="clear"),
    path("cart/add/", CartAddView.as_view(), name="cart-add"),
    path("cart/update/", CartUpdateView.as_view(), name="cart-update"),
]
