from .accounts import UserFactory, AddressFactory
from .catalog import (
    ProductFactory, ComboProductFactory, ProductColorFactory, ProductGiftFactory,
    ComboFactory, ComboItemFactory,
)
from .coupons import CouponFactory

__all__ = [
    "UserFactory",
    "AddressFactory",
    "ProductFactory",
    "ComboProductFactory",
    "ProductColorFactory",
    "ProductGiftFactory",
    "ComboFactory",
    "ComboItemFactory",
    "CouponFactory",
]
