from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PricingContext:
    """
    Which of a product's two prices applies to the current customer.

    ``has_address`` is False until the customer registers an address; prices
    are still computed in that state but must not be shown.
    """

    is_local: bool = False
    has_address: bool = False

    @property
    def prices_disclosed(self) -> bool:
        return self.has_address

    @classmethod
    def unknown(cls) -> "PricingContext":
        return cls(is_local=False, has_address=False)

    @classmethod
    def for_address(cls, address) -> "PricingContext":
        if address is None:
            return cls.unknown()
        return cls(is_local=address.is_local_area(), has_address=True)

    @classmethod
    def for_user(cls, user) -> "PricingContext":
        from accounts.services import default_address_for

        return cls.for_address(default_address_for(user))
