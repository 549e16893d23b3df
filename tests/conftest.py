import pytest
from decimal import Decimal
from rest_framework.test import APIClient

from pricing.cart import CartLine
from pricing.context import PricingContext
from tests.factories import AddressFactory, ProductFactory, UserFactory


@pytest.fixture
def api_client() -> APIClient:
    """Unauthenticated DRF APIClient.

    Use with endpoints that allow anonymous access, or combine with
    force_login/force_authenticate for authenticated flows.
    """
    return APIClient(enforce_csrf_checks=False)


@pytest.fixture
def user(db):
    """A persisted user instance without any address."""
    return UserFactory(username="testuser")


@pytest.fixture
def auth_api_client(api_client: APIClient, user):
    """APIClient authenticated as the provided user via force_authenticate."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def local_user(db):
    """A user whose default address is inside the local area."""
    address = AddressFactory(user__username="localuser")
    return address.user


@pytest.fixture
def local_client(api_client: APIClient, local_user):
    api_client.force_authenticate(user=local_user)
    return api_client


@pytest.fixture
def local_ctx() -> PricingContext:
    return PricingContext(is_local=True, has_address=True)


@pytest.fixture
def national_ctx() -> PricingContext:
    return PricingContext(is_local=False, has_address=True)


@pytest.fixture
def product_a(db):
    return ProductFactory(name="Product A", local_price=Decimal("100.00"), national_price=Decimal("130.00"))


@pytest.fixture
def product_b(db):
    return ProductFactory(name="Product B", local_price=Decimal("50.00"), national_price=Decimal("65.00"))


@pytest.fixture
def cart_a(product_a):
    """Product A at 100 (local), quantity 2."""
    return [CartLine(product=product_a, quantity=2)]
