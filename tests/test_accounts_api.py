import pytest

from tests.factories import AddressFactory, UserFactory

URL = "/api/accounts/addresses/"


def _payload(**overrides):
    data = {
        "cep": "38400-500", "street": "Av. Afonso Pena", "number": "1000",
        "city": "Uberlândia", "state": "mg",
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
def test_first_address_becomes_default_and_unlocks_prices(auth_api_client, user):
    r = auth_api_client.post(URL, _payload(), format="json")

    assert r.status_code == 201
    assert r.data["is_default"] is True
    assert r.data["is_local_area"] is True
    assert r.data["state"] == "MG"

    quote = auth_api_client.post("/api/pricing/quote/", {"lines": []}, format="json")
    assert quote.data["needs_address"] is False


@pytest.mark.django_db
def test_invalid_cep_rejected(auth_api_client):
    r = auth_api_client.post(URL, _payload(cep="12-34"), format="json")

    assert r.status_code == 400
    assert "cep" in r.data


@pytest.mark.django_db
def test_customer_sees_only_own_addresses(auth_api_client, user):
    AddressFactory(user=user)
    AddressFactory(user=UserFactory())

    r = auth_api_client.get(URL)

    assert r.status_code == 200
    assert len(r.data) == 1


@pytest.mark.django_db
def test_anonymous_cannot_manage_addresses(api_client):
    assert api_client.get(URL).status_code in (401, 403)
