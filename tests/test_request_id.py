import logging

import pytest

from core.middleware.request_id import RequestIDFilter, get_request_id


@pytest.mark.django_db
def test_response_carries_generated_request_id(api_client):
    r = api_client.get("/api/catalog/products/")

    assert len(r["X-Request-ID"]) == 32


@pytest.mark.django_db
def test_sane_upstream_request_id_is_reused(api_client):
    r = api_client.get("/api/catalog/products/", HTTP_X_REQUEST_ID="edge-abc123.42")

    assert r["X-Request-ID"] == "edge-abc123.42"


@pytest.mark.django_db
def test_garbage_upstream_request_id_is_replaced(api_client):
    r = api_client.get("/api/catalog/products/", HTTP_X_REQUEST_ID="<script>")

    assert r["X-Request-ID"] != "<script>"


@pytest.mark.django_db
def test_request_id_cleared_after_response(api_client):
    api_client.get("/api/catalog/products/")

    assert get_request_id() is None


def test_filter_stamps_placeholder_outside_requests():
    record = logging.LogRecord("pricing", logging.INFO, __file__, 1, "msg", None, None)

    assert RequestIDFilter().filter(record) is True
    assert record.request_id == "no-request-id"
