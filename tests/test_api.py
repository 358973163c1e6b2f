"""Integration tests for the HTTP endpoints."""

import pytest
from fastapi.testclient import TestClient

from delivery_pricing.api import create_app
from delivery_pricing.matching import ZoneMatcher
from delivery_pricing.persistence import DatabaseConnectionError
from delivery_pricing.quoting import QuoteService


@pytest.fixture()
def client(quote_service):
    return TestClient(create_app(quote_service, default_owner_id="U-TEST"))


@pytest.fixture()
def anonymous_client(quote_service):
    return TestClient(create_app(quote_service))


class TestEstimateEndpoint:
    def test_estimate_match(self, client):
        response = client.post("/api/v1/delivery/estimate", json={"addressId": "ADDR-1"})

        assert response.status_code == 200
        assert response.json() == {
            "zoneId": 1,
            "zoneName": "Zone 1",
            "matchedKeyword": "Wuse Zone 2",
            "matchedBy": "exact",
            "confidence": 1.0,
            "price": 1500,
        }

    def test_estimate_fuzzy(self, client):
        response = client.post("/api/v1/delivery/estimate", json={"addressId": "ADDR-5"})

        assert response.status_code == 200
        assert response.json()["matchedBy"] == "fuzzy"

    def test_estimate_no_zone(self, client):
        response = client.post("/api/v1/delivery/estimate", json={"addressId": "ADDR-6"})

        assert response.status_code == 422
        data = response.json()
        assert data["matchedBy"] == "none"
        assert data["message"] == "No matching delivery zone found for the provided address"
        assert len(data["suggestions"]) == 3

    def test_estimate_unknown_address(self, client):
        response = client.post("/api/v1/delivery/estimate", json={"addressId": "ADDR-404"})

        assert response.status_code == 404
        assert response.json()["error"] == "address_not_found"

    @pytest.mark.parametrize("body", [{}, {"addressId": ""}, {"addressId": "   "}])
    def test_estimate_requires_address_id(self, client, body):
        response = client.post("/api/v1/delivery/estimate", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_header_owner_takes_precedence(self, client):
        response = client.post(
            "/api/v1/delivery/estimate",
            json={"addressId": "ADDR-OTHER", "userId": "U-TEST"},
            headers={"X-User-Id": "U-OTHER"},
        )
        assert response.status_code == 200

    def test_body_owner_over_default(self, client):
        response = client.post(
            "/api/v1/delivery/estimate", json={"addressId": "ADDR-OTHER", "userId": "U-OTHER"}
        )
        assert response.status_code == 200

    def test_foreign_address_is_not_found(self, client):
        response = client.post("/api/v1/delivery/estimate", json={"addressId": "ADDR-OTHER"})
        assert response.status_code == 404

    def test_no_owner_is_unauthenticated(self, anonymous_client):
        response = anonymous_client.post("/api/v1/delivery/estimate", json={"addressId": "ADDR-1"})

        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"

    def test_malformed_body(self, client):
        response = client.post(
            "/api/v1/delivery/estimate",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"


class TestConfirmEndpoint:
    def test_confirm_success(self, client):
        estimate = client.post("/api/v1/delivery/estimate", json={"addressId": "ADDR-2"}).json()
        response = client.post(
            "/api/v1/orders/confirm",
            json={"addressId": "ADDR-2", "clientPrice": estimate["price"]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Order delivery price confirmed"
        assert data["addressId"] == "ADDR-2"
        assert data["confirmedPrice"] == 2500
        assert data["zoneId"] == estimate["zoneId"]
        assert data["matchedBy"] == estimate["matchedBy"]

    def test_confirm_price_mismatch(self, client):
        response = client.post("/api/v1/orders/confirm", json={"addressId": "ADDR-2", "clientPrice": 2501})

        assert response.status_code == 409
        assert response.json() == {
            "error": "price_mismatch",
            "message": "Client price does not match computed delivery price",
        }

    def test_confirm_no_zone(self, client):
        response = client.post("/api/v1/orders/confirm", json={"addressId": "ADDR-6", "clientPrice": 1500})

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "no_delivery_zone"
        assert len(data["suggestions"]) == 3

    def test_confirm_unknown_address(self, client):
        response = client.post("/api/v1/orders/confirm", json={"addressId": "ADDR-404", "clientPrice": 1500})
        assert response.status_code == 404

    @pytest.mark.parametrize(
        "body",
        [
            {"addressId": "ADDR-1", "clientPrice": 0},
            {"addressId": "ADDR-1", "clientPrice": -5},
            {"addressId": "ADDR-1"},
            {"clientPrice": 1500},
            {"addressId": " ", "clientPrice": 1500},
        ],
    )
    def test_confirm_validation(self, client, body):
        response = client.post("/api/v1/orders/confirm", json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.parametrize("price", ["cheap", True, "1500", 1500.0, 1500.5, [1500]])
    def test_confirm_rejects_non_integer_price(self, client, price):
        response = client.post(
            "/api/v1/orders/confirm", json={"addressId": "ADDR-1", "clientPrice": price}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"


class TestStoreFailures:
    def test_store_failure_is_503(self, abuja_catalog):
        class BrokenLookup:
            def get_by_id(self, owner_id, address_id):
                raise DatabaseConnectionError("database is down")

            def list_by_owner(self, owner_id):
                return []

        service = QuoteService(ZoneMatcher(abuja_catalog), BrokenLookup())
        client = TestClient(create_app(service, default_owner_id="U-TEST"))

        response = client.post("/api/v1/delivery/estimate", json={"addressId": "ADDR-1"})

        assert response.status_code == 503
        assert response.json()["error"] == "address_store_unavailable"


class TestHealth:
    def test_healthz(self, client):
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "zones": 4}
