"""
API tests for order execution endpoints.

Tests cover:
- /buy, /sell and /orders success paths
- Rejections mapped to status codes and reason codes
- Request validation (422)
"""

import pytest
from fastapi.testclient import TestClient

from tests.conftest import STARTING_CASH, DeterministicMarketProvider


@pytest.fixture
def logged_in(client: TestClient, auth_headers) -> dict[str, str]:
    client.post("/login", headers=auth_headers)
    return auth_headers


# =============================================================================
# BUY / SELL TESTS
# =============================================================================


class TestBuySellAPI:
    """Tests for POST /buy and POST /sell."""

    def test_worked_example(
        self,
        client: TestClient,
        logged_in,
        deterministic_provider: DeterministicMarketProvider,
    ):
        """
        GIVEN cash = 100000
        WHEN I buy 10 ACME at $150, then at $50, then sell 10 at $60
        THEN the first buy is a 400 INSUFFICIENT_FUNDS
        AND the account ends with cash = 110000 and no holdings
        """
        deterministic_provider.set_price("ACME", 150.00)
        response = client.post("/buy", json={"symbol": "ACME", "quantity": 10}, headers=logged_in)
        assert response.status_code == 400
        assert response.json()["error"] == "INSUFFICIENT_FUNDS"

        deterministic_provider.set_price("ACME", 50.00)
        response = client.post("/buy", json={"symbol": "ACME", "quantity": 10}, headers=logged_in)
        assert response.status_code == 201
        assert response.json()["price"] == 5000

        deterministic_provider.set_price("ACME", 60.00)
        response = client.post("/sell", json={"symbol": "ACME", "quantity": 10}, headers=logged_in)
        assert response.status_code == 201
        assert response.json()["side"] == "SELL"

        account = client.get("/account", headers=logged_in).json()
        assert account["cash"] == 110_000
        assert client.get("/portfolio", headers=logged_in).json()["holdings"] == []

    def test_buy_response_is_the_transaction(self, client: TestClient, logged_in):
        response = client.post("/buy", json={"symbol": " acme ", "quantity": 3}, headers=logged_in)

        assert response.status_code == 201
        data = response.json()
        assert data["symbol"] == "ACME"
        assert data["side"] == "BUY"
        assert data["quantity"] == 3
        assert data["price"] == 5000
        assert data["account_id"] == "trader@example.com"
        assert data["transaction_id"]
        assert data["timestamp"]

    def test_sell_without_shares_returns_400(self, client: TestClient, logged_in):
        response = client.post("/sell", json={"symbol": "ACME", "quantity": 1}, headers=logged_in)

        assert response.status_code == 400
        assert response.json()["error"] == "INSUFFICIENT_SHARES"

    def test_unknown_symbol_returns_502(self, client: TestClient, logged_in):
        response = client.post("/buy", json={"symbol": "ZZZZ", "quantity": 1}, headers=logged_in)

        assert response.status_code == 502
        assert response.json()["error"] == "PRICE_UNAVAILABLE"

    def test_buy_without_account_returns_404(self, client: TestClient, auth_headers):
        response = client.post("/buy", json={"symbol": "ACME", "quantity": 1}, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "ACCOUNT_NOT_FOUND"

    def test_buy_without_identity_returns_401(self, client: TestClient):
        response = client.post("/buy", json={"symbol": "ACME", "quantity": 1})

        assert response.status_code == 401

    @pytest.mark.parametrize(
        "payload",
        [
            {"symbol": "ACME", "quantity": 0},
            {"symbol": "ACME", "quantity": -3},
            {"symbol": "", "quantity": 1},
            {"quantity": 1},
            {"symbol": "ACME"},
        ],
    )
    def test_invalid_payload_returns_422(self, client: TestClient, logged_in, payload):
        response = client.post("/buy", json=payload, headers=logged_in)

        assert response.status_code == 422

    def test_rejected_order_leaves_no_transaction(self, client: TestClient, logged_in):
        client.post("/sell", json={"symbol": "ACME", "quantity": 1}, headers=logged_in)

        data = client.get("/transactions", headers=logged_in).json()
        assert data["count"] == 0
        assert client.get("/account", headers=logged_in).json()["cash"] == STARTING_CASH


# =============================================================================
# ORDERS ENDPOINT
# =============================================================================


class TestOrdersAPI:
    """Tests for POST /orders."""

    def test_buy_then_sell_via_orders(self, client: TestClient, logged_in):
        response = client.post(
            "/orders",
            json={"symbol": "ACME", "side": "BUY", "quantity": 5},
            headers=logged_in,
        )
        assert response.status_code == 201

        response = client.post(
            "/orders",
            json={"symbol": "ACME", "side": "SELL", "quantity": 2},
            headers=logged_in,
        )
        assert response.status_code == 201
        assert response.json()["side"] == "SELL"

        holdings = client.get("/portfolio", headers=logged_in).json()["holdings"]
        assert holdings[0]["quantity"] == 3

    def test_unknown_side_returns_422(self, client: TestClient, logged_in):
        response = client.post(
            "/orders",
            json={"symbol": "ACME", "side": "SHORT", "quantity": 1},
            headers=logged_in,
        )

        assert response.status_code == 422
