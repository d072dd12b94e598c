"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient
from payment_optimizer.api.main import create_app
from payment_optimizer.config import Settings


@pytest.fixture
def allocation_body():
    """Three cards with balances $500 / $100 / $900 and $200 to spend"""
    return {
        "accounts": [
            {
                "account_id": "card_a",
                "current_balance_cents": 50_000,
                "credit_limit_cents": 200_000,
                "minimum_payment_cents": 2_500,
                "interest_rate_annual_percent": 19.99,
            },
            {
                "account_id": "card_b",
                "current_balance_cents": 10_000,
                "credit_limit_cents": 100_000,
                "minimum_payment_cents": 1_000,
                "interest_rate_annual_percent": 22.99,
            },
            {
                "account_id": "card_c",
                "current_balance_cents": 90_000,
                "credit_limit_cents": 300_000,
                "minimum_payment_cents": 4_000,
                "interest_rate_annual_percent": 12.99,
                "nickname": "Travel card",
            },
        ],
        "available_funds_cents": 20_000,
        "strategy": "balance_snowball",
    }


def payments(plan: dict) -> dict[str, int]:
    return {a["account_id"]: a["suggested_payment_cents"] for a in plan["accounts"]}


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient, allocation_body):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/allocations", json=allocation_body)

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "payment_optimizer_allocation_total" in response.text


def test_request_id_header(client: TestClient):
    """Caller-supplied request id is echoed back"""
    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"


def test_allocation_endpoint(client: TestClient, allocation_body):
    """Test POST /v1/allocations with the snowball strategy"""
    response = client.post("/v1/allocations", json=allocation_body)

    assert response.status_code == 200
    data = response.json()
    assert data["strategy"] == "balance_snowball"
    assert payments(data) == {"card_a": 6_000, "card_b": 10_000, "card_c": 4_000}
    assert data["total_payment_cents"] == 20_000
    assert data["unallocated_cents"] == 0
    assert 300 <= data["score_impact"]["projected_score"] <= 900
    assert data["score_impact"]["factors"]["payment_history_impact"] == 5

    nicknames = {a["account_id"]: a["nickname"] for a in data["accounts"]}
    assert nicknames == {"card_a": None, "card_b": None, "card_c": "Travel card"}


def test_allocation_default_strategy(client: TestClient, allocation_body):
    """Strategy defaults to utilization minimizing"""
    del allocation_body["strategy"]

    response = client.post("/v1/allocations", json=allocation_body)

    assert response.status_code == 200
    assert response.json()["strategy"] == "utilization_minimizing"


def test_allocation_insufficient_funds(client: TestClient, allocation_body):
    """Funds below the minimum payments are rejected"""
    allocation_body["available_funds_cents"] = 7_499

    response = client.post("/v1/allocations", json=allocation_body)

    assert response.status_code == 422
    assert "minimum payment" in response.json()["detail"]


def test_allocation_no_eligible_accounts(client: TestClient, allocation_body):
    for account in allocation_body["accounts"]:
        account["current_balance_cents"] = 0
        account["minimum_payment_cents"] = 0

    response = client.post("/v1/allocations", json=allocation_body)

    assert response.status_code == 422


def test_allocation_invalid_body(client: TestClient, allocation_body):
    """Schema validation rejects negative funds and unknown strategies"""
    allocation_body["available_funds_cents"] = -1
    assert client.post("/v1/allocations", json=allocation_body).status_code == 422

    allocation_body["available_funds_cents"] = 20_000
    allocation_body["strategy"] = "avalanche"
    assert client.post("/v1/allocations", json=allocation_body).status_code == 422


def test_override_endpoint(client: TestClient, allocation_body):
    """Test POST /v1/allocations/override round trip"""
    plan = client.post("/v1/allocations", json=allocation_body).json()

    response = client.post(
        "/v1/allocations/override",
        json={
            "plan": plan,
            "allocation": allocation_body,
            "account_id": "card_c",
            "requested_payment_cents": 15_000,
        },
    )

    assert response.status_code == 200
    data = response.json()
    card_c = next(a for a in data["accounts"] if a["account_id"] == "card_c")
    assert card_c["suggested_payment_cents"] == 15_000
    assert card_c["is_manual"] is True
    assert data["total_payment_cents"] == 31_000
    assert data["unallocated_cents"] == -11_000

    untouched = {a["account_id"]: a for a in plan["accounts"]}
    for account in data["accounts"]:
        if account["account_id"] != "card_c":
            assert account == untouched[account["account_id"]]


def test_override_clamps_request(client: TestClient, allocation_body):
    """Requests outside the account's band are clamped, not rejected"""
    plan = client.post("/v1/allocations", json=allocation_body).json()

    response = client.post(
        "/v1/allocations/override",
        json={
            "plan": plan,
            "allocation": allocation_body,
            "account_id": "card_a",
            "requested_payment_cents": 0,
        },
    )

    assert response.status_code == 200
    card_a = next(a for a in response.json()["accounts"] if a["account_id"] == "card_a")
    assert card_a["suggested_payment_cents"] == 2_500


def test_override_unknown_account(client: TestClient, allocation_body):
    plan = client.post("/v1/allocations", json=allocation_body).json()

    response = client.post(
        "/v1/allocations/override",
        json={
            "plan": plan,
            "allocation": allocation_body,
            "account_id": "card_z",
            "requested_payment_cents": 1_000,
        },
    )

    assert response.status_code == 404


def test_compare_endpoint(client: TestClient, allocation_body):
    """Test POST /v1/allocations/compare returns one plan per strategy"""
    del allocation_body["strategy"]

    response = client.post("/v1/allocations/compare", json=allocation_body)

    assert response.status_code == 200
    plans = response.json()["plans"]
    assert set(plans) == {"utilization_minimizing", "interest_minimizing", "balance_snowball"}
    assert payments(plans["balance_snowball"])["card_b"] == 10_000


def test_score_impact_endpoint(client: TestClient):
    """Test POST /v1/score-impact preview"""
    response = client.post(
        "/v1/score-impact",
        json={"utilization_change_percentage_points": -1000},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["factors"]["utilization_impact"] == 100
    assert 300 <= data["projected_score"] <= 900


def test_score_impact_custom_baseline(client: TestClient):
    response = client.post(
        "/v1/score-impact",
        json={"utilization_change_percentage_points": -50, "baseline_score": 880},
    )

    assert response.status_code == 200
    assert response.json()["projected_score"] == 900


def test_health_lists_strategies(client: TestClient):
    strategies = client.get("/health").json()["strategies"]
    assert strategies == ["utilization_minimizing", "interest_minimizing", "balance_snowball"]


def test_app_settings_reach_the_engine():
    """Settings passed to the factory replace the environment defaults"""
    app = create_app(Settings(_env_file=None, baseline_score=650))

    response = TestClient(app).post(
        "/v1/score-impact", json={"utilization_change_percentage_points": 0}
    )

    assert response.json()["baseline_score"] == 650
    assert response.json()["projected_score"] == 657
