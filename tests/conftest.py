"""Pytest fixtures for testing"""

import pytest
from fastapi.testclient import TestClient
from payment_optimizer.api.main import create_app
from payment_optimizer.config import Settings
from payment_optimizer.domain.models import AccountSnapshot


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def settings() -> Settings:
    """Default engine settings, independent of the environment"""
    return Settings(_env_file=None)


@pytest.fixture
def snowball_accounts() -> tuple[AccountSnapshot, ...]:
    """Three cards with balances $500 / $100 / $900"""
    return (
        AccountSnapshot("card_a", 50_000, 200_000, 2_500, 19.99),
        AccountSnapshot("card_b", 10_000, 100_000, 1_000, 22.99),
        AccountSnapshot("card_c", 90_000, 300_000, 4_000, 12.99),
    )


@pytest.fixture
def high_util_accounts() -> tuple[AccountSnapshot, ...]:
    """Three $1000-limit cards at 90%, 40% and 10% utilization"""
    return (
        AccountSnapshot("visa", 90_000, 100_000, 2_500, 24.99),
        AccountSnapshot("amex", 40_000, 100_000, 1_000, 29.99),
        AccountSnapshot("rbc", 10_000, 100_000, 500, 19.99),
    )
