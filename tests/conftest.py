"""Shared fixtures for the churn predictor tests."""

import httpx
import pytest

from src.api.gateway import GatewayConfig, PredictionGateway
from src.api.schemas import CustomerInput

UPSTREAM_URL = "https://inference.test/predict"


@pytest.fixture
def form_values():
    """Raw form values as the dashboard collects them."""
    return {
        "customerName": "Jane Doe",
        "creditScore": 650,
        "gender": "0",
        "age": 35,
        "tenure": 5,
        "balance": 0,
        "numOfProducts": 1,
        "hasCrCard": "0",
        "isActiveMember": "1",
        "estimatedSalary": 50000,
        "geography": "France",
    }


@pytest.fixture
def customer(form_values):
    return CustomerInput.model_validate(form_values)


@pytest.fixture
def make_gateway():
    """Build a gateway whose upstream is answered by ``handler``."""
    def _make(handler):
        return PredictionGateway(
            GatewayConfig(upstream_url=UPSTREAM_URL, timeout=5),
            transport=httpx.MockTransport(handler),
        )
    return _make
