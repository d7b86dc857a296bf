"""Tests for the FastAPI gateway routes."""

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from tests.conftest import UPSTREAM_URL

PAYLOAD = {
    "CreditScore": 650, "Gender": 0, "Age": 35, "Tenure": 5, "Balance": 0,
    "NumOfProducts": 1, "HasCrCard": 0, "IsActiveMember": 1, "EstimatedSalary": 50000,
    "Geography_France": 1, "Geography_Germany": 0, "Geography_Spain": 0,
}


@pytest.fixture
def make_client(make_gateway):
    def _make(handler):
        return TestClient(create_app(make_gateway(handler)))
    return _make


def test_root(make_client):
    response = make_client(lambda request: httpx.Response(200, json={"data": 0})).get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Churn Predictor API"


def test_health_reports_upstream(make_client):
    response = make_client(lambda request: httpx.Response(200, json={"data": 0})).get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["upstream_url"] == UPSTREAM_URL
    assert "timestamp" in data


@pytest.mark.parametrize("label", [0, 1])
def test_predict_relays_upstream_body(make_client, label):
    client = make_client(lambda request: httpx.Response(200, json={"data": label}))

    response = client.post("/api/predict", json=PAYLOAD)

    assert response.status_code == 200
    assert response.json() == {"data": label}


def test_predict_mirrors_upstream_status(make_client):
    client = make_client(lambda request: httpx.Response(503, text="model overloaded"))

    response = client.post("/api/predict", json=PAYLOAD)

    assert response.status_code == 503
    assert response.json() == {
        "error": "Failed to get prediction from API",
        "details": "model overloaded",
    }


def test_predict_transport_failure(make_client):
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    response = make_client(handler).post("/api/predict", json=PAYLOAD)

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
    assert "timed out" in response.json()["details"]


def test_predict_unreadable_upstream_body(make_client):
    client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    response = client.post("/api/predict", json=PAYLOAD)

    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
    assert response.json()["details"]


def test_invalid_payload_never_reaches_upstream(make_client):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"data": 0})

    client = make_client(handler)

    missing = client.post("/api/predict", json={})
    two_countries = client.post("/api/predict", json={**PAYLOAD, "Geography_Spain": 1})

    for response in (missing, two_countries):
        assert response.status_code == 422
        assert response.json()["error"] == "Invalid prediction payload"
        assert response.json()["details"]
    assert calls == []
