"""Tests for the dashboard's prediction client."""

import json

import httpx
import pytest

from src.api.schemas import PredictionResult
from src.dashboard.client import FAILURE_MESSAGE, PredictionClient, PredictionClientError
from src.features.encoder import FeatureEncoder


def make_client(handler):
    return PredictionClient(api_url="http://gateway.test/", transport=httpx.MockTransport(handler))


def test_returns_prediction_result(customer):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"data": 1})

    result = make_client(handler).predict(customer)

    assert isinstance(result, PredictionResult)
    assert result.customer_name == "Jane Doe"
    assert result.prediction == 1
    assert result.is_churn
    assert result.form_data == FeatureEncoder().encode(customer)
    assert str(seen[0].url) == "http://gateway.test/api/predict"
    assert json.loads(seen[0].content)["Geography_France"] == 1


@pytest.mark.parametrize("response", [
    httpx.Response(500, json={"error": "Internal server error", "details": "boom"}),
    httpx.Response(200, json={"prediction": 1}),
    httpx.Response(200, json={"data": 7}),
    httpx.Response(200, json={"data": 0.9}),
    httpx.Response(200, json={"data": "1"}),
    httpx.Response(200, json={"data": True}),
    httpx.Response(200, json=[1]),
    httpx.Response(200, text="not json"),
])
def test_bad_responses_raise(customer, response):
    with pytest.raises(PredictionClientError, match=FAILURE_MESSAGE):
        make_client(lambda request: response).predict(customer)


def test_unreachable_gateway_raises(customer):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(PredictionClientError, match=FAILURE_MESSAGE):
        make_client(handler).predict(customer)


def test_unexpected_errors_raise_client_error(customer):
    def handler(request):
        raise RuntimeError("transport exploded")

    with pytest.raises(PredictionClientError, match=FAILURE_MESSAGE):
        make_client(handler).predict(customer)
