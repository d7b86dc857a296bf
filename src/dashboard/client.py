"""
Prediction Client
=================

HTTP client the dashboard uses to reach the gateway's /api/predict route.
"""

from datetime import datetime
from typing import Optional

import httpx
from loguru import logger

from config import get_config
from src.api.schemas import CustomerInput, PredictionResponse, PredictionResult
from src.features.encoder import FeatureEncoder

FAILURE_MESSAGE = "Failed to get prediction. Please try again."


class PredictionClientError(Exception):
    """Raised when a prediction could not be obtained."""


class PredictionClient:
    """Submit validated customer input and collect the prediction."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Initialize PredictionClient.

        Args:
            api_url: Base URL of the gateway, read from config.yaml when omitted
            timeout: Request timeout in seconds (httpx default when omitted)
            transport: Optional httpx transport
        """
        if api_url is None:
            api_url = get_config().get("dashboard", {}).get("api_url", "http://localhost:8000")
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.encoder = FeatureEncoder()

    def predict(self, customer: CustomerInput) -> PredictionResult:
        """
        Encode the customer and request a prediction.

        Args:
            customer: Validated customer input

        Returns:
            PredictionResult stamped with the current time

        Raises:
            PredictionClientError: If the gateway fails or answers unexpectedly
        """
        kwargs = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.transport is not None:
            kwargs["transport"] = self.transport

        try:
            features = self.encoder.encode(customer)
            with httpx.Client(**kwargs) as client:
                response = client.post(f"{self.api_url}/api/predict", json=features.model_dump())
        except httpx.HTTPError as e:
            logger.error(f"Gateway request failed: {e!r}")
            raise PredictionClientError(FAILURE_MESSAGE) from e
        except Exception as e:
            logger.exception("Unexpected error while requesting a prediction")
            raise PredictionClientError(FAILURE_MESSAGE) from e

        if not response.is_success:
            logger.warning(f"Gateway returned {response.status_code}: {response.text[:200]}")
            raise PredictionClientError(FAILURE_MESSAGE)

        try:
            # The label is binary: 0.9, "1" or true are not predictions
            prediction = PredictionResponse.model_validate(response.json(), strict=True).data
        except ValueError as e:
            logger.error(f"Unexpected gateway response: {response.text[:200]}")
            raise PredictionClientError(FAILURE_MESSAGE) from e

        return PredictionResult(
            customer_name=customer.customer_name,
            form_data=features,
            prediction=prediction,
            timestamp=datetime.now(),
        )
