"""
Prediction Gateway
==================

Relays feature vectors to the hosted inference endpoint and normalizes
its failures into a single error shape.
"""

from typing import Any, Dict, Optional

import httpx
from loguru import logger
from pydantic import BaseModel, Field

from config import get_config

DEFAULT_UPSTREAM_URL = "https://Maazz-demo-docker-space.hf.space/predict"

UPSTREAM_FAILURE = "Failed to get prediction from API"
INTERNAL_FAILURE = "Internal server error"


class GatewayConfig(BaseModel):
    """Settings for the inference endpoint the gateway forwards to."""

    upstream_url: str = Field(DEFAULT_UPSTREAM_URL, description="Inference endpoint URL")
    timeout: Optional[float] = Field(None, gt=0, description="Request timeout in seconds")

    @classmethod
    def from_config(cls, config: Optional[dict] = None) -> "GatewayConfig":
        """Build from the ``gateway`` section of config.yaml."""
        config = config if config is not None else get_config()
        return cls(**config.get("gateway", {}))


class GatewayError(Exception):
    """Raised when a prediction cannot be relayed."""

    def __init__(self, status_code: int, error: str, details: str):
        super().__init__(f"{error}: {details}")
        self.status_code = status_code
        self.error = error
        self.details = details

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.error, "details": self.details}


class PredictionGateway:
    """Thin pass-through proxy in front of the inference endpoint."""

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize PredictionGateway.

        Args:
            config: Gateway settings, read from config.yaml when omitted
            transport: Optional httpx transport (used to stub the endpoint)
        """
        self.config = config or GatewayConfig.from_config()
        self._transport = transport

    @property
    def upstream_url(self) -> str:
        return self.config.upstream_url

    def _client(self) -> httpx.AsyncClient:
        kwargs: Dict[str, Any] = {}
        if self.config.timeout is not None:
            kwargs["timeout"] = self.config.timeout
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(**kwargs)

    async def predict(self, payload: Dict[str, Any]) -> Any:
        """
        Forward a payload to the inference endpoint.

        Args:
            payload: JSON-serializable feature vector

        Returns:
            The endpoint's parsed JSON response, unchanged

        Raises:
            GatewayError: On transport failure or a non-success status
        """
        logger.info(f"Forwarding prediction request to {self.upstream_url}")

        try:
            async with self._client() as client:
                response = await client.post(self.upstream_url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Inference endpoint unreachable: {e!r}")
            raise GatewayError(500, INTERNAL_FAILURE, str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning(
                f"Inference endpoint returned {response.status_code}: {response.text[:200]}"
            )
            raise GatewayError(response.status_code, UPSTREAM_FAILURE, response.text)

        return response.json()
