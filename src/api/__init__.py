"""FastAPI gateway module."""

from .main import app, create_app
from .gateway import GatewayConfig, GatewayError, PredictionGateway
from .schemas import CustomerInput, FeatureVector, PredictionResult

__all__ = [
    "app",
    "create_app",
    "GatewayConfig",
    "GatewayError",
    "PredictionGateway",
    "CustomerInput",
    "FeatureVector",
    "PredictionResult",
]
