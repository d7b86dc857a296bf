"""Streamlit frontend module."""

from .client import PredictionClient, PredictionClientError

__all__ = ["PredictionClient", "PredictionClientError"]
