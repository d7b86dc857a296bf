"""Form validation and feature encoding."""

from .encoder import FEATURE_COLUMNS, FeatureEncoder
from .validation import (
    FormStatus,
    FormValidationError,
    PredictionForm,
    validate_customer,
)

__all__ = [
    "FEATURE_COLUMNS",
    "FeatureEncoder",
    "FormStatus",
    "FormValidationError",
    "PredictionForm",
    "validate_customer",
]
