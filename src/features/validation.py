"""
Form Validation Module
======================

Field-level validation of the prediction form. The full rule set is
re-run after every field change so callers can keep the submit control
disabled until all fields are valid at once.
"""

from enum import Enum
from typing import Any, Callable, Dict, Optional

from loguru import logger
from pydantic import ValidationError

from src.api.schemas import CustomerInput, PredictionResult

DEFAULT_VALUES: Dict[str, Any] = {
    "customerName": "",
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

FIELD_MESSAGES: Dict[str, Dict[str, str]] = {
    "customerName": {
        "missing": "Customer name is required",
        "string_too_short": "Customer name is required",
        "string_type": "Customer name is required",
    },
    "creditScore": {
        "greater_than_equal": "Score must be at least 300",
        "less_than_equal": "Score must be at most 900",
    },
    "age": {
        "greater_than_equal": "Age must be at least 18",
        "less_than_equal": "Age must be at most 100",
    },
    "tenure": {"greater_than_equal": "Tenure cannot be negative"},
    "balance": {"greater_than_equal": "Balance cannot be negative"},
    "numOfProducts": {"greater_than_equal": "Must have at least 1 product"},
    "estimatedSalary": {"greater_than_equal": "Salary cannot be negative"},
}

# Any failure on a select-style field gets one message
CHOICE_MESSAGES: Dict[str, str] = {
    "gender": "Please select a gender",
    "hasCrCard": "Please select an option",
    "isActiveMember": "Please select an option",
    "geography": "Please select a country",
}

UNEXPECTED_ERROR = "An unexpected error occurred"

NUMBER_ERRORS = {
    "int_parsing", "float_parsing", "int_from_float", "int_type", "float_type", "finite_number",
}


class FormValidationError(ValueError):
    """Raised when the form is submitted with invalid fields."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


class FormStatus(str, Enum):
    """Lifecycle of one prediction attempt."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILED = "failed"


def _message_for(field: str, error_type: str, default: str) -> str:
    if field in CHOICE_MESSAGES:
        return CHOICE_MESSAGES[field]
    field_messages = FIELD_MESSAGES.get(field, {})
    if error_type in field_messages:
        return field_messages[error_type]
    if error_type == "missing":
        return "This field is required"
    if error_type in NUMBER_ERRORS:
        return "Please enter a valid number"
    return default


def validate_customer(values: Dict[str, Any]) -> Dict[str, str]:
    """
    Validate raw form values.

    Args:
        values: Form values keyed by form field name

    Returns:
        Mapping of field name to its first error message; empty when valid
    """
    try:
        CustomerInput.model_validate(values)
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for error in e.errors():
            field = str(error["loc"][0]) if error["loc"] else "__root__"
            errors.setdefault(field, _message_for(field, error["type"], error["msg"]))
        return errors
    return {}


class PredictionForm:
    """State of the prediction form across field edits and submissions."""

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self.values: Dict[str, Any] = dict(DEFAULT_VALUES)
        if values:
            self.values.update(values)
        self.status = FormStatus.IDLE
        self.error: Optional[str] = None
        self.result: Optional[PredictionResult] = None
        self.errors: Dict[str, str] = validate_customer(self.values)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def can_submit(self) -> bool:
        return self.is_valid and self.status != FormStatus.SUBMITTING

    def set_value(self, field: str, value: Any) -> Dict[str, str]:
        """
        Change one field and re-validate the whole form.

        Args:
            field: Form field name, e.g. ``creditScore``
            value: Raw value as entered

        Returns:
            Current field errors
        """
        if field not in DEFAULT_VALUES:
            raise KeyError(f"Unknown form field: {field}")
        self.values[field] = value
        self.errors = validate_customer(self.values)
        return self.errors

    def start_submit(self) -> CustomerInput:
        """
        Move to Submitting and return the validated input.

        Raises:
            FormValidationError: If any field is invalid
        """
        self.errors = validate_customer(self.values)
        if self.errors:
            raise FormValidationError(self.errors)

        self.status = FormStatus.SUBMITTING
        self.error = None
        return CustomerInput.model_validate(self.values)

    def submit(
        self, predict: Callable[[CustomerInput], PredictionResult]
    ) -> Optional[PredictionResult]:
        """
        Run one prediction attempt through ``predict``.

        The attempt always ends in Success or Failed, whatever ``predict``
        raises, so the form can be resubmitted.

        Args:
            predict: Callable turning validated input into a result

        Returns:
            The result, or None when the attempt failed

        Raises:
            FormValidationError: If any field is invalid
        """
        customer = self.start_submit()
        try:
            result = predict(customer)
        except Exception as e:
            self.mark_failed(str(e) or UNEXPECTED_ERROR)
            return None

        self.mark_success(result)
        return result

    def mark_success(self, result: PredictionResult):
        self.status = FormStatus.SUCCESS
        self.result = result

    def mark_failed(self, message: str):
        logger.warning(f"Prediction attempt failed: {message}")
        self.status = FormStatus.FAILED
        self.error = message

    def reset(self):
        """Start a new prediction from the default values."""
        self.values = dict(DEFAULT_VALUES)
        self.status = FormStatus.IDLE
        self.error = None
        self.result = None
        self.errors = validate_customer(self.values)
