"""Tests for form validation and the validate-on-change form state."""

import pytest
from pydantic import ValidationError

from src.api.schemas import BinaryChoice, CustomerInput, Gender, Geography, PredictionResult
from src.features.encoder import FeatureEncoder
from src.features.validation import (
    DEFAULT_VALUES,
    FormStatus,
    FormValidationError,
    PredictionForm,
    validate_customer,
)


def test_valid_values_have_no_errors(form_values):
    assert validate_customer(form_values) == {}


def test_coerces_form_strings(form_values):
    form_values.update(creditScore="700", age="40", balance="1250.50", gender="1", hasCrCard="1")
    customer = CustomerInput.model_validate(form_values)

    assert customer.credit_score == 700
    assert customer.age == 40
    assert customer.balance == 1250.50
    assert customer.gender is Gender.MALE
    assert customer.has_cr_card is BinaryChoice.YES
    assert customer.geography is Geography.FRANCE


def test_accepts_python_field_names():
    customer = CustomerInput(
        customer_name="Jane Doe", credit_score=650, gender=0, age=35, tenure=5,
        balance=0, num_of_products=1, has_cr_card=0, is_active_member=1,
        estimated_salary=50000, geography="Spain",
    )
    assert customer.geography is Geography.SPAIN


def test_customer_input_is_immutable(customer):
    with pytest.raises(ValidationError):
        customer.age = 50


@pytest.mark.parametrize("field,value,message", [
    ("creditScore", 299, "Score must be at least 300"),
    ("creditScore", 901, "Score must be at most 900"),
    ("age", 17, "Age must be at least 18"),
    ("age", 101, "Age must be at most 100"),
    ("tenure", -1, "Tenure cannot be negative"),
    ("numOfProducts", 0, "Must have at least 1 product"),
    ("estimatedSalary", -0.01, "Salary cannot be negative"),
    ("balance", -5, "Balance cannot be negative"),
])
def test_out_of_range_values_are_rejected(form_values, field, value, message):
    form_values[field] = value
    assert validate_customer(form_values) == {field: message}


@pytest.mark.parametrize("field,value", [
    ("creditScore", 300), ("creditScore", 900), ("age", 18), ("age", 100),
    ("tenure", 0), ("numOfProducts", 1), ("estimatedSalary", 0),
])
def test_boundaries_are_accepted(form_values, field, value):
    form_values[field] = value
    assert validate_customer(form_values) == {}


def test_short_name_is_rejected(form_values):
    form_values["customerName"] = " J "
    assert validate_customer(form_values) == {"customerName": "Customer name is required"}


@pytest.mark.parametrize("field,value,message", [
    ("gender", "2", "Please select a gender"),
    ("hasCrCard", "", "Please select an option"),
    ("isActiveMember", None, "Please select an option"),
    ("geography", "Italy", "Please select a country"),
])
def test_unknown_categories_are_rejected(form_values, field, value, message):
    form_values[field] = value
    assert validate_customer(form_values) == {field: message}


def test_non_numeric_input_is_rejected(form_values):
    form_values["age"] = "thirty"
    assert validate_customer(form_values) == {"age": "Please enter a valid number"}


@pytest.mark.parametrize("field,value", [
    ("balance", "inf"),
    ("balance", float("nan")),
    ("estimatedSalary", "inf"),
    ("estimatedSalary", float("inf")),
])
def test_non_finite_amounts_are_rejected(form_values, field, value):
    form_values[field] = value
    assert validate_customer(form_values) == {field: "Please enter a valid number"}


def test_reports_every_invalid_field(form_values):
    form_values.update(creditScore=100, age=10, geography="Atlantis")
    assert set(validate_customer(form_values)) == {"creditScore", "age", "geography"}


class TestPredictionForm:

    def test_defaults_need_a_customer_name(self):
        form = PredictionForm()

        assert form.status == FormStatus.IDLE
        assert form.errors == {"customerName": "Customer name is required"}
        assert not form.is_valid
        assert not form.can_submit

    def test_validates_after_every_change(self):
        form = PredictionForm()

        form.set_value("customerName", "Jane Doe")
        assert form.is_valid

        form.set_value("creditScore", 950)
        assert form.errors == {"creditScore": "Score must be at most 900"}
        assert not form.can_submit

        form.set_value("creditScore", 720)
        assert form.is_valid

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            PredictionForm().set_value("favouriteColour", "red")

    def test_submit_blocked_while_invalid(self):
        form = PredictionForm()

        with pytest.raises(FormValidationError) as exc_info:
            form.start_submit()

        assert exc_info.value.errors == {"customerName": "Customer name is required"}
        assert form.status == FormStatus.IDLE

    def test_submit_returns_validated_input(self, form_values):
        form = PredictionForm(form_values)

        customer = form.start_submit()

        assert isinstance(customer, CustomerInput)
        assert customer.customer_name == "Jane Doe"
        assert form.status == FormStatus.SUBMITTING
        assert not form.can_submit

    def test_failed_attempt_can_be_retried(self, form_values):
        form = PredictionForm(form_values)
        form.start_submit()

        form.mark_failed("Failed to get prediction. Please try again.")
        assert form.status == FormStatus.FAILED
        assert form.can_submit

        form.start_submit()
        assert form.status == FormStatus.SUBMITTING
        assert form.error is None

    def test_reset_restores_defaults(self, form_values):
        form = PredictionForm(form_values)
        form.start_submit()
        form.mark_failed("boom")

        form.reset()

        assert form.values == DEFAULT_VALUES
        assert form.status == FormStatus.IDLE
        assert form.error is None
        assert form.result is None

    def test_submit_records_success(self, form_values, customer):
        form = PredictionForm(form_values)
        expected = PredictionResult(
            customer_name=customer.customer_name,
            form_data=FeatureEncoder().encode(customer),
            prediction=1,
        )

        result = form.submit(lambda submitted: expected)

        assert result is expected
        assert form.status == FormStatus.SUCCESS
        assert form.result is expected

    @pytest.mark.parametrize("exc,message", [
        (ValueError("Out of range float values are not JSON compliant"),
         "Out of range float values are not JSON compliant"),
        (RuntimeError(), "An unexpected error occurred"),
    ])
    def test_any_submit_failure_leaves_form_usable(self, form_values, exc, message):
        form = PredictionForm(form_values)

        def predict(submitted):
            raise exc

        assert form.submit(predict) is None
        assert form.status == FormStatus.FAILED
        assert form.error == message
        assert form.can_submit

    def test_submit_blocked_by_invalid_fields(self):
        form = PredictionForm()
        calls = []

        with pytest.raises(FormValidationError):
            form.submit(calls.append)

        assert calls == []
        assert form.status == FormStatus.IDLE
