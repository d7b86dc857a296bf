"""
Feature Encoder Module
======================

Maps validated customer input to the flat numeric feature vector the
inference endpoint expects, and back into readable labels for display.
"""

from typing import List, Tuple

from loguru import logger

from src.api.schemas import (
    BinaryChoice,
    CustomerInput,
    FeatureVector,
    Gender,
    Geography,
)

# Column order of the model's training data
FEATURE_COLUMNS = [
    "CreditScore",
    "Gender",
    "Age",
    "Tenure",
    "Balance",
    "NumOfProducts",
    "HasCrCard",
    "IsActiveMember",
    "EstimatedSalary",
    *(member.column for member in Geography),
]


class FeatureEncoder:
    """Encode customer input for the model and decode it for people."""

    def encode(self, customer: CustomerInput) -> FeatureVector:
        """
        Encode validated customer input.

        Categories become their 0/1 codes, numbers pass through and the
        country expands into one indicator per known country.

        Args:
            customer: Validated customer input

        Returns:
            FeatureVector ready to post to the gateway
        """
        vector = FeatureVector(
            CreditScore=customer.credit_score,
            Gender=int(customer.gender),
            Age=customer.age,
            Tenure=customer.tenure,
            Balance=customer.balance,
            NumOfProducts=customer.num_of_products,
            HasCrCard=int(customer.has_cr_card),
            IsActiveMember=int(customer.is_active_member),
            EstimatedSalary=customer.estimated_salary,
            **customer.geography.indicators(),
        )
        logger.debug(f"Encoded features for {customer.customer_name}: {vector.model_dump()}")
        return vector

    def decode(self, vector: FeatureVector) -> List[Tuple[str, str]]:
        """
        Render a feature vector as (attribute, value) rows.

        Args:
            vector: Encoded features

        Returns:
            Rows in display order, codes replaced by their labels
        """
        return [
            ("Credit Score", str(vector.CreditScore)),
            ("Gender", Gender(vector.Gender).label),
            ("Age", str(vector.Age)),
            ("Tenure", str(vector.Tenure)),
            ("Balance", f"{vector.Balance:.2f}"),
            ("Number of Products", str(vector.NumOfProducts)),
            ("Has Credit Card", BinaryChoice(vector.HasCrCard).label),
            ("Is Active Member", BinaryChoice(vector.IsActiveMember).label),
            ("Estimated Salary", f"{vector.EstimatedSalary:.2f}"),
            ("Geography", Geography.from_indicators(vector.model_dump()).value),
        ]
