"""
API Schemas (Pydantic Models)
=============================

Data validation models for form input, the model feature vector and
gateway responses.
"""

from datetime import datetime
from enum import Enum, IntEnum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class Gender(IntEnum):
    """Gender category as the model encodes it."""

    FEMALE = 0
    MALE = 1

    @property
    def label(self) -> str:
        return self.name.title()


class BinaryChoice(IntEnum):
    """Yes/No category (credit card holder, active member)."""

    NO = 0
    YES = 1

    @property
    def label(self) -> str:
        return self.name.title()


class Geography(str, Enum):
    """Countries the model was trained on."""

    FRANCE = "France"
    GERMANY = "Germany"
    SPAIN = "Spain"

    @property
    def column(self) -> str:
        """Name of the one-hot indicator column for this country."""
        return f"Geography_{self.value}"

    def indicators(self) -> Dict[str, int]:
        """One-hot encode this country over every known country."""
        return {member.column: int(member is self) for member in Geography}

    @classmethod
    def from_indicators(cls, indicators: Dict[str, int]) -> "Geography":
        """
        Recover the country from its one-hot indicators.

        Args:
            indicators: Mapping containing the Geography_* columns

        Returns:
            The country whose indicator is 1

        Raises:
            ValueError: If not exactly one indicator is set
        """
        selected = [member for member in cls if indicators.get(member.column) == 1]
        if len(selected) != 1:
            raise ValueError(
                f"Expected exactly one Geography indicator set to 1, got {len(selected)}"
            )
        return selected[0]


class CustomerInput(BaseModel):
    """Schema for the customer attributes entered in the prediction form."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "customerName": "Jane Doe",
                "creditScore": 650,
                "gender": "0",
                "age": 35,
                "tenure": 5,
                "balance": 0,
                "numOfProducts": 1,
                "hasCrCard": "0",
                "isActiveMember": "1",
                "estimatedSalary": 50000,
                "geography": "France"
            }
        },
    )

    customer_name: str = Field(..., min_length=2, description="Customer display name")
    credit_score: int = Field(..., ge=300, le=900, description="Credit score (300-900)")
    gender: Gender = Field(..., description="0 = Female, 1 = Male")
    age: int = Field(..., ge=18, le=100, description="Age in years (18-100)")
    tenure: int = Field(..., ge=0, description="Years as a customer")
    balance: float = Field(..., ge=0, allow_inf_nan=False, description="Account balance")
    num_of_products: int = Field(..., ge=1, description="Number of products held")
    has_cr_card: BinaryChoice = Field(..., description="Has a credit card (0 or 1)")
    is_active_member: BinaryChoice = Field(..., description="Is an active member (0 or 1)")
    estimated_salary: float = Field(..., ge=0, allow_inf_nan=False, description="Estimated yearly salary")
    geography: Geography = Field(..., description="Country of residence")

    @field_validator("gender", "has_cr_card", "is_active_member", mode="before")
    @classmethod
    def coerce_category(cls, v):
        # Form widgets hand categories over as "0"/"1"
        if isinstance(v, str) and v.strip().isdigit():
            return int(v.strip())
        return v


class FeatureVector(BaseModel):
    """Schema for the numeric feature vector the inference endpoint expects."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "CreditScore": 650,
                "Gender": 0,
                "Age": 35,
                "Tenure": 5,
                "Balance": 0,
                "NumOfProducts": 1,
                "HasCrCard": 0,
                "IsActiveMember": 1,
                "EstimatedSalary": 50000,
                "Geography_France": 1,
                "Geography_Germany": 0,
                "Geography_Spain": 0
            }
        }
    )

    CreditScore: int
    Gender: int = Field(..., ge=0, le=1)
    Age: int
    Tenure: int
    Balance: float = Field(..., allow_inf_nan=False)
    NumOfProducts: int
    HasCrCard: int = Field(..., ge=0, le=1)
    IsActiveMember: int = Field(..., ge=0, le=1)
    EstimatedSalary: float = Field(..., allow_inf_nan=False)
    Geography_France: int = Field(..., ge=0, le=1)
    Geography_Germany: int = Field(..., ge=0, le=1)
    Geography_Spain: int = Field(..., ge=0, le=1)

    @model_validator(mode="after")
    def check_single_geography(self):
        if self.Geography_France + self.Geography_Germany + self.Geography_Spain != 1:
            raise ValueError("Exactly one Geography indicator must be 1")
        return self


class PredictionResponse(BaseModel):
    """Schema for a successful prediction relayed from the inference endpoint."""

    data: int = Field(..., ge=0, le=1, description="0 = customer stays, 1 = customer churns")


class ErrorResponse(BaseModel):
    """Schema for every gateway failure."""

    error: str
    details: str


class HealthResponse(BaseModel):
    """Schema for health check response."""

    status: str
    upstream_url: str
    timestamp: datetime


class PredictionResult(BaseModel):
    """A completed prediction, as shown in the result panel and the report."""

    customer_name: str
    form_data: FeatureVector
    prediction: int = Field(..., ge=0, le=1)
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def is_churn(self) -> bool:
        return self.prediction == 1
