"""
Risk profile domain models for Riskwell.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from riskwell.domain.enums import (
    EmploymentStatus,
    FactorCategory,
    Occupation,
    RiskCategory,
    RiskLevel,
    RiskZone,
)


REQUIRED_PROFILE_FIELDS = ("age", "occupation", "annual_income", "employment_status")


class Location(BaseModel):
    """Applicant location."""

    country: Optional[str] = None
    city: Optional[str] = None
    risk_zone: Optional[RiskZone] = None


class RiskProfileInput(BaseModel):
    """
    Applicant attributes submitted for scoring.

    The four required fields are optional at the type level so that partial
    submissions can be stored; `is_complete` reports whether they are all set.
    """

    age: Optional[int] = Field(None, ge=18, le=100)
    occupation: Optional[Occupation] = None
    annual_income: Optional[Decimal] = Field(None, ge=0)
    employment_status: Optional[EmploymentStatus] = None

    has_chronic_illness: bool = False
    smoker: bool = False
    bmi: Optional[float] = Field(None, ge=10, le=50)

    has_dangerous_hobbies: bool = False
    hobbies: list[str] = Field(default_factory=list)

    credit_score: Optional[int] = Field(None, ge=300, le=850)
    has_bankruptcy_history: bool = False

    location: Optional[Location] = None

    @property
    def missing_fields(self) -> list[str]:
        """Required fields that are still unset."""
        return [name for name in REQUIRED_PROFILE_FIELDS if getattr(self, name) is None]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields

    @property
    def risk_zone(self) -> Optional[RiskZone]:
        return self.location.risk_zone if self.location else None


class RiskFactor(BaseModel):
    """A single triggered risk rule."""

    category: FactorCategory
    factor: str = Field(..., max_length=50)
    level: RiskLevel
    multiplier: Decimal = Field(..., ge=Decimal("0.5"), le=Decimal("2.0"))
    description: str


class RiskAssessment(BaseModel):
    """Output of the risk scoring engine."""

    risk_factors: list[RiskFactor] = Field(default_factory=list)
    overall_risk_score: int = Field(..., ge=0, le=100)
    risk_category: RiskCategory
    base_premium_multiplier: Decimal = Field(..., ge=Decimal("0.5"), le=Decimal("3.0"))


class RiskProfile(BaseModel):
    """
    Stored risk profile: one per applicant.

    The assessment is rebuilt in full whenever the applicant submits new data
    and is absent while the profile is incomplete.
    """

    applicant_id: str
    profile: RiskProfileInput
    assessment: Optional[RiskAssessment] = None
    is_complete: bool = False

    created_at: datetime
    last_updated: datetime


class CategoryBreakdown(BaseModel):
    """Summary of the factors that fall into one category."""

    category: FactorCategory
    count: int = Field(..., ge=1)
    average_multiplier: Decimal
    risk_level: RiskLevel
    factors: list[RiskFactor]


class Recommendation(BaseModel):
    """Advice shown to the applicant for improving their risk position."""

    category: FactorCategory
    recommendation: str
    impact: str


class RiskAnalysis(BaseModel):
    """Category breakdown and recommendations for a complete profile."""

    overall_risk_score: int
    risk_category: RiskCategory
    base_premium_multiplier: Decimal
    categories: list[CategoryBreakdown]
    recommendations: list[Recommendation]
    last_updated: datetime
