"""
Policy domain models for Riskwell.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from riskwell.domain.enums import (
    BeneficiaryRelationship,
    PolicyStatus,
    PolicyType,
    PremiumFrequency,
    RiskCategory,
)


class Coverage(BaseModel):
    """One insured amount on a policy."""

    type: PolicyType
    coverage_amount: Decimal = Field(..., ge=0)
    deductible: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = None


class Installment(BaseModel):
    """One scheduled partial payment of the total premium."""

    frequency: PremiumFrequency
    amount: Decimal = Field(..., ge=0)
    due_date: date
    paid: bool = False
    paid_date: Optional[date] = None


class Beneficiary(BaseModel):
    """Named recipient of a policy payout."""

    name: str = Field(..., min_length=1)
    relationship: BeneficiaryRelationship = BeneficiaryRelationship.OTHER
    percentage: Decimal = Field(default=Decimal("0"), ge=0, le=100)


class PolicyRequest(BaseModel):
    """Applicant's request for a new policy."""

    policy_type: PolicyType
    coverage_amount: Decimal = Field(..., gt=0)
    deductible: Optional[Decimal] = Field(None, ge=0)

    name: Optional[str] = None
    description: Optional[str] = None

    term_length: int = Field(default=12, ge=1, description="Term in months")
    frequency: PremiumFrequency = PremiumFrequency.MONTHLY
    start_date: Optional[date] = None

    policy_number: Optional[str] = Field(None, max_length=30)
    beneficiaries: list[Beneficiary] = Field(default_factory=list)
    is_auto_renewable: bool = True


class Policy(BaseModel):
    """Issued policy record."""

    policy_id: UUID
    policy_number: str = Field(..., max_length=30)
    applicant_id: str

    name: str
    description: Optional[str] = None
    coverage: list[Coverage] = Field(..., min_length=1)
    beneficiaries: list[Beneficiary] = Field(default_factory=list)

    base_premium: Decimal = Field(..., ge=0)
    total_premium: Decimal = Field(..., ge=0)
    premium_schedule: list[Installment] = Field(default_factory=list)
    risk_multiplier: Decimal = Field(default=Decimal("1.0"), ge=Decimal("0.5"), le=Decimal("3.0"))

    term_length: int = Field(..., ge=1)
    start_date: date
    end_date: Optional[date] = None
    status: PolicyStatus = PolicyStatus.ACTIVE
    is_auto_renewable: bool = True
    renewal_date: Optional[date] = None
    cancellation_reason: Optional[str] = None

    total_claims: int = Field(default=0, ge=0)
    total_claim_amount: Decimal = Field(default=Decimal("0"), ge=0)

    created_at: datetime
    modified_at: Optional[datetime] = None

    @property
    def total_coverage(self) -> Decimal:
        """Sum of all coverage amounts; the ceiling for any single claim."""
        return sum((c.coverage_amount for c in self.coverage), Decimal("0"))

    @property
    def frequency(self) -> PremiumFrequency:
        if self.premium_schedule:
            return self.premium_schedule[0].frequency
        return PremiumFrequency.MONTHLY


class PremiumBreakdown(BaseModel):
    """How the total premium decomposes into base and risk adjustment."""

    base: Decimal
    risk_adjustment: Decimal
    total: Decimal


class PremiumQuote(BaseModel):
    """Priced offer for a policy request, before a policy is issued."""

    overall_risk_score: int
    risk_category: RiskCategory
    policy_type: PolicyType
    coverage_amount: Decimal
    base_premium: Decimal
    risk_multiplier: Decimal
    total_premium: Decimal
    frequency: PremiumFrequency
    term_length: int
    schedule: list[Installment]
    breakdown: PremiumBreakdown
