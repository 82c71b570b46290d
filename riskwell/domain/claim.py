"""
Claims domain models for Riskwell.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from riskwell.domain.enums import ClaimStatus, ClaimType, FraudSeverity


class StatusHistoryEntry(BaseModel):
    """One entry in a claim's append-only audit trail."""

    status: ClaimStatus
    changed_by: str
    changed_at: datetime
    notes: Optional[str] = None


class FraudIndicator(BaseModel):
    """Advisory signal that a claim merits manual scrutiny."""

    indicator: str
    severity: FraudSeverity
    description: str


class ClaimCreate(BaseModel):
    """Claimant's submission, before validation against the policy."""

    policy_id: UUID
    claimant_id: str

    type: ClaimType
    description: str = Field(..., min_length=10, max_length=1000)
    incident_date: date

    claimed_amount: Decimal = Field(..., gt=0)


class Claim(BaseModel):
    """Full claim record."""

    claim_id: UUID
    claim_number: str = Field(..., max_length=30)

    policy_id: UUID
    claimant_id: str

    type: ClaimType
    description: str
    incident_date: date
    report_date: date

    claimed_amount: Decimal = Field(..., gt=0)
    approved_amount: Optional[Decimal] = Field(None, ge=0)
    paid_amount: Decimal = Field(default=Decimal("0"), ge=0)
    payment_date: Optional[datetime] = None

    status: ClaimStatus = ClaimStatus.SUBMITTED
    status_history: tuple[StatusHistoryEntry, ...] = ()

    assignee: Optional[str] = None
    investigation_notes: Optional[str] = None
    fraud_indicators: list[FraudIndicator] = Field(default_factory=list)

    rejection_reason: Optional[str] = Field(None, max_length=500)
    rejection_date: Optional[datetime] = None

    created_by: str
    updated_by: Optional[str] = None
    created_at: datetime
    modified_at: Optional[datetime] = None
