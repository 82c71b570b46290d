"""
Domain models for Riskwell.

Pydantic models representing the core business entities.
"""

from riskwell.domain.enums import (
    Occupation,
    EmploymentStatus,
    RiskZone,
    RiskLevel,
    RiskCategory,
    FactorCategory,
    PolicyType,
    PolicyStatus,
    PremiumFrequency,
    ClaimType,
    ClaimStatus,
    FraudSeverity,
    BeneficiaryRelationship,
    ActivityKind,
)
from riskwell.domain.risk_profile import (
    Location,
    RiskProfileInput,
    RiskFactor,
    RiskAssessment,
    RiskProfile,
    CategoryBreakdown,
    Recommendation,
    RiskAnalysis,
)
from riskwell.domain.policy import (
    Coverage,
    Installment,
    Beneficiary,
    PolicyRequest,
    Policy,
    PremiumBreakdown,
    PremiumQuote,
)
from riskwell.domain.claim import (
    StatusHistoryEntry,
    FraudIndicator,
    ClaimCreate,
    Claim,
)
from riskwell.domain.activity import ActivityEvent

__all__ = [
    # Enums
    "Occupation",
    "EmploymentStatus",
    "RiskZone",
    "RiskLevel",
    "RiskCategory",
    "FactorCategory",
    "PolicyType",
    "PolicyStatus",
    "PremiumFrequency",
    "ClaimType",
    "ClaimStatus",
    "FraudSeverity",
    "BeneficiaryRelationship",
    "ActivityKind",
    # Risk profile
    "Location",
    "RiskProfileInput",
    "RiskFactor",
    "RiskAssessment",
    "RiskProfile",
    "CategoryBreakdown",
    "Recommendation",
    "RiskAnalysis",
    # Policy
    "Coverage",
    "Installment",
    "Beneficiary",
    "PolicyRequest",
    "Policy",
    "PremiumBreakdown",
    "PremiumQuote",
    # Claims
    "StatusHistoryEntry",
    "FraudIndicator",
    "ClaimCreate",
    "Claim",
    # Activity
    "ActivityEvent",
]
