"""
Enumeration types for Riskwell domain models.
"""

from enum import Enum


class Occupation(str, Enum):
    """Applicant occupation group."""
    PROFESSIONAL = "professional"
    ADMINISTRATIVE = "administrative"
    MANUAL = "manual"
    HAZARDOUS = "hazardous"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    TECHNOLOGY = "technology"
    FINANCE = "finance"
    UNEMPLOYED = "unemployed"


class EmploymentStatus(str, Enum):
    """Applicant employment status."""
    EMPLOYED = "employed"
    SELF_EMPLOYED = "self-employed"
    UNEMPLOYED = "unemployed"
    RETIRED = "retired"
    STUDENT = "student"


class RiskZone(str, Enum):
    """Geographic risk zone of the applicant's location."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RiskLevel(str, Enum):
    """Qualitative level attached to a single risk factor."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very-high"


class RiskCategory(str, Enum):
    """Overall risk category derived from the 0-100 risk score."""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very-high"


class FactorCategory(str, Enum):
    """Grouping tag for risk factors."""
    OCCUPATION = "occupation"
    HEALTH = "health"
    LIFESTYLE = "lifestyle"
    FINANCIAL = "financial"
    GEOGRAPHIC = "geographic"


class PolicyType(str, Enum):
    """
    Coverage type.

    Only life, health, disability and property carry premium rates;
    liability and auto exist on coverage records but cannot be priced.
    """
    LIFE = "life"
    HEALTH = "health"
    DISABILITY = "disability"
    PROPERTY = "property"
    LIABILITY = "liability"
    AUTO = "auto"


class PolicyStatus(str, Enum):
    """Policy status enumeration."""
    DRAFT = "draft"
    ACTIVE = "active"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    LAPSED = "lapsed"


class PremiumFrequency(str, Enum):
    """How often premium installments fall due."""
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi-annual"
    ANNUAL = "annual"


class ClaimType(str, Enum):
    """Type of claim."""
    ACCIDENT = "accident"
    ILLNESS = "illness"
    PROPERTY_DAMAGE = "property-damage"
    THEFT = "theft"
    LIABILITY = "liability"
    DISABILITY = "disability"
    DEATH = "death"
    OTHER = "other"


class ClaimStatus(str, Enum):
    """Claim processing status."""
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under-review"
    DOCUMENTATION_REQUIRED = "documentation-required"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAID = "paid"
    CLOSED = "closed"


class FraudSeverity(str, Enum):
    """Severity of a fraud indicator, also used as a claim's overall fraud risk."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class BeneficiaryRelationship(str, Enum):
    """Beneficiary relationship to the policyholder."""
    SPOUSE = "spouse"
    CHILD = "child"
    PARENT = "parent"
    SIBLING = "sibling"
    OTHER = "other"


class ActivityKind(str, Enum):
    """
    Closed set of auditable events raised by policy and claim operations.
    """
    RISK_PROFILE_ASSESSED = "risk_profile_assessed"
    POLICY_ISSUED = "policy_issued"
    POLICY_CANCELLED = "policy_cancelled"
    POLICY_RENEWED = "policy_renewed"
    CLAIM_SUBMITTED = "claim_submitted"
    CLAIM_STATUS_CHANGED = "claim_status_changed"
    CLAIM_ASSIGNED = "claim_assigned"
