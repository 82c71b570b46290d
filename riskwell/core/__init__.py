"""
Core engines for Riskwell.

Provides:
- Risk scoring and premium calculation
- Claim and policy lifecycles
- Fraud heuristics and activity events
"""

from riskwell.core.clock import Clock, FixedClock, SystemClock
from riskwell.core.id_generator import IDGenerator
from riskwell.core.risk_scoring import RiskScoringEngine
from riskwell.core.premium import PremiumCalculator
from riskwell.core.claim_lifecycle import (
    TRANSITIONS,
    ClaimLifecycle,
    allowed_transitions,
    can_transition,
    is_terminal,
)
from riskwell.core.fraud import FraudAssessment, FraudHeuristics, overall_risk_level
from riskwell.core.policy_lifecycle import PolicyUnderwriter

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "IDGenerator",
    "RiskScoringEngine",
    "PremiumCalculator",
    "TRANSITIONS",
    "ClaimLifecycle",
    "allowed_transitions",
    "can_transition",
    "is_terminal",
    "FraudAssessment",
    "FraudHeuristics",
    "overall_risk_level",
    "PolicyUnderwriter",
]
