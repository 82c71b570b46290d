"""
Fraud heuristics for Riskwell.

Produces advisory, severity-tagged indicators for a claim. Indicators never
block or alter a claim's status; they only flag it for manual review.
"""

from decimal import Decimal

import structlog
from pydantic import BaseModel

from riskwell.config.models import FraudConfig
from riskwell.domain.claim import Claim, FraudIndicator
from riskwell.domain.enums import FraudSeverity
from riskwell.domain.policy import Policy
from riskwell.utils.time_conversion import days_between

logger = structlog.get_logger()

RECENT_INCIDENT = "recent_incident"
HIGH_COVERAGE_UTILIZATION = "high_coverage_utilization"
FREQUENT_CLAIMANT = "frequent_claimant"


class FraudAssessment(BaseModel):
    """Indicators for one claim and the overall fraud risk they imply."""

    claim_number: str
    indicators: list[FraudIndicator]
    risk_level: FraudSeverity


def overall_risk_level(indicators: list[FraudIndicator]) -> FraudSeverity:
    """Highest severity among the indicators, or low when there are none."""
    severities = {i.severity for i in indicators}
    if FraudSeverity.HIGH in severities:
        return FraudSeverity.HIGH
    if FraudSeverity.MEDIUM in severities:
        return FraudSeverity.MEDIUM
    return FraudSeverity.LOW


class FraudHeuristics:
    """
    Rule-based fraud screening.

    Every rule is evaluated independently and all that fire are reported.
    The analysis reads only its arguments, so repeated calls with the same
    inputs return identical indicators.

    Usage:
        heuristics = FraudHeuristics(config.fraud)
        indicators = heuristics.analyze(claim, policy, claimant_history)
    """

    def __init__(self, config: FraudConfig | None = None):
        """
        Initialize the heuristics.

        Args:
            config: Rule thresholds (defaults if None)
        """
        self.config = config or FraudConfig()

    def analyze(
        self,
        claim: Claim,
        policy: Policy,
        claimant_history: list[Claim],
    ) -> list[FraudIndicator]:
        """
        Evaluate all fraud rules for a claim.

        Args:
            claim: Claim under review
            policy: Policy the claim was filed against
            claimant_history: Claimant's claims on record (may include `claim`)

        Returns:
            Triggered indicators, in rule order
        """
        indicators: list[FraudIndicator] = []

        filing_gap = days_between(claim.incident_date, claim.report_date)
        if filing_gap < self.config.recent_incident_days:
            indicators.append(
                FraudIndicator(
                    indicator=RECENT_INCIDENT,
                    severity=FraudSeverity.LOW,
                    description="Claim filed shortly after incident",
                )
            )

        total_coverage = policy.total_coverage
        if total_coverage > 0:
            utilization = claim.claimed_amount / total_coverage
            if utilization > self.config.high_utilization_ratio:
                percentage = utilization * Decimal("100")
                indicators.append(
                    FraudIndicator(
                        indicator=HIGH_COVERAGE_UTILIZATION,
                        severity=FraudSeverity.MEDIUM,
                        description=f"Claim uses {percentage:.1f}% of policy coverage",
                    )
                )

        other_claims = [c for c in claimant_history if c.claim_id != claim.claim_id]
        if len(other_claims) > self.config.frequent_claimant_threshold:
            indicators.append(
                FraudIndicator(
                    indicator=FREQUENT_CLAIMANT,
                    severity=FraudSeverity.MEDIUM,
                    description=f"Claimant has filed {len(other_claims) + 1} claims total",
                )
            )

        if indicators:
            logger.info(
                "fraud_indicators_raised",
                claim_number=claim.claim_number,
                indicators=[i.indicator for i in indicators],
            )
        return indicators

    def assess(
        self,
        claim: Claim,
        policy: Policy,
        claimant_history: list[Claim],
    ) -> FraudAssessment:
        """Indicators plus the overall fraud risk level."""
        indicators = self.analyze(claim, policy, claimant_history)
        return FraudAssessment(
            claim_number=claim.claim_number,
            indicators=indicators,
            risk_level=overall_risk_level(indicators),
        )
