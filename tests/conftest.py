"""
Shared test fixtures for Riskwell tests.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import numpy as np
import pytest

from riskwell.config.models import (
    ClaimsConfig,
    FraudConfig,
    PremiumConfig,
    RiskScoringConfig,
)
from riskwell.core.claim_lifecycle import ClaimLifecycle
from riskwell.core.clock import FixedClock
from riskwell.core.fraud import FraudHeuristics
from riskwell.core.id_generator import IDGenerator
from riskwell.core.policy_lifecycle import PolicyUnderwriter
from riskwell.core.premium import PremiumCalculator
from riskwell.core.risk_scoring import RiskScoringEngine
from riskwell.domain.claim import Claim, ClaimCreate
from riskwell.domain.enums import (
    ClaimType,
    EmploymentStatus,
    Occupation,
    PolicyType,
)
from riskwell.domain.policy import Policy, PolicyRequest
from riskwell.domain.risk_profile import RiskProfile, RiskProfileInput


# =============================================================================
# Clock and RNG Fixtures
# =============================================================================


@pytest.fixture
def test_seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def test_rng(test_seed: int) -> np.random.Generator:
    """Deterministic random number generator."""
    return np.random.default_rng(test_seed)


@pytest.fixture
def clock() -> FixedClock:
    """Clock frozen at 2024-06-15 10:00 UTC."""
    return FixedClock(datetime(2024, 6, 15, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def id_generator(test_rng: np.random.Generator) -> IDGenerator:
    """Seeded ID generator."""
    return IDGenerator(test_rng, prefix_year=2024)


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def scoring_engine(clock: FixedClock) -> RiskScoringEngine:
    return RiskScoringEngine(RiskScoringConfig(), clock=clock)


@pytest.fixture
def calculator(clock: FixedClock) -> PremiumCalculator:
    return PremiumCalculator(PremiumConfig(), clock=clock)


@pytest.fixture
def lifecycle(clock: FixedClock, id_generator: IDGenerator) -> ClaimLifecycle:
    return ClaimLifecycle(clock=clock, id_generator=id_generator, config=ClaimsConfig())


@pytest.fixture
def heuristics() -> FraudHeuristics:
    return FraudHeuristics(FraudConfig())


@pytest.fixture
def underwriter(
    scoring_engine: RiskScoringEngine,
    calculator: PremiumCalculator,
    id_generator: IDGenerator,
    clock: FixedClock,
) -> PolicyUnderwriter:
    return PolicyUnderwriter(scoring_engine, calculator, id_generator, clock)


# =============================================================================
# Profile Fixtures
# =============================================================================


@pytest.fixture
def professional_profile() -> RiskProfileInput:
    """35-year-old employed professional earning 75k (multiplier 0.9, score 45)."""
    return RiskProfileInput(
        age=35,
        occupation=Occupation.PROFESSIONAL,
        annual_income=Decimal("75000"),
        employment_status=EmploymentStatus.EMPLOYED,
    )


@pytest.fixture
def neutral_profile() -> RiskProfileInput:
    """Profile whose premium multiplier is exactly 1.0."""
    return RiskProfileInput(
        age=30,
        occupation=Occupation.ADMINISTRATIVE,
        annual_income=Decimal("80000"),
        employment_status=EmploymentStatus.EMPLOYED,
    )


@pytest.fixture
def high_risk_profile() -> RiskProfileInput:
    """70-year-old hazardous-occupation smoker on a low income."""
    return RiskProfileInput(
        age=70,
        occupation=Occupation.HAZARDOUS,
        annual_income=Decimal("20000"),
        smoker=True,
        employment_status=EmploymentStatus.EMPLOYED,
    )


@pytest.fixture
def stored_profile(
    scoring_engine: RiskScoringEngine, professional_profile: RiskProfileInput
) -> RiskProfile:
    return scoring_engine.assess_profile("applicant-1", professional_profile)


# =============================================================================
# Policy and Claim Fixtures
# =============================================================================


@pytest.fixture
def policy_request() -> PolicyRequest:
    """Life cover of 100k starting 2024-01-01, paid monthly."""
    return PolicyRequest(
        policy_type=PolicyType.LIFE,
        coverage_amount=Decimal("100000"),
        start_date=date(2024, 1, 1),
    )


@pytest.fixture
def policy(
    underwriter: PolicyUnderwriter,
    stored_profile: RiskProfile,
    policy_request: PolicyRequest,
) -> Policy:
    """Active life policy with 100k total coverage."""
    return underwriter.issue(stored_profile, policy_request)


@pytest.fixture
def make_claim_input(policy: Policy):
    """Factory for claim submissions against the sample policy."""

    def _make(
        claimed_amount: str = "5000",
        incident_date: date = date(2024, 6, 1),
        claim_type: ClaimType = ClaimType.ACCIDENT,
    ) -> ClaimCreate:
        return ClaimCreate(
            policy_id=policy.policy_id,
            claimant_id="applicant-1",
            type=claim_type,
            description="Vehicle collision on the way to work",
            incident_date=incident_date,
            claimed_amount=Decimal(claimed_amount),
        )

    return _make


@pytest.fixture
def claim(
    lifecycle: ClaimLifecycle,
    policy: Policy,
    stored_profile: RiskProfile,
    make_claim_input,
) -> Claim:
    """Freshly submitted claim for 5000, incident two weeks before filing."""
    return lifecycle.create(
        policy, make_claim_input(), actor="applicant-1", risk_profile=stored_profile
    )
