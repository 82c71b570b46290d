"""
Policy lifecycle for Riskwell.

Issues, cancels and renews policies. Derived fields (premiums, schedule,
end date, policy number) are computed here when a record is built, and
every operation returns a new record.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

import structlog

from riskwell.core.clock import Clock, SystemClock
from riskwell.core.id_generator import IDGenerator
from riskwell.core.premium import PremiumCalculator
from riskwell.core.risk_scoring import RiskScoringEngine
from riskwell.domain.claim import Claim
from riskwell.domain.enums import PolicyStatus
from riskwell.domain.policy import Beneficiary, Coverage, Policy, PolicyRequest
from riskwell.domain.risk_profile import RiskProfile
from riskwell.exceptions import (
    BeneficiaryAllocationError,
    IncompleteProfileError,
    PolicyNotActiveError,
)
from riskwell.utils.time_conversion import add_months

logger = structlog.get_logger()

FULL_ALLOCATION = Decimal("100")


class PolicyUnderwriter:
    """
    Turns assessed applicants into priced policies and manages their status.

    Usage:
        underwriter = PolicyUnderwriter(engine, calculator, id_generator, clock)
        policy = underwriter.issue(risk_profile, request)
        expired, renewal = underwriter.renew(policy)
    """

    def __init__(
        self,
        scoring_engine: RiskScoringEngine | None = None,
        calculator: PremiumCalculator | None = None,
        id_generator: IDGenerator | None = None,
        clock: Clock | None = None,
    ):
        self.clock = clock or SystemClock()
        self.scoring_engine = scoring_engine or RiskScoringEngine(clock=self.clock)
        self.calculator = calculator or PremiumCalculator(clock=self.clock)
        self.id_generator = id_generator or IDGenerator()

    def issue(self, risk_profile: RiskProfile, request: PolicyRequest) -> Policy:
        """
        Issue a new active policy.

        Args:
            risk_profile: Applicant's stored risk profile
            request: Requested coverage and terms

        Returns:
            Active policy with premiums and installment schedule

        Raises:
            IncompleteProfileError: If the profile is incomplete
            BeneficiaryAllocationError: If beneficiary shares do not total 100
            InvalidPolicyTypeError: If the policy type has no rate
        """
        profile = risk_profile.profile
        if not profile.is_complete:
            raise IncompleteProfileError(profile.missing_fields)

        self._check_beneficiaries(request.beneficiaries)

        assessment = risk_profile.assessment or self.scoring_engine.score(profile)
        multiplier = assessment.base_premium_multiplier
        start_date = request.start_date or self.clock.today()

        base = self.calculator.base_premium(request.policy_type, request.coverage_amount)
        total = self.calculator.total_premium(
            request.policy_type, request.coverage_amount, multiplier
        )
        schedule = self.calculator.schedule(total, request.frequency, start_date)

        policy = Policy(
            policy_id=self.id_generator.generate_uuid(),
            policy_number=request.policy_number or self.id_generator.generate_policy_number(),
            applicant_id=risk_profile.applicant_id,
            name=request.name or f"{request.policy_type.value.title()} Insurance Policy",
            description=request.description,
            coverage=[
                Coverage(
                    type=request.policy_type,
                    coverage_amount=request.coverage_amount,
                    deductible=request.deductible,
                )
            ],
            beneficiaries=list(request.beneficiaries),
            base_premium=base,
            total_premium=total,
            premium_schedule=schedule,
            risk_multiplier=multiplier,
            term_length=request.term_length,
            start_date=start_date,
            end_date=add_months(start_date, request.term_length),
            status=PolicyStatus.ACTIVE,
            is_auto_renewable=request.is_auto_renewable,
            created_at=self.clock.now(),
        )

        logger.info(
            "policy_issued",
            policy_number=policy.policy_number,
            applicant_id=policy.applicant_id,
            policy_type=request.policy_type.value,
            total_premium=str(total),
        )
        return policy

    def cancel(self, policy: Policy, reason: Optional[str] = None) -> Policy:
        """
        Cancel an active policy, ending it today.

        Raises:
            PolicyNotActiveError: If the policy is not active
        """
        self._require_active(policy)
        now = self.clock.now()

        logger.info("policy_cancelled", policy_number=policy.policy_number, reason=reason)
        return policy.model_copy(
            update={
                "status": PolicyStatus.CANCELLED,
                "end_date": now.date(),
                "cancellation_reason": reason,
                "modified_at": now,
            }
        )

    def renew(self, policy: Policy, term_length: Optional[int] = None) -> tuple[Policy, Policy]:
        """
        Renew an active policy.

        The original is marked expired and a new active policy is created
        with the same coverage and premiums, a fresh number, and a schedule
        starting today.

        Args:
            policy: Policy to renew
            term_length: New term in months (original term if None)

        Returns:
            (expired original, new policy)

        Raises:
            PolicyNotActiveError: If the policy is not active
        """
        self._require_active(policy)
        now = self.clock.now()
        today = now.date()
        term = term_length or policy.term_length

        expired = policy.model_copy(
            update={
                "status": PolicyStatus.EXPIRED,
                "renewal_date": today,
                "modified_at": now,
            }
        )

        renewal = Policy(
            policy_id=self.id_generator.generate_uuid(),
            policy_number=self.id_generator.generate_policy_number(),
            applicant_id=policy.applicant_id,
            name=policy.name,
            description=policy.description,
            coverage=[c.model_copy() for c in policy.coverage],
            beneficiaries=[b.model_copy() for b in policy.beneficiaries],
            base_premium=policy.base_premium,
            total_premium=policy.total_premium,
            premium_schedule=self.calculator.schedule(
                policy.total_premium, policy.frequency, today
            ),
            risk_multiplier=policy.risk_multiplier,
            term_length=term,
            start_date=today,
            end_date=add_months(today, term),
            status=PolicyStatus.ACTIVE,
            is_auto_renewable=policy.is_auto_renewable,
            created_at=now,
        )

        logger.info(
            "policy_renewed",
            policy_number=policy.policy_number,
            renewal_number=renewal.policy_number,
        )
        return expired, renewal

    def record_claim(self, policy: Policy, claim: Claim) -> Policy:
        """Count a newly filed claim against the policy's claim totals."""
        return policy.model_copy(
            update={
                "total_claims": policy.total_claims + 1,
                "total_claim_amount": policy.total_claim_amount + claim.claimed_amount,
                "modified_at": self.clock.now(),
            }
        )

    def mark_installment_paid(
        self, policy: Policy, index: int, paid_date: Optional[date] = None
    ) -> Policy:
        """
        Mark one installment of the premium schedule as paid.

        Raises:
            IndexError: If the schedule has no installment at `index`
        """
        if not 0 <= index < len(policy.premium_schedule):
            raise IndexError(
                f"Policy {policy.policy_number} has no installment at index {index}"
            )

        schedule = list(policy.premium_schedule)
        schedule[index] = schedule[index].model_copy(
            update={"paid": True, "paid_date": paid_date or self.clock.today()}
        )
        return policy.model_copy(
            update={"premium_schedule": schedule, "modified_at": self.clock.now()}
        )

    def _require_active(self, policy: Policy) -> None:
        if policy.status != PolicyStatus.ACTIVE:
            raise PolicyNotActiveError(policy.policy_number, policy.status.value)

    def _check_beneficiaries(self, beneficiaries: list[Beneficiary]) -> None:
        if not beneficiaries:
            return
        total = sum((b.percentage for b in beneficiaries), Decimal("0"))
        if total != FULL_ALLOCATION:
            raise BeneficiaryAllocationError(
                f"Beneficiary percentages must total 100, got {total}"
            )
