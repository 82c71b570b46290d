"""
Claim lifecycle for Riskwell.

A finite state machine over claim status. Every operation returns a new
claim record; the input record is never modified, and the status history
only ever grows.

    submitted -> under-review | documentation-required | rejected
    under-review -> approved | rejected | documentation-required
    documentation-required -> under-review | rejected
    approved -> paid | rejected
    rejected -> closed
    paid -> closed
    closed (terminal)
"""

from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Mapping, Optional

import structlog

from riskwell.config.models import ClaimsConfig
from riskwell.core.clock import Clock, SystemClock
from riskwell.core.id_generator import IDGenerator
from riskwell.domain.claim import Claim, ClaimCreate, FraudIndicator, StatusHistoryEntry
from riskwell.domain.enums import ClaimStatus, PolicyStatus
from riskwell.domain.policy import Policy
from riskwell.domain.risk_profile import RiskProfile
from riskwell.exceptions import (
    CoverageExceededError,
    IncompleteProfileError,
    InvalidAmountError,
    InvalidIncidentDateError,
    InvalidTransitionError,
    PolicyMismatchError,
    PolicyNotActiveError,
)
from riskwell.utils.time_conversion import days_between

logger = structlog.get_logger()


TRANSITIONS: Mapping[ClaimStatus, frozenset[ClaimStatus]] = MappingProxyType(
    {
        ClaimStatus.SUBMITTED: frozenset(
            {
                ClaimStatus.UNDER_REVIEW,
                ClaimStatus.DOCUMENTATION_REQUIRED,
                ClaimStatus.REJECTED,
            }
        ),
        ClaimStatus.UNDER_REVIEW: frozenset(
            {
                ClaimStatus.APPROVED,
                ClaimStatus.REJECTED,
                ClaimStatus.DOCUMENTATION_REQUIRED,
            }
        ),
        ClaimStatus.DOCUMENTATION_REQUIRED: frozenset(
            {ClaimStatus.UNDER_REVIEW, ClaimStatus.REJECTED}
        ),
        ClaimStatus.APPROVED: frozenset({ClaimStatus.PAID, ClaimStatus.REJECTED}),
        ClaimStatus.REJECTED: frozenset({ClaimStatus.CLOSED}),
        ClaimStatus.PAID: frozenset({ClaimStatus.CLOSED}),
        ClaimStatus.CLOSED: frozenset(),
    }
)

def allowed_transitions(status: ClaimStatus) -> frozenset[ClaimStatus]:
    """Statuses reachable in one step from `status`."""
    return TRANSITIONS.get(status, frozenset())


def can_transition(current: ClaimStatus, requested: ClaimStatus) -> bool:
    return requested in allowed_transitions(current)


def is_terminal(status: ClaimStatus) -> bool:
    return not allowed_transitions(status)


class ClaimLifecycle:
    """
    Creates claims and moves them through the status state machine.

    The lifecycle holds no claim state of its own; callers load a claim,
    pass it in, and persist the returned record. Serialising concurrent
    writes to the same claim is the persistence layer's responsibility.

    Usage:
        lifecycle = ClaimLifecycle(clock=SystemClock(), id_generator=IDGenerator())
        claim = lifecycle.create(policy, claim_input, actor="user-1", risk_profile=profile)
        claim = lifecycle.transition(claim, ClaimStatus.UNDER_REVIEW, actor="uw-7")
    """

    def __init__(
        self,
        clock: Clock | None = None,
        id_generator: IDGenerator | None = None,
        config: ClaimsConfig | None = None,
    ):
        """
        Initialize the lifecycle.

        Args:
            clock: Time source for filing, rejection and payment dates
            id_generator: Claim number and UUID source
            config: Claim filing rules (defaults if None)
        """
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or IDGenerator()
        self.config = config or ClaimsConfig()

    def create(
        self,
        policy: Policy,
        claim_input: ClaimCreate,
        actor: str,
        *,
        risk_profile: RiskProfile,
    ) -> Claim:
        """
        File a new claim against a policy.

        Args:
            policy: Policy the claim is filed against
            claim_input: Claimant's submission
            actor: Who is filing
            risk_profile: Claimant's stored risk profile

        Returns:
            New claim in `submitted` with one history entry

        Raises:
            IncompleteProfileError: If the claimant's risk profile is incomplete
            PolicyMismatchError: If the submission names a different policy
            PolicyNotActiveError: If the policy is not active
            CoverageExceededError: If the claimed amount exceeds total coverage
            InvalidIncidentDateError: If the incident is in the future or too old
        """
        profile = risk_profile.profile
        if not profile.is_complete:
            raise IncompleteProfileError(profile.missing_fields)

        if claim_input.policy_id != policy.policy_id:
            raise PolicyMismatchError(claim_input.policy_id, policy.policy_id)

        if policy.status != PolicyStatus.ACTIVE:
            raise PolicyNotActiveError(policy.policy_number, policy.status.value)

        total_coverage = policy.total_coverage
        if claim_input.claimed_amount > total_coverage:
            raise CoverageExceededError(claim_input.claimed_amount, total_coverage)

        now = self.clock.now()
        report_date = now.date()
        age_days = days_between(claim_input.incident_date, report_date)
        if age_days < 0:
            raise InvalidIncidentDateError(
                f"Incident date {claim_input.incident_date} cannot be in the future"
            )
        if age_days > self.config.max_incident_age_days:
            raise InvalidIncidentDateError(
                f"Incident date {claim_input.incident_date} is more than "
                f"{self.config.max_incident_age_days} days before filing"
            )

        claim = Claim(
            claim_id=self.id_generator.generate_uuid(),
            claim_number=self.id_generator.generate_claim_number(),
            policy_id=policy.policy_id,
            claimant_id=claim_input.claimant_id,
            type=claim_input.type,
            description=claim_input.description,
            incident_date=claim_input.incident_date,
            report_date=report_date,
            claimed_amount=claim_input.claimed_amount,
            status=ClaimStatus.SUBMITTED,
            status_history=(
                StatusHistoryEntry(
                    status=ClaimStatus.SUBMITTED,
                    changed_by=actor,
                    changed_at=now,
                    notes="Claim submitted",
                ),
            ),
            created_by=actor,
            created_at=now,
        )

        logger.info(
            "claim_created",
            claim_number=claim.claim_number,
            policy_number=policy.policy_number,
            claimed_amount=str(claim.claimed_amount),
        )
        return claim

    def transition(
        self,
        claim: Claim,
        new_status: ClaimStatus | str,
        actor: str,
        *,
        notes: Optional[str] = None,
        approved_amount: Optional[Decimal] = None,
        rejection_reason: Optional[str] = None,
    ) -> Claim:
        """
        Move a claim to a new status.

        Args:
            claim: Current claim record
            new_status: Requested status
            actor: Who is making the change
            notes: Free-text note for the history entry
            approved_amount: Amount approved (only used when approving)
            rejection_reason: Reason recorded when rejecting

        Returns:
            New claim record with one more history entry

        Raises:
            InvalidTransitionError: If the change is not in the transition table
            InvalidAmountError: If the approved amount is not a number in
                [0, claimed amount], or payment is requested with nothing approved
        """
        try:
            target = ClaimStatus(new_status)
        except ValueError:
            raise InvalidTransitionError(claim.status, new_status) from None

        if not can_transition(claim.status, target):
            logger.warning(
                "claim_transition_rejected",
                claim_number=claim.claim_number,
                from_status=claim.status.value,
                to_status=target.value,
            )
            raise InvalidTransitionError(claim.status, target)

        now = self.clock.now()
        updates: dict = {
            "status": target,
            "updated_by": actor,
            "modified_at": now,
        }
        if notes:
            updates["investigation_notes"] = notes

        if target == ClaimStatus.APPROVED and approved_amount is not None:
            try:
                approved = Decimal(str(approved_amount))
            except InvalidOperation:
                raise InvalidAmountError(
                    f"Approved amount {approved_amount!r} is not a number"
                ) from None
            if not approved.is_finite() or approved < 0 or approved > claim.claimed_amount:
                raise InvalidAmountError(
                    f"Approved amount {approved} must be between 0 and the "
                    f"claimed amount {claim.claimed_amount}"
                )
            updates["approved_amount"] = approved

        elif target == ClaimStatus.REJECTED:
            if not rejection_reason:
                logger.warning("claim_rejected_without_reason", claim_number=claim.claim_number)
            updates["rejection_reason"] = rejection_reason
            updates["rejection_date"] = now

        elif target == ClaimStatus.PAID:
            if claim.approved_amount is None:
                raise InvalidAmountError(
                    f"Claim {claim.claim_number} has no approved amount to pay"
                )
            updates["paid_amount"] = claim.approved_amount
            updates["payment_date"] = now

        entry = StatusHistoryEntry(
            status=target,
            changed_by=actor,
            changed_at=now,
            notes=notes or f"Status changed to {target.value}",
        )
        updates["status_history"] = claim.status_history + (entry,)

        logger.info(
            "claim_transitioned",
            claim_number=claim.claim_number,
            from_status=claim.status.value,
            to_status=target.value,
            actor=actor,
        )
        return claim.model_copy(update=updates)

    def assign(self, claim: Claim, assignee: str, actor: str) -> Claim:
        """Record the underwriter reviewing a claim; status is unchanged."""
        return claim.model_copy(
            update={
                "assignee": assignee,
                "updated_by": actor,
                "modified_at": self.clock.now(),
            }
        )

    def record_fraud_indicators(self, claim: Claim, indicators: list[FraudIndicator]) -> Claim:
        """Attach advisory fraud indicators; status and history are untouched."""
        return claim.model_copy(update={"fraud_indicators": list(indicators)})
