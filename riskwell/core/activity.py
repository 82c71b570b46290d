"""
Activity events for Riskwell.

Builders turn the records returned by the engines into `ActivityEvent`s,
and `describe` renders an event as a one-line audit message.
"""

from riskwell.domain.activity import ActivityEvent
from riskwell.domain.claim import Claim
from riskwell.domain.enums import ActivityKind
from riskwell.domain.policy import Policy
from riskwell.domain.risk_profile import RiskProfile


def risk_profile_assessed(risk_profile: RiskProfile, actor: str) -> ActivityEvent:
    details: dict = {"is_complete": risk_profile.is_complete}
    if risk_profile.assessment is not None:
        details["overall_risk_score"] = risk_profile.assessment.overall_risk_score
        details["risk_category"] = risk_profile.assessment.risk_category.value
    return ActivityEvent(
        kind=ActivityKind.RISK_PROFILE_ASSESSED,
        actor=actor,
        entity_id=risk_profile.applicant_id,
        occurred_at=risk_profile.last_updated,
        details=details,
    )


def policy_issued(policy: Policy, actor: str) -> ActivityEvent:
    return ActivityEvent(
        kind=ActivityKind.POLICY_ISSUED,
        actor=actor,
        entity_id=str(policy.policy_id),
        entity_number=policy.policy_number,
        occurred_at=policy.created_at,
        details={
            "policy_type": policy.coverage[0].type.value,
            "total_premium": str(policy.total_premium),
        },
    )


def policy_cancelled(policy: Policy, actor: str) -> ActivityEvent:
    return ActivityEvent(
        kind=ActivityKind.POLICY_CANCELLED,
        actor=actor,
        entity_id=str(policy.policy_id),
        entity_number=policy.policy_number,
        occurred_at=policy.modified_at or policy.created_at,
        details={"reason": policy.cancellation_reason},
    )


def policy_renewed(expired: Policy, renewal: Policy, actor: str) -> ActivityEvent:
    return ActivityEvent(
        kind=ActivityKind.POLICY_RENEWED,
        actor=actor,
        entity_id=str(renewal.policy_id),
        entity_number=renewal.policy_number,
        occurred_at=renewal.created_at,
        details={"renewed_from": expired.policy_number},
    )


def claim_submitted(claim: Claim, actor: str) -> ActivityEvent:
    return ActivityEvent(
        kind=ActivityKind.CLAIM_SUBMITTED,
        actor=actor,
        entity_id=str(claim.claim_id),
        entity_number=claim.claim_number,
        occurred_at=claim.created_at,
        details={"claimed_amount": str(claim.claimed_amount)},
    )


def claim_status_changed(previous: Claim, claim: Claim, actor: str) -> ActivityEvent:
    """Event for a transition; `previous` and `claim` are the records before and after."""
    latest = claim.status_history[-1]
    return ActivityEvent(
        kind=ActivityKind.CLAIM_STATUS_CHANGED,
        actor=actor,
        entity_id=str(claim.claim_id),
        entity_number=claim.claim_number,
        occurred_at=latest.changed_at,
        details={
            "from_status": previous.status.value,
            "to_status": claim.status.value,
        },
    )


def claim_assigned(claim: Claim, actor: str) -> ActivityEvent:
    return ActivityEvent(
        kind=ActivityKind.CLAIM_ASSIGNED,
        actor=actor,
        entity_id=str(claim.claim_id),
        entity_number=claim.claim_number,
        occurred_at=claim.modified_at or claim.created_at,
        details={"assignee": claim.assignee},
    )


def describe(event: ActivityEvent) -> str:
    """
    Render an event as a human-readable audit line.

    Raises:
        ValueError: If the event kind is not a known ActivityKind
    """
    kind = event.kind
    details = event.details
    ref = event.entity_number or event.entity_id

    if kind == ActivityKind.RISK_PROFILE_ASSESSED:
        if not details.get("is_complete"):
            return f"Risk profile for {ref} saved incomplete"
        return (
            f"Risk profile for {ref} assessed: score {details.get('overall_risk_score')} "
            f"({details.get('risk_category')})"
        )
    elif kind == ActivityKind.POLICY_ISSUED:
        return (
            f"Policy {ref} issued ({details.get('policy_type')}), "
            f"total premium {details.get('total_premium')}"
        )
    elif kind == ActivityKind.POLICY_CANCELLED:
        reason = details.get("reason")
        return f"Policy {ref} cancelled" + (f": {reason}" if reason else "")
    elif kind == ActivityKind.POLICY_RENEWED:
        return f"Policy {details.get('renewed_from')} renewed as {ref}"
    elif kind == ActivityKind.CLAIM_SUBMITTED:
        return f"Claim {ref} submitted for {details.get('claimed_amount')}"
    elif kind == ActivityKind.CLAIM_STATUS_CHANGED:
        return (
            f"Claim {ref} moved from {details.get('from_status')} "
            f"to {details.get('to_status')} by {event.actor}"
        )
    elif kind == ActivityKind.CLAIM_ASSIGNED:
        return f"Claim {ref} assigned to {details.get('assignee')}"
    raise ValueError(f"Unknown activity kind: {kind}")
