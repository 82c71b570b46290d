"""
Error taxonomy for Riskwell.

Every failure is a local validation failure raised synchronously to the
caller. Nothing here is retried internally.
"""

from typing import Any


class UnderwritingError(Exception):
    """Base class for all underwriting and claim rule violations."""

    pass


class IncompleteProfileError(UnderwritingError):
    """Raised when a risk profile lacks fields required for pricing or claims."""

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = missing_fields
        super().__init__(
            "Complete risk profile required; missing: " + ", ".join(missing_fields)
        )


class InvalidPolicyTypeError(UnderwritingError):
    """Raised when a policy type has no entry in the premium rate table."""

    def __init__(self, policy_type: Any):
        self.policy_type = policy_type
        super().__init__(f"Invalid policy type: {policy_type}")


class InvalidFrequencyError(UnderwritingError):
    """Raised when a premium frequency is not one of the supported values."""

    def __init__(self, frequency: Any):
        self.frequency = frequency
        super().__init__(f"Invalid premium frequency: {frequency}")


class PolicyNotActiveError(UnderwritingError):
    """Raised when an operation requires an active policy."""

    def __init__(self, policy_number: str, status: str):
        self.policy_number = policy_number
        self.status = status
        super().__init__(f"Policy {policy_number} is {status}, must be active")


class PolicyMismatchError(UnderwritingError):
    """Raised when a claim submission names a different policy than the one checked."""

    def __init__(self, submitted_policy_id: Any, policy_id: Any):
        self.submitted_policy_id = submitted_policy_id
        self.policy_id = policy_id
        super().__init__(
            f"Claim was submitted for policy {submitted_policy_id}, not {policy_id}"
        )


class CoverageExceededError(UnderwritingError):
    """Raised when a claimed amount exceeds the policy's total coverage."""

    def __init__(self, claimed_amount: Any, total_coverage: Any):
        self.claimed_amount = claimed_amount
        self.total_coverage = total_coverage
        super().__init__(
            f"Claimed amount {claimed_amount} cannot exceed policy coverage of {total_coverage}"
        )


class InvalidTransitionError(UnderwritingError):
    """Raised when a claim status change is not in the transition table."""

    def __init__(self, current_status: Any, requested_status: Any):
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            f"Invalid status transition from {_value(current_status)} "
            f"to {_value(requested_status)}"
        )


class InvalidAmountError(UnderwritingError):
    """Raised when an approved or paid amount violates claim constraints."""

    pass


class InvalidIncidentDateError(UnderwritingError):
    """Raised when a claim's incident date is in the future or too old."""

    pass


class BeneficiaryAllocationError(UnderwritingError):
    """Raised when beneficiary percentages do not total 100."""

    pass


def _value(status: Any) -> Any:
    return getattr(status, "value", status)
