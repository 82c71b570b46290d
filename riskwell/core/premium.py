"""
Premium calculator for Riskwell.

Prices a policy from its type, coverage amount and the applicant's risk
multiplier, and splits the total into an installment schedule.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

import structlog

from riskwell.config.models import FrequencyRule, PolicyRate, PremiumConfig
from riskwell.core.clock import Clock, SystemClock
from riskwell.domain.enums import PolicyType, PremiumFrequency
from riskwell.domain.policy import Installment, PremiumBreakdown, PremiumQuote
from riskwell.domain.risk_profile import RiskAssessment
from riskwell.exceptions import InvalidFrequencyError, InvalidPolicyTypeError
from riskwell.utils.time_conversion import due_dates

logger = structlog.get_logger()

CENT = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a number to Decimal, going through str so floats stay short."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class PremiumCalculator:
    """
    Calculates base premium, risk-adjusted premium and installment schedules.

    Base premium is `flat_fee + coverage_amount * per_unit_rate` from the
    configured rate table. The risk multiplier is applied as-is; bounding it
    is the scoring engine's job.

    Usage:
        calc = PremiumCalculator(config.premium)
        total = calc.total_premium("life", Decimal("250000"), Decimal("1.0"))
        schedule = calc.schedule(total, "monthly", date(2024, 1, 1))
    """

    def __init__(self, config: PremiumConfig | None = None, clock: Clock | None = None):
        """
        Initialize the calculator.

        Args:
            config: Rate table and frequencies (defaults if None)
            clock: Time source for default schedule start dates
        """
        self.config = config or PremiumConfig()
        self.clock = clock or SystemClock()

    def base_premium(self, policy_type: PolicyType | str, coverage_amount: Decimal) -> Decimal:
        """
        Premium before risk adjustment.

        Args:
            policy_type: Policy type enum or case-insensitive name
            coverage_amount: Insured amount

        Returns:
            Base premium (unrounded)

        Raises:
            InvalidPolicyTypeError: If the type is unknown or has no rate
        """
        rate = self._rate_for(policy_type)
        return rate.flat_fee + to_decimal(coverage_amount) * rate.per_unit_rate

    def total_premium(
        self,
        policy_type: PolicyType | str,
        coverage_amount: Decimal,
        risk_multiplier: Decimal,
    ) -> Decimal:
        """
        Risk-adjusted premium: exactly `base_premium * risk_multiplier`.

        Raises:
            InvalidPolicyTypeError: If the type is unknown or has no rate
        """
        return self.base_premium(policy_type, coverage_amount) * to_decimal(risk_multiplier)

    def installments_for(self, frequency: PremiumFrequency | str) -> int:
        """
        Number of installments per year for a frequency.

        Raises:
            InvalidFrequencyError: If the frequency is not supported
        """
        return self._frequency_rule(frequency)[1].installments

    def schedule(
        self,
        total_premium: Decimal,
        frequency: PremiumFrequency | str,
        start_date: date,
    ) -> list[Installment]:
        """
        Split a total premium into evenly sized installments.

        Each installment is rounded half-up to cents, so the rounded sum can
        differ from the total by at most half a cent per installment. Due
        dates start at `start_date` and step by whole calendar months.

        Args:
            total_premium: Amount to split
            frequency: Installment frequency
            start_date: Due date of the first installment

        Returns:
            List of unpaid installments

        Raises:
            InvalidFrequencyError: If the frequency is not supported
        """
        freq, rule = self._frequency_rule(frequency)
        amount = (to_decimal(total_premium) / rule.installments).quantize(CENT, rounding=ROUND_HALF_UP)

        schedule = [
            Installment(frequency=freq, amount=amount, due_date=due)
            for due in due_dates(start_date, rule.installments, rule.months_between)
        ]

        logger.debug(
            "premium_schedule_generated",
            frequency=freq.value,
            installments=len(schedule),
            installment_amount=str(amount),
        )
        return schedule

    def quote(
        self,
        assessment: RiskAssessment,
        policy_type: PolicyType | str,
        coverage_amount: Decimal,
        frequency: PremiumFrequency | str = PremiumFrequency.MONTHLY,
        start_date: date | None = None,
        term_length: int | None = None,
    ) -> PremiumQuote:
        """
        Price a policy request against an applicant's assessment.

        Args:
            assessment: Output of the risk scoring engine
            policy_type: Policy type
            coverage_amount: Requested coverage
            frequency: Installment frequency
            start_date: First due date (today if None)
            term_length: Term in months (configured default if None)

        Returns:
            PremiumQuote with schedule and breakdown
        """
        ptype = self._policy_type(policy_type)
        freq, _ = self._frequency_rule(frequency)
        multiplier = assessment.base_premium_multiplier

        base = self.base_premium(ptype, coverage_amount)
        total = self.total_premium(ptype, coverage_amount, multiplier)
        schedule = self.schedule(total, freq, start_date or self.clock.today())

        return PremiumQuote(
            overall_risk_score=assessment.overall_risk_score,
            risk_category=assessment.risk_category,
            policy_type=ptype,
            coverage_amount=to_decimal(coverage_amount),
            base_premium=base,
            risk_multiplier=multiplier,
            total_premium=total,
            frequency=freq,
            term_length=term_length or self.config.default_term_months,
            schedule=schedule,
            breakdown=PremiumBreakdown(
                base=base,
                risk_adjustment=(multiplier - 1) * base,
                total=total,
            ),
        )

    def _policy_type(self, policy_type: PolicyType | str) -> PolicyType:
        if isinstance(policy_type, PolicyType):
            return policy_type
        try:
            return PolicyType(str(policy_type).strip().lower())
        except ValueError:
            raise InvalidPolicyTypeError(policy_type) from None

    def _rate_for(self, policy_type: PolicyType | str) -> PolicyRate:
        ptype = self._policy_type(policy_type)
        rate = self.config.rates.get(ptype)
        if rate is None:
            raise InvalidPolicyTypeError(policy_type)
        return rate

    def _frequency_rule(
        self, frequency: PremiumFrequency | str
    ) -> tuple[PremiumFrequency, FrequencyRule]:
        try:
            freq = (
                frequency
                if isinstance(frequency, PremiumFrequency)
                else PremiumFrequency(str(frequency).strip().lower())
            )
        except ValueError:
            raise InvalidFrequencyError(frequency) from None
        rule = self.config.frequencies.get(freq)
        if rule is None:
            raise InvalidFrequencyError(frequency)
        return freq, rule
