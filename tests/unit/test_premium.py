"""
Unit tests for the premium calculator.
"""

from datetime import date
from decimal import Decimal

import pytest

from riskwell.config.models import PolicyRate, PremiumConfig
from riskwell.core.premium import PremiumCalculator, to_decimal
from riskwell.domain.enums import PolicyType, PremiumFrequency
from riskwell.exceptions import InvalidFrequencyError, InvalidPolicyTypeError


class TestBasePremium:
    """Test flat fee plus per-unit rate pricing."""

    @pytest.mark.parametrize(
        "policy_type,coverage,expected",
        [
            (PolicyType.LIFE, "250000", "350"),
            (PolicyType.HEALTH, "100000", "350"),
            (PolicyType.DISABILITY, "100000", "125"),
            (PolicyType.PROPERTY, "100000", "230"),
        ],
    )
    def test_rate_table(self, calculator, policy_type, coverage, expected):
        assert calculator.base_premium(policy_type, Decimal(coverage)) == Decimal(expected)

    def test_policy_type_is_case_insensitive(self, calculator):
        assert calculator.base_premium("LIFE", Decimal("1000")) == Decimal("101")

    @pytest.mark.parametrize("policy_type", [PolicyType.LIABILITY, PolicyType.AUTO, "boat", ""])
    def test_unpriced_or_unknown_type_rejected(self, calculator, policy_type):
        with pytest.raises(InvalidPolicyTypeError):
            calculator.base_premium(policy_type, Decimal("1000"))

    def test_injected_rate_table(self):
        config = PremiumConfig(
            rates={PolicyType.AUTO: PolicyRate(flat_fee=Decimal("50"), per_unit_rate=Decimal("0.01"))}
        )
        calculator = PremiumCalculator(config)

        assert calculator.base_premium(PolicyType.AUTO, Decimal("20000")) == Decimal("250")
        with pytest.raises(InvalidPolicyTypeError):
            calculator.base_premium(PolicyType.LIFE, Decimal("20000"))


class TestTotalPremium:
    """Test risk adjustment of the base premium."""

    def test_total_is_exact_product(self, calculator):
        """No rounding is applied to the total premium."""
        total = calculator.total_premium(PolicyType.LIFE, Decimal("250000"), Decimal("1.37"))
        assert total == Decimal("350") * Decimal("1.37")

    def test_float_multiplier_converted_via_str(self, calculator):
        total = calculator.total_premium(PolicyType.LIFE, Decimal("250000"), 1.1)
        assert total == Decimal("385.0")

    def test_to_decimal(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal("2.50") == Decimal("2.50")
        assert to_decimal(3) == Decimal("3")


class TestSchedule:
    """Test installment schedule generation."""

    def test_monthly_life_policy(self, calculator):
        """250k life cover at multiplier 1.0 splits into 12 installments of 29.17."""
        total = calculator.total_premium(PolicyType.LIFE, Decimal("250000"), Decimal("1.0"))
        schedule = calculator.schedule(total, PremiumFrequency.MONTHLY, date(2024, 1, 1))

        assert len(schedule) == 12
        assert all(i.amount == Decimal("29.17") for i in schedule)
        assert abs(sum(i.amount for i in schedule) - total) <= Decimal("0.005") * 12

    @pytest.mark.parametrize(
        "frequency,count",
        [
            (PremiumFrequency.MONTHLY, 12),
            (PremiumFrequency.QUARTERLY, 4),
            (PremiumFrequency.SEMI_ANNUAL, 2),
            (PremiumFrequency.ANNUAL, 1),
        ],
    )
    def test_installment_counts(self, calculator, frequency, count):
        schedule = calculator.schedule(Decimal("1200"), frequency, date(2024, 1, 1))

        assert len(schedule) == count
        assert calculator.installments_for(frequency) == count
        assert all(i.frequency == frequency for i in schedule)
        assert all(not i.paid and i.paid_date is None for i in schedule)

    @pytest.mark.parametrize("total", ["100.01", "333.33", "0.05", "1234.567", "99999.99"])
    @pytest.mark.parametrize("frequency", list(PremiumFrequency))
    def test_rounded_sum_within_tolerance(self, calculator, total, frequency):
        total = Decimal(total)
        schedule = calculator.schedule(total, frequency, date(2024, 1, 1))

        assert abs(sum(i.amount for i in schedule) - total) <= Decimal("0.005") * len(schedule)

    def test_amounts_round_half_up(self, calculator):
        # 0.125 per installment
        schedule = calculator.schedule(Decimal("0.5"), PremiumFrequency.QUARTERLY, date(2024, 1, 1))
        assert schedule[0].amount == Decimal("0.13")

    def test_monthly_due_dates(self, calculator):
        schedule = calculator.schedule(Decimal("120"), PremiumFrequency.MONTHLY, date(2024, 1, 1))

        assert schedule[0].due_date == date(2024, 1, 1)
        assert schedule[1].due_date == date(2024, 2, 1)
        assert schedule[-1].due_date == date(2024, 12, 1)

    def test_quarterly_due_dates_clip_to_month_end(self, calculator):
        schedule = calculator.schedule(Decimal("400"), PremiumFrequency.QUARTERLY, date(2024, 1, 31))

        assert [i.due_date for i in schedule] == [
            date(2024, 1, 31),
            date(2024, 4, 30),
            date(2024, 7, 31),
            date(2024, 10, 31),
        ]

    def test_frequency_is_case_insensitive(self, calculator):
        schedule = calculator.schedule(Decimal("400"), "Semi-Annual", date(2024, 1, 1))
        assert len(schedule) == 2

    @pytest.mark.parametrize("frequency", ["weekly", "", "bi-monthly"])
    def test_unknown_frequency_rejected(self, calculator, frequency):
        """Unsupported frequencies are rejected rather than defaulted."""
        with pytest.raises(InvalidFrequencyError):
            calculator.schedule(Decimal("100"), frequency, date(2024, 1, 1))


class TestQuote:
    """Test quoting a request against an assessment."""

    def test_quote(self, calculator, scoring_engine, professional_profile):
        assessment = scoring_engine.score(professional_profile)
        quote = calculator.quote(
            assessment,
            "life",
            Decimal("250000"),
            frequency="quarterly",
            start_date=date(2024, 3, 1),
        )

        assert quote.base_premium == Decimal("350")
        assert quote.risk_multiplier == Decimal("0.9")
        assert quote.total_premium == Decimal("315.0")
        assert quote.breakdown.risk_adjustment == Decimal("-35.0")
        assert quote.breakdown.base + quote.breakdown.risk_adjustment == quote.total_premium
        assert quote.frequency == PremiumFrequency.QUARTERLY
        assert len(quote.schedule) == 4
        assert quote.schedule[0].amount == Decimal("78.75")
        assert quote.term_length == 12

    def test_quote_defaults_to_today(self, calculator, scoring_engine, neutral_profile, clock):
        quote = calculator.quote(scoring_engine.score(neutral_profile), PolicyType.HEALTH, Decimal("10000"))

        assert quote.frequency == PremiumFrequency.MONTHLY
        assert quote.schedule[0].due_date == clock.today()

    def test_quote_rejects_unknown_frequency(self, calculator, scoring_engine, neutral_profile):
        with pytest.raises(InvalidFrequencyError):
            calculator.quote(scoring_engine.score(neutral_profile), "life", Decimal("1000"), frequency="daily")
