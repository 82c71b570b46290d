"""
Unit tests for the risk scoring engine.

Tests factor extraction, the additive score, categories, the multiplicative
premium multiplier and profile completeness handling.
"""

from datetime import datetime, timezone
from decimal import Decimal
from itertools import product

import pytest

from riskwell.config.models import MultiplierRules, RiskScoringConfig, ScoreRules
from riskwell.core.risk_scoring import RiskScoringEngine
from riskwell.domain.enums import (
    EmploymentStatus,
    FactorCategory,
    Occupation,
    RiskCategory,
    RiskLevel,
    RiskZone,
)
from riskwell.domain.risk_profile import Location, RiskProfileInput
from riskwell.exceptions import IncompleteProfileError


def _profile(**overrides) -> RiskProfileInput:
    fields = {
        "age": 30,
        "occupation": Occupation.ADMINISTRATIVE,
        "annual_income": Decimal("80000"),
        "employment_status": EmploymentStatus.EMPLOYED,
    }
    fields.update(overrides)
    return RiskProfileInput(**fields)


@pytest.fixture
def low_risk_profile() -> RiskProfileInput:
    """Tech worker with high income, excellent credit in a low-risk zone."""
    return _profile(
        occupation=Occupation.TECHNOLOGY,
        annual_income=Decimal("250000"),
        credit_score=800,
        location=Location(country="NZ", city="Wellington", risk_zone=RiskZone.LOW),
    )


class TestCompleteness:
    """Test required-field handling."""

    def test_complete_profile(self, professional_profile):
        assert RiskScoringEngine.is_complete(professional_profile)

    def test_missing_fields_are_listed(self):
        profile = RiskProfileInput(age=30)
        assert profile.missing_fields == ["occupation", "annual_income", "employment_status"]
        assert not RiskScoringEngine.is_complete(profile)

    def test_score_rejects_incomplete_profile(self, scoring_engine):
        """Scoring an incomplete profile raises with the missing fields."""
        with pytest.raises(IncompleteProfileError) as exc_info:
            scoring_engine.score(RiskProfileInput(age=30, occupation=Occupation.MANUAL))

        assert exc_info.value.missing_fields == ["annual_income", "employment_status"]

    def test_multiplier_rejects_incomplete_profile(self, scoring_engine):
        with pytest.raises(IncompleteProfileError):
            scoring_engine.multiplier(RiskProfileInput(occupation=Occupation.MANUAL))

    def test_assess_incomplete_profile_stores_without_assessment(self, scoring_engine):
        """Partial submissions are kept but carry no assessment."""
        stored = scoring_engine.assess_profile("applicant-9", RiskProfileInput(age=40))

        assert stored.is_complete is False
        assert stored.assessment is None


class TestScenarios:
    """End-to-end scoring of reference applicants."""

    def test_high_risk_applicant(self, scoring_engine, high_risk_profile):
        """Age 70, hazardous, 20k income, smoker: score and multiplier saturate."""
        assessment = scoring_engine.score(high_risk_profile)

        assert assessment.overall_risk_score == 100
        assert assessment.risk_category == RiskCategory.VERY_HIGH
        assert assessment.base_premium_multiplier == Decimal("3.0")

    def test_professional_applicant(self, scoring_engine, professional_profile):
        assessment = scoring_engine.score(professional_profile)

        assert assessment.overall_risk_score == 45
        assert assessment.risk_category == RiskCategory.MODERATE
        assert assessment.base_premium_multiplier == Decimal("0.9")

    def test_low_risk_applicant(self, scoring_engine, low_risk_profile):
        assessment = scoring_engine.score(low_risk_profile)

        assert assessment.overall_risk_score == 10
        assert assessment.risk_category == RiskCategory.LOW
        # 1.0 * 0.8 * 0.8 * 0.9 * 0.9
        assert assessment.base_premium_multiplier == Decimal("0.5184")


class TestRiskFactors:
    """Test itemised factor extraction."""

    def test_professional_factors(self, scoring_engine, professional_profile):
        factors = scoring_engine.risk_factors(professional_profile)

        assert [f.factor for f in factors] == ["age", "occupation_type"]
        assert factors[0].level == RiskLevel.LOW
        assert factors[1].multiplier == Decimal("0.9")

    def test_hazardous_occupation_is_very_high(self, scoring_engine):
        factors = scoring_engine.risk_factors(_profile(occupation=Occupation.HAZARDOUS))
        occupation = next(f for f in factors if f.factor == "occupation_type")

        assert occupation.level == RiskLevel.VERY_HIGH
        assert occupation.multiplier == Decimal("2.0")

    @pytest.mark.parametrize(
        "age,level",
        [(45, RiskLevel.LOW), (46, RiskLevel.MEDIUM), (60, RiskLevel.MEDIUM), (61, RiskLevel.HIGH)],
    )
    def test_age_factor_levels(self, scoring_engine, age, level):
        factors = scoring_engine.risk_factors(_profile(age=age))
        assert factors[0].factor == "age"
        assert factors[0].level == level

    @pytest.mark.parametrize(
        "bmi,level,multiplier",
        [
            (22.0, RiskLevel.LOW, Decimal("1.0")),
            (27.0, RiskLevel.MEDIUM, Decimal("1.1")),
            (32.0, RiskLevel.HIGH, Decimal("1.3")),
            (17.0, RiskLevel.HIGH, Decimal("1.3")),
        ],
    )
    def test_bmi_factor(self, scoring_engine, bmi, level, multiplier):
        """A BMI factor is reported whenever BMI is known."""
        factors = scoring_engine.risk_factors(_profile(bmi=bmi))
        bmi_factor = next(f for f in factors if f.factor == "bmi")

        assert bmi_factor.level == level
        assert bmi_factor.multiplier == multiplier

    def test_flag_factors(self, scoring_engine):
        factors = scoring_engine.risk_factors(
            _profile(
                has_chronic_illness=True,
                smoker=True,
                has_dangerous_hobbies=True,
                has_bankruptcy_history=True,
            )
        )
        names = {f.factor for f in factors}

        assert {"chronic_illness", "smoking", "dangerous_hobbies", "bankruptcy_history"} <= names

    def test_credit_and_zone_factors(self, scoring_engine):
        factors = scoring_engine.risk_factors(
            _profile(credit_score=600, location=Location(risk_zone=RiskZone.HIGH))
        )
        by_name = {f.factor: f for f in factors}

        assert by_name["credit_score"].level == RiskLevel.MEDIUM
        assert by_name["credit_score"].category == FactorCategory.FINANCIAL
        assert by_name["location_risk"].level == RiskLevel.HIGH
        assert by_name["location_risk"].multiplier == Decimal("1.3")

    def test_factor_multipliers_within_range(self, scoring_engine, high_risk_profile):
        for factor in scoring_engine.risk_factors(high_risk_profile):
            assert Decimal("0.5") <= factor.multiplier <= Decimal("2.0")


class TestRiskScore:
    """Test the additive 0-100 score."""

    @pytest.mark.parametrize(
        "age,expected",
        [(22, 50), (30, 45), (45, 55), (59, 55), (60, 65)],
    )
    def test_age_points(self, scoring_engine, age, expected):
        assert scoring_engine.risk_score(_profile(age=age)) == expected

    def test_zero_income_counts_as_low_income(self, scoring_engine):
        assert scoring_engine.risk_score(_profile(annual_income=Decimal("0"))) == 55

    def test_high_income_reduces_score(self, scoring_engine):
        assert scoring_engine.risk_score(_profile(annual_income=Decimal("150000"))) == 35

    def test_bmi_in_range_adds_nothing(self, scoring_engine):
        assert scoring_engine.risk_score(_profile(bmi=27.0)) == 45
        assert scoring_engine.risk_score(_profile(bmi=31.0)) == 55

    def test_score_clamped_at_zero(self, low_risk_profile):
        engine = RiskScoringEngine(RiskScoringConfig(score=ScoreRules(base_score=0)))
        assert engine.risk_score(low_risk_profile) == 0

    def test_score_clamped_at_hundred(self, scoring_engine, high_risk_profile):
        assert scoring_engine.risk_score(high_risk_profile) == 100


class TestCategorize:
    """Test score to category mapping at the boundaries."""

    @pytest.mark.parametrize(
        "score,category",
        [
            (0, RiskCategory.LOW),
            (39, RiskCategory.LOW),
            (40, RiskCategory.MODERATE),
            (59, RiskCategory.MODERATE),
            (60, RiskCategory.HIGH),
            (74, RiskCategory.HIGH),
            (75, RiskCategory.VERY_HIGH),
            (100, RiskCategory.VERY_HIGH),
        ],
    )
    def test_boundaries(self, scoring_engine, score, category):
        assert scoring_engine.categorize(score) == category


class TestMultiplier:
    """Test the premium multiplier chain."""

    def test_neutral_profile_is_one(self, scoring_engine, neutral_profile):
        assert scoring_engine.multiplier(neutral_profile) == Decimal("1.0")

    @pytest.mark.parametrize(
        "age,expected",
        [(25, "1.2"), (26, "1.0"), (40, "1.0"), (55, "1.1"), (65, "1.3"), (66, "1.5")],
    )
    def test_age_bands(self, scoring_engine, age, expected):
        assert scoring_engine.multiplier(_profile(age=age)) == Decimal(expected)

    @pytest.mark.parametrize(
        "income,expected",
        [("30000", "1.3"), ("30001", "1.1"), ("60000", "1.1"), ("200000", "0.9"), ("200001", "0.8")],
    )
    def test_income_bands(self, scoring_engine, income, expected):
        assert scoring_engine.multiplier(_profile(annual_income=Decimal(income))) == Decimal(expected)

    def test_credit_excellent_discount(self, scoring_engine):
        assert scoring_engine.multiplier(_profile(credit_score=740)) == Decimal("0.9")

    def test_lower_bound_clamp(self, low_risk_profile):
        """The chain is clamped to the configured minimum."""
        config = RiskScoringConfig(multiplier=MultiplierRules(minimum=Decimal("0.6")))
        engine = RiskScoringEngine(config)

        assert engine.multiplier(low_risk_profile) == Decimal("0.6")

    def test_bounds_hold_across_profiles(self, scoring_engine):
        """Score and multiplier stay in range for every combination."""
        for age, occupation, income, smoker, chronic in product(
            (18, 30, 50, 64, 100),
            list(Occupation),
            (Decimal("0"), Decimal("45000"), Decimal("500000")),
            (False, True),
            (False, True),
        ):
            profile = _profile(
                age=age,
                occupation=occupation,
                annual_income=income,
                smoker=smoker,
                has_chronic_illness=chronic,
                has_bankruptcy_history=smoker,
                credit_score=400 if chronic else 800,
            )
            assessment = scoring_engine.score(profile)

            assert 0 <= assessment.overall_risk_score <= 100
            assert Decimal("0.5") <= assessment.base_premium_multiplier <= Decimal("3.0")


class TestStoredProfile:
    """Test building and analysing stored profiles."""

    def test_assess_profile_recomputes(self, scoring_engine, professional_profile, clock):
        stored = scoring_engine.assess_profile("applicant-1", professional_profile)

        assert stored.is_complete
        assert stored.assessment.overall_risk_score == 45
        assert stored.created_at == clock.now()

    def test_reassessment_keeps_creation_time(self, scoring_engine, professional_profile, clock):
        first = scoring_engine.assess_profile("applicant-1", professional_profile)
        later = datetime(2024, 7, 1, 9, 0, tzinfo=timezone.utc)
        clock.set(later)

        updated = scoring_engine.assess_profile(
            "applicant-1", professional_profile.model_copy(update={"smoker": True}), previous=first
        )

        assert updated.created_at == first.created_at
        assert updated.last_updated == later
        assert updated.assessment.overall_risk_score == 65

    def test_analysis_groups_by_category(self, scoring_engine, high_risk_profile):
        stored = scoring_engine.assess_profile("applicant-2", high_risk_profile)
        analysis = scoring_engine.analyze(stored)
        by_category = {c.category: c for c in analysis.categories}

        assert set(by_category) == {
            FactorCategory.HEALTH,
            FactorCategory.OCCUPATION,
            FactorCategory.LIFESTYLE,
        }
        assert by_category[FactorCategory.OCCUPATION].risk_level == RiskLevel.HIGH
        assert analysis.risk_category == RiskCategory.VERY_HIGH
        assert [r.category for r in analysis.recommendations] == [FactorCategory.LIFESTYLE]

    def test_analysis_without_risks_has_no_recommendations(self, scoring_engine, stored_profile):
        analysis = scoring_engine.analyze(stored_profile)

        assert analysis.recommendations == []
        assert all(c.risk_level == RiskLevel.LOW for c in analysis.categories)

    def test_analysis_requires_complete_profile(self, scoring_engine):
        stored = scoring_engine.assess_profile("applicant-3", RiskProfileInput(age=50))
        with pytest.raises(IncompleteProfileError):
            scoring_engine.analyze(stored)
