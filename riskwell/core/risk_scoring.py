"""
Risk scoring engine for Riskwell.

Turns applicant attributes into itemised risk factors, an additive 0-100
risk score with its category, and a multiplicative premium multiplier.

The score drives the category shown to people; the multiplier drives
price. They come from separately tuned rule sets and are not required to
agree with each other.
"""

from decimal import Decimal

import structlog

from riskwell.config.models import RiskScoringConfig
from riskwell.core.clock import Clock, SystemClock
from riskwell.domain.enums import (
    FactorCategory,
    RiskCategory,
    RiskLevel,
)
from riskwell.domain.risk_profile import (
    CategoryBreakdown,
    Recommendation,
    RiskAnalysis,
    RiskAssessment,
    RiskFactor,
    RiskProfile,
    RiskProfileInput,
)
from riskwell.exceptions import IncompleteProfileError

logger = structlog.get_logger()


class RiskScoringEngine:
    """
    Scores applicant risk profiles.

    Stateless apart from its injected, frozen rule tables; safe to share
    between threads.

    Usage:
        engine = RiskScoringEngine(config.risk)
        assessment = engine.score(profile_input)
    """

    def __init__(self, config: RiskScoringConfig | None = None, clock: Clock | None = None):
        """
        Initialize the engine.

        Args:
            config: Scoring and multiplier tables (defaults if None)
            clock: Time source for profile timestamps
        """
        self.config = config or RiskScoringConfig()
        self.clock = clock or SystemClock()

    # =========================================================================
    # Public API
    # =========================================================================

    @staticmethod
    def is_complete(profile: RiskProfileInput) -> bool:
        """True when age, occupation, income and employment status are all set."""
        return profile.is_complete

    def score(self, profile: RiskProfileInput) -> RiskAssessment:
        """
        Assess a complete profile.

        Args:
            profile: Applicant attributes

        Returns:
            RiskAssessment with factors, score, category and multiplier

        Raises:
            IncompleteProfileError: If a required field is missing
        """
        self._require_complete(profile)

        factors = self.risk_factors(profile)
        score = self.risk_score(profile)
        category = self.categorize(score)
        multiplier = self.multiplier(profile)

        logger.debug(
            "risk_profile_scored",
            score=score,
            category=category.value,
            multiplier=str(multiplier),
            factor_count=len(factors),
        )

        return RiskAssessment(
            risk_factors=factors,
            overall_risk_score=score,
            risk_category=category,
            base_premium_multiplier=multiplier,
        )

    def assess_profile(
        self,
        applicant_id: str,
        profile: RiskProfileInput,
        previous: RiskProfile | None = None,
    ) -> RiskProfile:
        """
        Build the stored risk profile for an applicant's latest submission.

        Everything derived is recomputed from scratch. Incomplete submissions
        are kept without an assessment instead of raising, so applicants can
        save partial data.

        Args:
            applicant_id: Applicant identifier
            profile: Latest submitted attributes
            previous: Existing stored profile, if any

        Returns:
            New RiskProfile record
        """
        now = self.clock.now()
        complete = profile.is_complete
        assessment = self.score(profile) if complete else None

        if not complete:
            logger.info(
                "risk_profile_incomplete",
                applicant_id=applicant_id,
                missing=profile.missing_fields,
            )

        return RiskProfile(
            applicant_id=applicant_id,
            profile=profile,
            assessment=assessment,
            is_complete=complete,
            created_at=previous.created_at if previous else now,
            last_updated=now,
        )

    def analyze(self, risk_profile: RiskProfile) -> RiskAnalysis:
        """
        Summarise a stored profile by factor category, with recommendations.

        Args:
            risk_profile: Stored, complete risk profile

        Returns:
            RiskAnalysis

        Raises:
            IncompleteProfileError: If the profile is incomplete
        """
        profile = risk_profile.profile
        self._require_complete(profile)
        assessment = risk_profile.assessment or self.score(profile)

        categories = []
        for category in FactorCategory:
            factors = [f for f in assessment.risk_factors if f.category == category]
            if not factors:
                continue
            average = sum((f.multiplier for f in factors), Decimal("0")) / len(factors)
            if average >= Decimal("1.5"):
                level = RiskLevel.HIGH
            elif average >= Decimal("1.2"):
                level = RiskLevel.MEDIUM
            else:
                level = RiskLevel.LOW
            categories.append(
                CategoryBreakdown(
                    category=category,
                    count=len(factors),
                    average_multiplier=average,
                    risk_level=level,
                    factors=factors,
                )
            )

        return RiskAnalysis(
            overall_risk_score=assessment.overall_risk_score,
            risk_category=assessment.risk_category,
            base_premium_multiplier=assessment.base_premium_multiplier,
            categories=categories,
            recommendations=self._recommendations(profile),
            last_updated=risk_profile.last_updated,
        )

    # =========================================================================
    # Rule sets
    # =========================================================================

    def risk_factors(self, profile: RiskProfileInput) -> list[RiskFactor]:
        """Evaluate each factor rule independently and collect those that fire."""
        rules = self.config.factors
        thresholds = self.config.thresholds
        factors: list[RiskFactor] = []

        if profile.age is not None:
            if profile.age > rules.age_high_above:
                level = RiskLevel.HIGH
            elif profile.age > rules.age_medium_above:
                level = RiskLevel.MEDIUM
            else:
                level = RiskLevel.LOW
            factors.append(
                RiskFactor(
                    category=FactorCategory.HEALTH,
                    factor="age",
                    level=level,
                    multiplier=rules.age_multipliers[level],
                    description=f"Age {profile.age} - {level.value} risk",
                )
            )

        if profile.occupation is not None and profile.occupation in rules.occupation:
            occupation = rules.occupation[profile.occupation]
            factors.append(
                RiskFactor(
                    category=FactorCategory.OCCUPATION,
                    factor="occupation_type",
                    level=occupation.level,
                    multiplier=occupation.multiplier,
                    description=f"{profile.occupation.value} occupation - {occupation.level.value} risk",
                )
            )

        if profile.has_chronic_illness:
            factors.append(
                RiskFactor(
                    category=FactorCategory.HEALTH,
                    factor="chronic_illness",
                    level=RiskLevel.HIGH,
                    multiplier=rules.chronic_illness,
                    description="Chronic illness present",
                )
            )

        if profile.smoker:
            factors.append(
                RiskFactor(
                    category=FactorCategory.LIFESTYLE,
                    factor="smoking",
                    level=RiskLevel.HIGH,
                    multiplier=rules.smoking,
                    description="Smoker",
                )
            )

        if profile.bmi is not None:
            if self._bmi_out_of_range(profile.bmi):
                level = RiskLevel.HIGH
            elif profile.bmi > thresholds.bmi_overweight:
                level = RiskLevel.MEDIUM
            else:
                level = RiskLevel.LOW
            factors.append(
                RiskFactor(
                    category=FactorCategory.HEALTH,
                    factor="bmi",
                    level=level,
                    multiplier=rules.bmi_multipliers[level],
                    description=f"BMI {profile.bmi} - {level.value} risk",
                )
            )

        if profile.has_dangerous_hobbies:
            factors.append(
                RiskFactor(
                    category=FactorCategory.LIFESTYLE,
                    factor="dangerous_hobbies",
                    level=RiskLevel.HIGH,
                    multiplier=rules.dangerous_hobbies,
                    description="Participates in dangerous hobbies",
                )
            )

        if profile.has_bankruptcy_history:
            factors.append(
                RiskFactor(
                    category=FactorCategory.FINANCIAL,
                    factor="bankruptcy_history",
                    level=RiskLevel.HIGH,
                    multiplier=rules.bankruptcy,
                    description="History of bankruptcy",
                )
            )

        if profile.credit_score is not None:
            if profile.credit_score < thresholds.credit_poor_below:
                level = RiskLevel.HIGH
            elif profile.credit_score < thresholds.credit_fair_below:
                level = RiskLevel.MEDIUM
            else:
                level = RiskLevel.LOW
            factors.append(
                RiskFactor(
                    category=FactorCategory.FINANCIAL,
                    factor="credit_score",
                    level=level,
                    multiplier=rules.credit_multipliers[level],
                    description=f"Credit score {profile.credit_score} - {level.value} risk",
                )
            )

        zone = profile.risk_zone
        if zone is not None:
            factors.append(
                RiskFactor(
                    category=FactorCategory.GEOGRAPHIC,
                    factor="location_risk",
                    level=RiskLevel(zone.value),
                    multiplier=rules.zone_multipliers[zone],
                    description=f"{zone.value} risk location",
                )
            )

        return factors

    def risk_score(self, profile: RiskProfileInput) -> int:
        """Additive 0-100 score, clamped and rounded."""
        rules = self.config.score
        thresholds = self.config.thresholds
        score = rules.base_score

        age = profile.age
        if age is not None:
            if age >= rules.age_senior_from:
                score += rules.age_senior_points
            elif age >= rules.age_middle_from:
                score += rules.age_middle_points
            elif age < rules.age_young_below:
                score += rules.age_young_points

        if profile.occupation is not None:
            score += rules.occupation_points.get(profile.occupation, 0)

        if profile.has_chronic_illness:
            score += rules.chronic_illness_points
        if profile.smoker:
            score += rules.smoker_points
        if profile.bmi is not None and self._bmi_out_of_range(profile.bmi):
            score += rules.bmi_out_of_range_points

        if profile.has_dangerous_hobbies:
            score += rules.dangerous_hobbies_points

        if profile.has_bankruptcy_history:
            score += rules.bankruptcy_points
        if profile.credit_score is not None:
            if profile.credit_score < thresholds.credit_poor_below:
                score += rules.credit_poor_points
            elif profile.credit_score < thresholds.credit_fair_below:
                score += rules.credit_fair_points
            elif profile.credit_score >= thresholds.credit_excellent_from:
                score += rules.credit_excellent_points

        zone = profile.risk_zone
        if zone is not None:
            score += rules.zone_points.get(zone, 0)

        income = profile.annual_income
        if income is not None:
            if income < rules.low_income_below:
                score += rules.low_income_points
            elif income > rules.high_income_above:
                score += rules.high_income_points

        return int(round(max(0, min(score, 100))))

    def categorize(self, score: int) -> RiskCategory:
        """Map a 0-100 score to its risk category."""
        rules = self.config.score
        if score >= rules.very_high_from:
            return RiskCategory.VERY_HIGH
        if score >= rules.high_from:
            return RiskCategory.HIGH
        if score >= rules.moderate_from:
            return RiskCategory.MODERATE
        return RiskCategory.LOW

    def multiplier(self, profile: RiskProfileInput) -> Decimal:
        """
        Base premium multiplier as an independent multiplicative chain.

        Args:
            profile: Applicant attributes (age, occupation and income required)

        Returns:
            Multiplier clamped to the configured bounds

        Raises:
            IncompleteProfileError: If a required field is missing
        """
        self._require_complete(profile)
        rules = self.config.multiplier
        thresholds = self.config.thresholds

        m = Decimal("1.0")
        m *= self._age_band_multiplier(profile.age)
        m *= rules.occupation.get(profile.occupation, Decimal("1.0"))
        m *= self._income_band_multiplier(profile.annual_income)

        if profile.has_chronic_illness:
            m *= rules.chronic_illness
        if profile.smoker:
            m *= rules.smoker
        if profile.bmi is not None and self._bmi_out_of_range(profile.bmi):
            m *= rules.bmi_out_of_range

        if profile.has_dangerous_hobbies:
            m *= rules.dangerous_hobbies

        if profile.has_bankruptcy_history:
            m *= rules.bankruptcy
        if profile.credit_score is not None:
            if profile.credit_score < thresholds.credit_poor_below:
                m *= rules.credit_poor
            elif profile.credit_score < thresholds.credit_fair_below:
                m *= rules.credit_fair
            elif profile.credit_score >= thresholds.credit_excellent_from:
                m *= rules.credit_excellent

        zone = profile.risk_zone
        if zone is not None:
            m *= rules.zone.get(zone, Decimal("1.0"))

        return max(rules.minimum, min(m, rules.maximum))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_complete(self, profile: RiskProfileInput) -> None:
        if not profile.is_complete:
            raise IncompleteProfileError(profile.missing_fields)

    def _bmi_out_of_range(self, bmi: float) -> bool:
        thresholds = self.config.thresholds
        return bmi < thresholds.bmi_healthy_min or bmi > thresholds.bmi_healthy_max

    def _age_band_multiplier(self, age: int) -> Decimal:
        for band in self.config.multiplier.age_bands:
            if band.max_age is None or age <= band.max_age:
                return band.multiplier
        return Decimal("1.0")

    def _income_band_multiplier(self, income: Decimal) -> Decimal:
        for band in self.config.multiplier.income_bands:
            if band.max_income is None or income <= band.max_income:
                return band.multiplier
        return Decimal("1.0")

    def _recommendations(self, profile: RiskProfileInput) -> list[Recommendation]:
        recommendations = []
        if profile.smoker:
            recommendations.append(
                Recommendation(
                    category=FactorCategory.LIFESTYLE,
                    recommendation="Consider quitting smoking to reduce health risk",
                    impact="Could reduce premium by up to 15%",
                )
            )
        if profile.has_chronic_illness:
            recommendations.append(
                Recommendation(
                    category=FactorCategory.HEALTH,
                    recommendation="Regular health check-ups and medication adherence",
                    impact="Could improve risk assessment over time",
                )
            )
        if (
            profile.credit_score is not None
            and profile.credit_score < self.config.thresholds.credit_fair_below
        ):
            recommendations.append(
                Recommendation(
                    category=FactorCategory.FINANCIAL,
                    recommendation="Improve credit score through timely payments",
                    impact="Could reduce premium by up to 10%",
                )
            )
        if profile.has_dangerous_hobbies:
            recommendations.append(
                Recommendation(
                    category=FactorCategory.LIFESTYLE,
                    recommendation="Consider additional safety measures or insurance riders",
                    impact="Better coverage for specific risks",
                )
            )
        return recommendations
