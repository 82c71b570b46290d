"""
Pydantic configuration models for Riskwell.

The lookup tables that drive scoring and pricing live here as frozen models
and are injected into the engines; nothing reads them from module globals.
Table fields are read-only mappings and band lists are tuples, so engines
built from one configuration cannot change each other's rules.
"""

from decimal import Decimal
from types import MappingProxyType
from typing import Annotated, Any, Mapping, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, Field, WrapSerializer, field_validator
from pydantic_settings import BaseSettings

from riskwell.domain.enums import (
    Occupation,
    PolicyType,
    PremiumFrequency,
    RiskLevel,
    RiskZone,
)


K = TypeVar("K")
V = TypeVar("V")


def _read_only(table: Mapping[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(dict(table))


def _dump_table(table: Mapping[Any, Any], handler: Any) -> Any:
    return handler(dict(table))


# Lookup table validated into a read-only view; dumps as a plain dict.
Table = Annotated[Mapping[K, V], AfterValidator(_read_only), WrapSerializer(_dump_table)]

# Defaults are validated too, so default tables are read-only as well.
FROZEN = {"frozen": True, "validate_default": True}


class ProfileThresholds(BaseModel):
    """Cut-offs shared by the factor, score and multiplier rules."""

    model_config = FROZEN

    bmi_healthy_min: float = Field(default=18.5, description="BMI below this is out of range")
    bmi_healthy_max: float = Field(default=30.0, description="BMI above this is out of range")
    bmi_overweight: float = Field(default=25.0, description="BMI above this is a medium factor")
    credit_poor_below: int = Field(default=580, ge=300, le=850)
    credit_fair_below: int = Field(default=670, ge=300, le=850)
    credit_excellent_from: int = Field(default=740, ge=300, le=850)


class OccupationFactor(BaseModel):
    """Qualitative level and factor multiplier for an occupation."""

    model_config = FROZEN

    level: RiskLevel
    multiplier: Decimal = Field(..., ge=Decimal("0.5"), le=Decimal("2.0"))


class FactorRules(BaseModel):
    """Rules for the itemised risk factors shown to underwriters."""

    model_config = FROZEN

    age_high_above: int = 60
    age_medium_above: int = 45
    age_multipliers: Table[RiskLevel, Decimal] = Field(
        default={
            RiskLevel.LOW: Decimal("1.0"),
            RiskLevel.MEDIUM: Decimal("1.2"),
            RiskLevel.HIGH: Decimal("1.5"),
        }
    )
    occupation: Table[Occupation, OccupationFactor] = Field(
        default={
            Occupation.HAZARDOUS: OccupationFactor(level=RiskLevel.VERY_HIGH, multiplier=Decimal("2.0")),
            Occupation.MANUAL: OccupationFactor(level=RiskLevel.HIGH, multiplier=Decimal("1.5")),
            Occupation.HEALTHCARE: OccupationFactor(level=RiskLevel.MEDIUM, multiplier=Decimal("1.2")),
            Occupation.UNEMPLOYED: OccupationFactor(level=RiskLevel.MEDIUM, multiplier=Decimal("1.3")),
            Occupation.PROFESSIONAL: OccupationFactor(level=RiskLevel.LOW, multiplier=Decimal("0.9")),
            Occupation.ADMINISTRATIVE: OccupationFactor(level=RiskLevel.LOW, multiplier=Decimal("1.0")),
            Occupation.EDUCATION: OccupationFactor(level=RiskLevel.LOW, multiplier=Decimal("0.9")),
            Occupation.TECHNOLOGY: OccupationFactor(level=RiskLevel.LOW, multiplier=Decimal("0.8")),
            Occupation.FINANCE: OccupationFactor(level=RiskLevel.LOW, multiplier=Decimal("0.9")),
        }
    )
    chronic_illness: Decimal = Decimal("1.5")
    smoking: Decimal = Decimal("1.5")
    bmi_multipliers: Table[RiskLevel, Decimal] = Field(
        default={
            RiskLevel.LOW: Decimal("1.0"),
            RiskLevel.MEDIUM: Decimal("1.1"),
            RiskLevel.HIGH: Decimal("1.3"),
        }
    )
    dangerous_hobbies: Decimal = Decimal("1.4")
    bankruptcy: Decimal = Decimal("1.3")
    credit_multipliers: Table[RiskLevel, Decimal] = Field(
        default={
            RiskLevel.LOW: Decimal("0.9"),
            RiskLevel.MEDIUM: Decimal("1.2"),
            RiskLevel.HIGH: Decimal("1.5"),
        }
    )
    zone_multipliers: Table[RiskZone, Decimal] = Field(
        default={
            RiskZone.LOW: Decimal("0.9"),
            RiskZone.MEDIUM: Decimal("1.0"),
            RiskZone.HIGH: Decimal("1.3"),
        }
    )

    @field_validator(
        "age_multipliers", "bmi_multipliers", "credit_multipliers", "zone_multipliers", "occupation"
    )
    @classmethod
    def multipliers_in_factor_range(cls, v: Mapping) -> Mapping:
        """Ensure every factor multiplier lies in [0.5, 2.0]."""
        for key, value in v.items():
            m = value.multiplier if isinstance(value, OccupationFactor) else value
            if not Decimal("0.5") <= m <= Decimal("2.0"):
                raise ValueError(f"Factor multiplier for {key} must be in [0.5, 2.0], got {m}")
        return v


class ScoreRules(BaseModel):
    """Additive point deltas for the 0-100 risk score."""

    model_config = FROZEN

    base_score: int = Field(default=50, ge=0, le=100)

    age_senior_from: int = 60
    age_senior_points: int = 20
    age_middle_from: int = 45
    age_middle_points: int = 10
    age_young_below: int = 25
    age_young_points: int = 5

    occupation_points: Table[Occupation, int] = Field(
        default={
            Occupation.HAZARDOUS: 30,
            Occupation.MANUAL: 20,
            Occupation.UNEMPLOYED: 15,
            Occupation.HEALTHCARE: 10,
            Occupation.PROFESSIONAL: -5,
            Occupation.ADMINISTRATIVE: -5,
            Occupation.FINANCE: -5,
            Occupation.EDUCATION: -10,
            Occupation.TECHNOLOGY: -10,
        }
    )

    chronic_illness_points: int = 15
    smoker_points: int = 20
    bmi_out_of_range_points: int = 10
    dangerous_hobbies_points: int = 15
    bankruptcy_points: int = 25

    credit_poor_points: int = 20
    credit_fair_points: int = 10
    credit_excellent_points: int = -10

    zone_points: Table[RiskZone, int] = Field(
        default={RiskZone.HIGH: 15, RiskZone.LOW: -10}
    )

    low_income_below: Decimal = Decimal("30000")
    low_income_points: int = 10
    high_income_above: Decimal = Decimal("100000")
    high_income_points: int = -10

    very_high_from: int = Field(default=75, ge=0, le=100)
    high_from: int = Field(default=60, ge=0, le=100)
    moderate_from: int = Field(default=40, ge=0, le=100)


class AgeBand(BaseModel):
    """Age band for the premium multiplier; `max_age` None means open-ended."""

    model_config = FROZEN

    max_age: Optional[int] = None
    multiplier: Decimal = Field(..., gt=0)


class IncomeBand(BaseModel):
    """Income band for the premium multiplier; `max_income` None means open-ended."""

    model_config = FROZEN

    max_income: Optional[Decimal] = None
    multiplier: Decimal = Field(..., gt=0)


class MultiplierRules(BaseModel):
    """Multiplicative chain that produces the base premium multiplier."""

    model_config = FROZEN

    age_bands: tuple[AgeBand, ...] = Field(
        default=(
            AgeBand(max_age=25, multiplier=Decimal("1.2")),
            AgeBand(max_age=40, multiplier=Decimal("1.0")),
            AgeBand(max_age=55, multiplier=Decimal("1.1")),
            AgeBand(max_age=65, multiplier=Decimal("1.3")),
            AgeBand(max_age=None, multiplier=Decimal("1.5")),
        )
    )
    occupation: Table[Occupation, Decimal] = Field(
        default={
            Occupation.PROFESSIONAL: Decimal("0.9"),
            Occupation.ADMINISTRATIVE: Decimal("1.0"),
            Occupation.MANUAL: Decimal("1.2"),
            Occupation.HAZARDOUS: Decimal("1.8"),
            Occupation.HEALTHCARE: Decimal("1.1"),
            Occupation.EDUCATION: Decimal("0.9"),
            Occupation.TECHNOLOGY: Decimal("0.8"),
            Occupation.FINANCE: Decimal("0.9"),
            Occupation.UNEMPLOYED: Decimal("1.3"),
        }
    )
    income_bands: tuple[IncomeBand, ...] = Field(
        default=(
            IncomeBand(max_income=Decimal("30000"), multiplier=Decimal("1.3")),
            IncomeBand(max_income=Decimal("60000"), multiplier=Decimal("1.1")),
            IncomeBand(max_income=Decimal("100000"), multiplier=Decimal("1.0")),
            IncomeBand(max_income=Decimal("200000"), multiplier=Decimal("0.9")),
            IncomeBand(max_income=None, multiplier=Decimal("0.8")),
        )
    )
    chronic_illness: Decimal = Decimal("1.3")
    smoker: Decimal = Decimal("1.5")
    bmi_out_of_range: Decimal = Decimal("1.2")
    dangerous_hobbies: Decimal = Decimal("1.4")
    bankruptcy: Decimal = Decimal("1.3")
    credit_poor: Decimal = Decimal("1.5")
    credit_fair: Decimal = Decimal("1.2")
    credit_excellent: Decimal = Decimal("0.9")
    zone: Table[RiskZone, Decimal] = Field(
        default={RiskZone.HIGH: Decimal("1.3"), RiskZone.LOW: Decimal("0.9")}
    )

    minimum: Decimal = Decimal("0.5")
    maximum: Decimal = Decimal("3.0")

    @field_validator("age_bands", "income_bands")
    @classmethod
    def last_band_open_ended(cls, v: tuple) -> tuple:
        """Ensure the band list is non-empty and ends with an open-ended band."""
        if not v:
            raise ValueError("At least one band is required")
        last = v[-1]
        upper = last.max_age if isinstance(last, AgeBand) else last.max_income
        if upper is not None:
            raise ValueError("The last band must be open-ended (no upper bound)")
        return v


class RiskScoringConfig(BaseModel):
    """All tables used by the risk scoring engine."""

    model_config = FROZEN

    thresholds: ProfileThresholds = Field(default_factory=ProfileThresholds)
    factors: FactorRules = Field(default_factory=FactorRules)
    score: ScoreRules = Field(default_factory=ScoreRules)
    multiplier: MultiplierRules = Field(default_factory=MultiplierRules)


class PolicyRate(BaseModel):
    """Flat fee plus per-unit coverage rate for a policy type."""

    model_config = FROZEN

    flat_fee: Decimal = Field(..., ge=0)
    per_unit_rate: Decimal = Field(..., ge=0)


class FrequencyRule(BaseModel):
    """Number of installments per year and calendar months between them."""

    model_config = FROZEN

    installments: int = Field(..., ge=1, le=12)
    months_between: int = Field(..., ge=1, le=12)


class PremiumConfig(BaseModel):
    """Premium rate table and installment frequencies."""

    model_config = FROZEN

    rates: Table[PolicyType, PolicyRate] = Field(
        default={
            PolicyType.LIFE: PolicyRate(flat_fee=Decimal("100"), per_unit_rate=Decimal("0.001")),
            PolicyType.HEALTH: PolicyRate(flat_fee=Decimal("150"), per_unit_rate=Decimal("0.002")),
            PolicyType.DISABILITY: PolicyRate(flat_fee=Decimal("75"), per_unit_rate=Decimal("0.0005")),
            PolicyType.PROPERTY: PolicyRate(flat_fee=Decimal("200"), per_unit_rate=Decimal("0.0003")),
        }
    )
    frequencies: Table[PremiumFrequency, FrequencyRule] = Field(
        default={
            PremiumFrequency.MONTHLY: FrequencyRule(installments=12, months_between=1),
            PremiumFrequency.QUARTERLY: FrequencyRule(installments=4, months_between=3),
            PremiumFrequency.SEMI_ANNUAL: FrequencyRule(installments=2, months_between=6),
            PremiumFrequency.ANNUAL: FrequencyRule(installments=1, months_between=12),
        }
    )
    default_term_months: int = Field(default=12, ge=1)

    @field_validator("rates")
    @classmethod
    def rates_not_empty(
        cls, v: Mapping[PolicyType, PolicyRate]
    ) -> Mapping[PolicyType, PolicyRate]:
        """At least one policy type must be priced."""
        if not v:
            raise ValueError("At least one policy type rate is required")
        return v


class ClaimsConfig(BaseModel):
    """Claim filing rules."""

    model_config = FROZEN

    max_incident_age_days: int = Field(
        default=365,
        ge=1,
        description="Oldest incident (in days before filing) that may still be claimed",
    )


class FraudConfig(BaseModel):
    """Thresholds for the advisory fraud heuristics."""

    model_config = FROZEN

    recent_incident_days: int = Field(
        default=7,
        ge=0,
        description="Filing within this many days of the incident is flagged",
    )
    high_utilization_ratio: Decimal = Field(
        default=Decimal("0.80"),
        gt=0,
        le=1,
        description="Claimed amount above this share of total coverage is flagged",
    )
    frequent_claimant_threshold: int = Field(
        default=2,
        ge=0,
        description="More than this many other claims on record is flagged",
    )


class LoggingConfig(BaseModel):
    """Logging output settings."""

    level: str = Field(default="INFO")
    json_output: bool = False

    @field_validator("level")
    @classmethod
    def known_level(cls, v: str) -> str:
        """Ensure the level is a standard logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class UnderwritingConfig(BaseSettings):
    """
    Root configuration.

    Values can be loaded from YAML files and overridden via environment variables.
    """

    risk: RiskScoringConfig = Field(default_factory=RiskScoringConfig)
    premium: PremiumConfig = Field(default_factory=PremiumConfig)
    claims: ClaimsConfig = Field(default_factory=ClaimsConfig)
    fraud: FraudConfig = Field(default_factory=FraudConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    seed: Optional[int] = Field(
        default=None,
        description="Seed for policy and claim number generation (None = nondeterministic)",
    )

    model_config = {
        "env_prefix": "RISKWELL_",
        "env_nested_delimiter": "__",
    }
