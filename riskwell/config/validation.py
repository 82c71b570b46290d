"""
Configuration validation for Riskwell.

Provides cross-field validation beyond what the Pydantic models check.
"""

from decimal import Decimal

import structlog

from riskwell.config.models import UnderwritingConfig
from riskwell.domain.enums import Occupation

logger = structlog.get_logger()


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""

    pass


def validate_config(config: UnderwritingConfig) -> list[str]:
    """
    Validate configuration.

    Performs checks the field validators cannot, such as ordering between
    thresholds and bounds across separate tables.

    Args:
        config: UnderwritingConfig to validate

    Returns:
        List of warning messages (non-fatal issues)

    Raises:
        ConfigurationError: If configuration has fatal issues
    """
    warnings: list[str] = []
    errors: list[str] = []

    thresholds = config.risk.thresholds
    if not thresholds.bmi_healthy_min < thresholds.bmi_overweight <= thresholds.bmi_healthy_max:
        errors.append(
            "BMI thresholds must satisfy bmi_healthy_min < bmi_overweight <= bmi_healthy_max"
        )
    if not (
        thresholds.credit_poor_below
        <= thresholds.credit_fair_below
        <= thresholds.credit_excellent_from
    ):
        errors.append(
            "Credit thresholds must satisfy poor_below <= fair_below <= excellent_from"
        )

    score = config.risk.score
    if not score.very_high_from > score.high_from > score.moderate_from:
        errors.append(
            f"Risk category thresholds must be descending, got very_high={score.very_high_from}, "
            f"high={score.high_from}, moderate={score.moderate_from}"
        )
    if not score.age_senior_from > score.age_middle_from:
        errors.append("age_senior_from must be greater than age_middle_from")

    multiplier = config.risk.multiplier
    if not multiplier.minimum < multiplier.maximum:
        errors.append(
            f"Multiplier minimum ({multiplier.minimum}) must be below maximum ({multiplier.maximum})"
        )
    if multiplier.minimum < Decimal("0.5") or multiplier.maximum > Decimal("3.0"):
        errors.append(
            f"Multiplier bounds [{multiplier.minimum}, {multiplier.maximum}] "
            "must lie within the policy record range [0.5, 3.0]"
        )

    age_bounds = [b.max_age for b in multiplier.age_bands[:-1]]
    if age_bounds != sorted(age_bounds) or len(set(age_bounds)) != len(age_bounds):
        errors.append(f"Age band bounds must be strictly ascending, got {age_bounds}")

    income_bounds = [b.max_income for b in multiplier.income_bands[:-1]]
    if income_bounds != sorted(income_bounds) or len(set(income_bounds)) != len(income_bounds):
        errors.append(f"Income band bounds must be strictly ascending, got {income_bounds}")

    missing = [o.value for o in Occupation if o not in multiplier.occupation]
    if missing:
        warnings.append(
            f"No premium multiplier for occupations {', '.join(missing)}; they will price at 1.0"
        )

    for frequency, rule in config.premium.frequencies.items():
        span = rule.installments * rule.months_between
        if span != 12:
            warnings.append(
                f"Frequency {frequency.value} schedules span {span} months, not a full year"
            )

    # Log warnings
    for warning in warnings:
        logger.warning("config_validation_warning", message=warning)

    # Raise if any errors
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)

    return warnings
