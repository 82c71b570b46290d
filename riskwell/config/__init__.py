"""
Configuration module for Riskwell.

This module provides:
- Pydantic configuration models (scoring, premium, claims and fraud tables)
- YAML configuration loading
- Configuration validation
"""

from riskwell.config.models import (
    UnderwritingConfig,
    RiskScoringConfig,
    ProfileThresholds,
    FactorRules,
    ScoreRules,
    MultiplierRules,
    PremiumConfig,
    ClaimsConfig,
    FraudConfig,
    LoggingConfig,
)
from riskwell.config.loader import load_config
from riskwell.config.validation import ConfigurationError, validate_config

__all__ = [
    "UnderwritingConfig",
    "RiskScoringConfig",
    "ProfileThresholds",
    "FactorRules",
    "ScoreRules",
    "MultiplierRules",
    "PremiumConfig",
    "ClaimsConfig",
    "FraudConfig",
    "LoggingConfig",
    "ConfigurationError",
    "load_config",
    "validate_config",
]
