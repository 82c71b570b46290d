"""
Utility modules for Riskwell.

Provides:
- Date arithmetic for schedules and claim checks
- Structured logging configuration
"""

from riskwell.utils.time_conversion import add_months, days_between, due_dates
from riskwell.utils.logging import configure_logging

__all__ = [
    # Time conversion
    "days_between",
    "add_months",
    "due_dates",
    # Logging
    "configure_logging",
]
