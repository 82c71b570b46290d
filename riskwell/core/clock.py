"""
Clock abstraction.

Engines never call `datetime.now()` directly; they read time from an
injected clock so payment, rejection and filing dates are testable.
"""

from datetime import date, datetime, timezone
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current timestamp."""

    def now(self) -> datetime:
        """Return the current timestamp."""
        ...

    def today(self) -> date:
        """Return the current calendar date."""
        ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def today(self) -> date:
        return self.now().date()


class FixedClock:
    """
    Clock frozen at a given instant.

    Usage:
        clock = FixedClock(datetime(2024, 6, 15, 10, 0, tzinfo=timezone.utc))
        clock.set(datetime(2024, 6, 18, 9, 0, tzinfo=timezone.utc))
    """

    def __init__(self, instant: datetime):
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def today(self) -> date:
        return self._instant.date()

    def set(self, instant: datetime) -> None:
        """Move the clock to a new instant."""
        self._instant = instant
