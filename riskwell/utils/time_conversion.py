"""
Date arithmetic used by premium schedules, policy terms and claim checks.
"""

from datetime import date

from dateutil.relativedelta import relativedelta


def days_between(start: date, end: date) -> int:
    """Signed whole days from start to end."""
    return (end - start).days


def add_months(d: date, months: int) -> date:
    """
    Shift a date by calendar months, clamping to the end of shorter months.

    Jan 31 + 1 month is Feb 29 in a leap year and Feb 28 otherwise.
    """
    return d + relativedelta(months=months)


def due_dates(start: date, count: int, months_between: int) -> list[date]:
    """
    Due dates of a regular installment plan.

    Every date is offset from `start` rather than from the previous due
    date, so a plan starting on the 31st returns to the 31st whenever the
    month allows it.

    Args:
        start: First due date
        count: Number of installments
        months_between: Calendar months between consecutive installments

    Returns:
        List of `count` dates, the first being `start`
    """
    return [add_months(start, i * months_between) for i in range(count)]
