"""
Equine gestation arithmetic.

Dependencies: None
System role: Expected foaling date calculation
"""

from datetime import date, timedelta

GESTATION_DAYS = 340


def expected_foaling_date(mating_date: date) -> date:
    """
    Expected foaling date for a mating date.

    Plain calendar-day arithmetic, so month lengths and leap years are
    accounted for (2024-01-01 -> 2024-12-06).

    Args:
        mating_date: Date of mating

    Returns:
        date: mating_date + 340 days
    """
    return mating_date + timedelta(days=GESTATION_DAYS)
