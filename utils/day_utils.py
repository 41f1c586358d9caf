import calendar
from datetime import date
from typing import List

from utils.constants import DAY_INITIALS, MONTH_NAMES


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month (month is 1-12)."""
    return calendar.monthrange(year, month)[1]


def is_weekend(year: int, month: int, day: int) -> bool:
    """Saturday or Sunday."""
    return date(year, month, day).weekday() >= 5


def weekday_initial(year: int, month: int, day: int) -> str:
    return DAY_INITIALS[date(year, month, day).weekday()]


def schedule_title(year: int, month: int) -> str:
    """e.g. "MARCH / 2025"."""
    return f"{MONTH_NAMES[month - 1].upper()} / {year}"


def active_days(year: int, month: int, excluded: set) -> List[int]:
    """Days of the month that are not excluded, in order."""
    return [d for d in range(1, days_in_month(year, month) + 1) if d not in excluded]
