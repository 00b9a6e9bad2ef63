"""
Time helpers shared by the domain.
"""
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def add_years(moment: datetime, years: int) -> datetime:
    """
    Shift a datetime by whole calendar years.

    29 February maps to 28 February in non-leap target years.
    """
    try:
        return moment.replace(year=moment.year + years)
    except ValueError:
        return moment.replace(year=moment.year + years, day=28)
