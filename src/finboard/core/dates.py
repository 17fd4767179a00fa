#!/usr/bin/env python3
"""
FinancialDate Primitive Type and Time Utilities

Immutable date wrapper with consistent formatting, plus the calendar helpers
shared by the aggregation engine, goal pacing and the insight generator.
"""

import calendar
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum

from .exceptions import InvalidInputError

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            date_format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str, date_format).date())

    @classmethod
    def parse(cls, value: "FinancialDate | date | str") -> "FinancialDate":
        """
        Coerce a date, ISO string or FinancialDate.

        Raises:
            ValueError: If a string is not an ISO date
        """
        if isinstance(value, FinancialDate):
            return value
        if isinstance(value, datetime):
            return cls(date=value.date())
        if isinstance(value, date):
            return cls(date=value)
        if isinstance(value, str):
            # Accept full ISO timestamps as well as plain dates
            return cls(date=date.fromisoformat(value.strip()[:10]))
        raise ValueError(f"Not a date: {value!r}")

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def month(self) -> int:
        return self.date.month

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def at_midnight(self) -> datetime:
        """Start of this day as a naive local datetime."""
        return datetime.combine(self.date, time.min)

    def age_days(self, other: "FinancialDate | None" = None) -> int:
        """
        Calculate days between this date and another (or today).

        Args:
            other: Other date to compare to (default: today)

        Returns:
            Number of days difference
        """
        if other is None:
            other = FinancialDate.today()
        return (other.date - self.date).days

    def __str__(self) -> str:
        """String representation."""
        return self.to_iso_string()

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, FinancialDate):
            return NotImplemented
        return self.date == other.date

    def __hash__(self) -> int:
        return hash(self.date)

    def __lt__(self, other: "FinancialDate") -> bool:
        """Less than comparison."""
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        """Less than or equal comparison."""
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        """Greater than comparison."""
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        """Greater than or equal comparison."""
        return self.date >= other.date

    def __repr__(self) -> str:
        """Repr format."""
        return f"FinancialDate(date={self.date!r})"


class Period(Enum):
    """Named windows used to filter transactions."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"

    @classmethod
    def parse(cls, value: "Period | str") -> "Period":
        if isinstance(value, Period):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(p.value for p in cls)
            raise InvalidInputError(f"Unknown period {value!r} (expected one of: {choices})") from None


def _as_date(value: "FinancialDate | date") -> date:
    if isinstance(value, FinancialDate):
        return value.date
    return value


def month_diff(start: "FinancialDate | date", end: "FinancialDate | date") -> int:
    """
    Whole calendar months from ``start`` to ``end``, ignoring day of month.

    Negative when ``end`` falls in an earlier month.
    """
    a = _as_date(start)
    b = _as_date(end)
    return (b.year - a.year) * 12 + (b.month - a.month)


def days_remaining(deadline: "FinancialDate | date | None", now: datetime | None = None) -> int | None:
    """
    Days until ``deadline`` (taken at local midnight), rounded up.

    Returns a negative number once the deadline is behind us and None when
    there is no deadline at all.
    """
    if deadline is None:
        return None
    if now is None:
        now = datetime.now()
    deadline_at = datetime.combine(_as_date(deadline), time.min)
    return math.ceil((deadline_at - now).total_seconds() / SECONDS_PER_DAY)


def is_past(deadline: "FinancialDate | date | None", now: datetime | None = None) -> bool:
    """True when the deadline's midnight lies strictly before ``now``."""
    if deadline is None:
        return False
    if now is None:
        now = datetime.now()
    return datetime.combine(_as_date(deadline), time.min) < now


def is_within(deadline: "FinancialDate | date | None", days: int, now: datetime | None = None) -> bool:
    """True when the deadline lies after ``now`` and no more than ``days`` ahead."""
    if deadline is None:
        return False
    if now is None:
        now = datetime.now()
    deadline_at = datetime.combine(_as_date(deadline), time.min)
    return now < deadline_at <= now + timedelta(days=days)


def period_start(period: "Period | str", now: datetime | None = None) -> datetime:
    """Map a period tag to the first instant it covers."""
    period = Period.parse(period)
    if now is None:
        now = datetime.now()

    if period is Period.TODAY:
        return datetime.combine(now.date(), time.min)
    if period is Period.WEEK:
        return now - timedelta(days=7)
    if period is Period.MONTH:
        return datetime(now.year, now.month, 1)
    if period is Period.YEAR:
        return datetime(now.year, 1, 1)
    return datetime.min


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by ``delta`` months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_end(year: int, month: int) -> date:
    """Last calendar day of the month."""
    return date(year, month, calendar.monthrange(year, month)[1])


def previous_month(year: int, month: int) -> tuple[int, int]:
    """The (year, month) immediately before the given one."""
    return shift_month(year, month, -1)
