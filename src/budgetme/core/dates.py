#!/usr/bin/env python3
"""
Timestamp and Calendar-Day Helpers

The ledger document stores every timestamp as integer milliseconds since the
Unix epoch. Accrual works on whole local calendar days, so the helpers here
convert between the two.
"""

from dataclasses import dataclass
from datetime import date, datetime


def to_millis(moment: datetime) -> int:
    """Convert a datetime (naive values are local time) to epoch milliseconds."""
    return int(moment.timestamp() * 1000)


def from_millis(millis: int) -> datetime:
    """Convert epoch milliseconds to a naive local datetime."""
    return datetime.fromtimestamp(millis / 1000)


def now_millis() -> int:
    """Current time in epoch milliseconds."""
    return to_millis(datetime.now())


@dataclass(frozen=True)
class LedgerDate:
    """Immutable local calendar date used for whole-day accrual."""

    date: date

    @classmethod
    def from_millis(cls, millis: int) -> "LedgerDate":
        """
        Create from epoch milliseconds, interpreted in local time.

        Args:
            millis: Milliseconds since the Unix epoch

        Returns:
            LedgerDate object
        """
        return cls(date=from_millis(millis).date())

    @classmethod
    def from_datetime(cls, moment: datetime) -> "LedgerDate":
        return cls(date=moment.date())

    def day_number(self) -> int:
        """Proleptic Gregorian ordinal, so day differences are plain subtraction."""
        return self.date.toordinal()

    def days_until(self, other: "LedgerDate") -> int:
        """
        Whole calendar days from this date to another.

        Negative when ``other`` is earlier.
        """
        return other.day_number() - self.day_number()

    def __str__(self) -> str:
        return self.date.isoformat()


def format_item_time(millis: int, now: datetime | None = None) -> str:
    """
    Format a history timestamp for display.

    The year is only shown when it differs from the current year, e.g.
    ``Mar 04 09:15am`` or ``Dec 30 2023 11:02pm``.
    """
    moment = from_millis(millis)
    current_year = (now or datetime.now()).year
    if moment.year == current_year:
        text = moment.strftime("%b %d %I:%M%p")
    else:
        text = moment.strftime("%b %d %Y %I:%M%p")
    return text[:-2] + text[-2:].lower()
