"""Pure date logic - weekdays, day normalization, lookahead windows."""

from datetime import date, timedelta
from enum import Enum, IntEnum

WEEK_LOOKAHEAD_DAYS = 7
MONTH_LOOKAHEAD_DAYS = 30


class Weekday(IntEnum):
    """Day of the week in canonical Sunday-first order."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def of(cls, d: date) -> "Weekday":
        """Weekday a date falls on."""
        # date.weekday() is Monday=0
        return cls((d.weekday() + 1) % 7)

    @classmethod
    def parse(cls, name: str) -> "Weekday":
        """Parse a full or three-letter day name, case-insensitive."""
        key = name.strip().upper()
        for day in cls:
            if day.name == key or day.name[:3] == key:
                return day
        raise ValueError(f"Unknown weekday: {name!r}")

    def next(self) -> "Weekday":
        return Weekday((self + 1) % 7)


def ordered_from(start: Weekday) -> list[Weekday]:
    """Canonical order rotated to begin at `start`."""
    days = list(Weekday)
    return days[start:] + days[:start]


def monday_first() -> list[Weekday]:
    """Monday..Sunday display order."""
    return ordered_from(Weekday.MONDAY)


def is_valid_date(year: int, month: int, day: int) -> bool:
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def normalize(year: int, month: int, day: int) -> date:
    """
    Clamp an overflowing day to the last valid day of the month.

    Day 31 in April becomes April 30; Feb 29 in a non-leap year becomes
    Feb 28. Valid dates come back unchanged.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range: {month}")
    while day > 1 and not is_valid_date(year, month, day):
        day -= 1
    return date(year, month, max(day, 1))


def project_to_year(d: date, year: int) -> date:
    """Same month/day in another year, normalized."""
    return normalize(year, d.month, d.day)


def _in_lookahead(d: date, days: int, as_of: date | None) -> bool:
    as_of = as_of or date.today()
    projected = project_to_year(d, as_of.year)
    return as_of <= projected <= as_of + timedelta(days=days)


def in_week(d: date, as_of: date | None = None) -> bool:
    """Date projected onto this year falls within [today, today + 7]."""
    return _in_lookahead(d, WEEK_LOOKAHEAD_DAYS, as_of)


def in_month(d: date, as_of: date | None = None) -> bool:
    """Date projected onto this year falls within [today, today + 30]."""
    return _in_lookahead(d, MONTH_LOOKAHEAD_DAYS, as_of)


class Window(Enum):
    """Forward-looking window used to filter upcoming items."""

    WEEK = "week"
    MONTH = "month"

    def contains(self, d: date, as_of: date | None = None) -> bool:
        if self is Window.WEEK:
            return in_week(d, as_of)
        return in_month(d, as_of)
