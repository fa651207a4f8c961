"""Pure recurring-event logic - occurrences and recurrence descriptions."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .dates import normalize
from .errors import InvalidAnchorDate, MalformedRecord
from .text import join_and, ordinal

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%B %d, %Y")


class Frequency(Enum):
    """How often a recurring item repeats."""

    ONCE = "once"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


def parse_date(value) -> date:
    """Parse a stored date value (YAML may already hand back a date)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized date: {value!r}")


@dataclass(frozen=True)
class RecurringItem:
    """A custom event anchored on a date and repeating at a frequency."""

    title: str
    anchor_date: date
    frequency: Frequency
    expiry: date | None = None
    extra: dict = field(default_factory=dict, compare=False, hash=False)

    def is_expired(self, as_of: date | None = None) -> bool:
        """Explicit expiry reached, or a one-time item already in the past."""
        as_of = as_of or date.today()
        if self.expiry is not None and as_of >= self.expiry:
            return True
        return is_past(self, as_of)

    @classmethod
    def from_record(cls, data: dict) -> "RecurringItem":
        """Create from a persisted record. Unknown keys are kept in `extra`."""
        if not isinstance(data, dict):
            raise MalformedRecord("Event record is not a mapping", data)
        title = data.get("title")
        if not title:
            raise MalformedRecord("Event record has no title", data)
        if not data.get("date"):
            raise MalformedRecord(f"Event {title!r} has no date", data)
        try:
            frequency = Frequency(str(data.get("frequency", "")).lower())
        except ValueError:
            raise MalformedRecord(
                f"Event {title!r} has unknown frequency {data.get('frequency')!r}", data
            ) from None
        try:
            anchor = parse_date(data["date"])
        except ValueError as e:
            raise InvalidAnchorDate(f"Event {title!r}: {e}", data) from e
        expiry = None
        if data.get("delete_on"):
            try:
                expiry = parse_date(data["delete_on"])
            except ValueError as e:
                raise MalformedRecord(f"Event {title!r}: bad delete_on: {e}", data) from e

        known = {"title", "date", "frequency", "delete_on"}
        return cls(
            title=str(title),
            anchor_date=anchor,
            frequency=frequency,
            expiry=expiry,
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_record(self) -> dict:
        record = {
            "title": self.title,
            "date": self.anchor_date.isoformat(),
            "frequency": self.frequency.value,
        }
        if self.expiry is not None:
            record["delete_on"] = self.expiry.isoformat()
        record.update(self.extra)
        return record


def is_past(item: RecurringItem, as_of: date | None = None) -> bool:
    """A one-time item whose date has gone by."""
    as_of = as_of or date.today()
    return item.frequency is Frequency.ONCE and item.anchor_date < as_of


def quarter_months(anchor_month: int) -> list[int]:
    """
    The four months of a quarterly cycle containing `anchor_month`.

    1 -> [1, 4, 7, 10], 2 -> [2, 5, 8, 11], 3 -> [3, 6, 9, 12]
    """
    phase = anchor_month % 3 or 3
    first = min(m for m in range(1, 13) if m % 3 == phase % 3)
    return [first + 3 * i for i in range(4)]


def occurrences(item: RecurringItem, target_year: int) -> list[date]:
    """
    Concrete dates on which an item is active in `target_year`.

    One-time items return their anchor date as-is. Everything else is
    normalized per month, so day 31 lands on the last day of short months.
    """
    day = item.anchor_date.day
    match item.frequency:
        case Frequency.ONCE:
            return [item.anchor_date]
        case Frequency.ANNUAL:
            dates = [normalize(target_year, item.anchor_date.month, day)]
        case Frequency.MONTHLY:
            dates = [normalize(target_year, m, day) for m in range(1, 13)]
        case Frequency.QUARTERLY:
            dates = [normalize(target_year, m, day) for m in quarter_months(item.anchor_date.month)]
    return sorted(set(dates))


def describe(item: RecurringItem, as_of: date | None = None) -> str:
    """Human-readable recurrence rule. Quarterly days are normalized for `as_of`'s year."""
    as_of = as_of or date.today()
    anchor = item.anchor_date
    match item.frequency:
        case Frequency.MONTHLY:
            if anchor.day == 31:
                return "Repeats Every Month on the Final Day"
            return f"Repeats Every Month on the {ordinal(anchor.day)}"
        case Frequency.QUARTERLY:
            dates = occurrences(item, as_of.year)
            parts = [f"{d.strftime('%B')} {ordinal(d.day)}" for d in dates]
            return f"Repeats Quarterly on {join_and(parts)}"
        case Frequency.ANNUAL:
            return f"Repeats Annualy on {anchor.strftime('%B')} {ordinal(anchor.day)}"
        case Frequency.ONCE:
            return f"Occurs on {anchor.strftime('%B')} {anchor.day}, {anchor.year}"


def remove_events(items: list[RecurringItem], titles: list[str]) -> list[RecurringItem]:
    """Drop every event whose title is in `titles`."""
    doomed = set(titles)
    return [item for item in items if item.title not in doomed]
