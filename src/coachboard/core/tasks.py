"""Pure custom-task domain logic - no I/O dependencies."""

from dataclasses import dataclass, field, replace
from datetime import date, timedelta

from .dates import Weekday
from .errors import MalformedRecord
from .events import parse_date

THIS_WEEK = "this_week"
EVERY_WEEK = "every_week"


@dataclass(frozen=True)
class CustomTask:
    """A task repeated on a set of weekdays."""

    title: str
    weekdays: frozenset[Weekday]
    frequency_tag: str = EVERY_WEEK
    expiry: date | None = None
    extra: dict = field(default_factory=dict, compare=False, hash=False)

    def is_expired(self, as_of: date | None = None) -> bool:
        """Expiry date reached (expires at the start of its expiry day)."""
        if self.expiry is None:
            return False
        as_of = as_of or date.today()
        return as_of >= self.expiry

    def is_live(self, as_of: date | None = None) -> bool:
        """Scheduled on at least one day and not expired."""
        return bool(self.weekdays) and not self.is_expired(as_of)

    def occurs_on(self, day: Weekday) -> bool:
        return day in self.weekdays

    @classmethod
    def from_record(cls, data: dict) -> "CustomTask":
        """Create from a persisted record. Unknown keys are kept in `extra`."""
        if not isinstance(data, dict):
            raise MalformedRecord("Task record is not a mapping", data)
        title = data.get("title")
        if not title:
            raise MalformedRecord("Task record has no title", data)
        schedule = data.get("schedule")
        if not isinstance(schedule, list):
            raise MalformedRecord(f"Task {title!r} has no schedule", data)
        try:
            weekdays = frozenset(Weekday.parse(name) for name in schedule)
            expiry = parse_date(data["delete_on"]) if data.get("delete_on") else None
        except ValueError as e:
            raise MalformedRecord(f"Task {title!r}: {e}", data) from e

        known = {"title", "schedule", "frequency", "delete_on"}
        return cls(
            title=str(title),
            weekdays=weekdays,
            frequency_tag=str(data.get("frequency") or EVERY_WEEK),
            expiry=expiry,
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_record(self) -> dict:
        record = {
            "title": self.title,
            "schedule": [day.label for day in sorted(self.weekdays)],
            "frequency": self.frequency_tag,
        }
        if self.expiry is not None:
            record["delete_on"] = self.expiry.isoformat()
        record.update(self.extra)
        return record


def new_task(
    title: str,
    weekdays: list[Weekday],
    frequency_tag: str = EVERY_WEEK,
    as_of: date | None = None,
) -> CustomTask:
    """
    Build a task from form input.

    A "this_week" task expires seven days after it is created.
    """
    as_of = as_of or date.today()
    expiry = as_of + timedelta(days=7) if frequency_tag == THIS_WEEK else None
    return CustomTask(
        title=title.strip().replace('"', "'"),
        weekdays=frozenset(weekdays),
        frequency_tag=frequency_tag,
        expiry=expiry,
    )


def tasks_on(tasks: list[CustomTask], day: Weekday, as_of: date | None = None) -> list[str]:
    """Titles of live tasks scheduled on `day`, in stored order."""
    return [t.title for t in tasks if t.is_live(as_of) and t.occurs_on(day)]


def remove_task_days(
    tasks: list[CustomTask],
    removals: dict[Weekday, list[str]],
) -> list[CustomTask]:
    """
    Unschedule titled tasks from specific days.

    Tasks left with no days are dropped entirely.
    """
    result = []
    for task in tasks:
        dropped = {day for day, titles in removals.items() if task.title in titles}
        if dropped & task.weekdays:
            task = replace(task, weekdays=task.weekdays - dropped)
        if task.weekdays:
            result.append(task)
    return result
