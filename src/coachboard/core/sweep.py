"""Expiration sweep - find lapsed tasks and events, remove them idempotently."""

from dataclasses import dataclass, field
from datetime import date
from typing import TypeVar

from .events import RecurringItem
from .tasks import CustomTask

T = TypeVar("T")


@dataclass
class SweepReport:
    """Items removed from storage by one sweep."""

    tasks: list[CustomTask] = field(default_factory=list)
    events: list[RecurringItem] = field(default_factory=list)

    @property
    def removed(self) -> int:
        return len(self.tasks) + len(self.events)

    def titles(self) -> list[str]:
        return [t.title for t in self.tasks] + [e.title for e in self.events]


def expired_tasks(tasks: list[CustomTask], as_of: date | None = None) -> list[CustomTask]:
    """Tasks whose expiry date has been reached."""
    as_of = as_of or date.today()
    return [t for t in tasks if t.is_expired(as_of)]


def expired_events(items: list[RecurringItem], as_of: date | None = None) -> list[RecurringItem]:
    """Events past their expiry, and one-time events already gone by."""
    as_of = as_of or date.today()
    return [e for e in items if e.is_expired(as_of)]


def apply_removals(current: list[T], removed: list[T]) -> tuple[list[T], bool]:
    """
    Remove `removed` from `current`.

    Items no longer present are ignored, so repeating a sweep is a no-op.
    Returns the kept items and whether anything was actually dropped.
    """
    if not removed:
        return list(current), False
    kept = [item for item in current if item not in removed]
    return kept, len(kept) != len(current)
