"""Functional core - pure business logic with no I/O."""

from .dates import Weekday, Window, normalize, in_week, in_month, ordered_from, monday_first
from .text import ordinal, join_and
from .errors import RecordError, MalformedRecord, InvalidAnchorDate
from .events import Frequency, RecurringItem, occurrences, describe
from .tasks import CustomTask, new_task, remove_task_days
from .clients import ClientScheduleRecord
from .agenda import (
    week_agenda,
    today_agenda,
    todays_sessions,
    birthdays_in_window,
    events_in_window,
    merge_upcoming,
)
from .sweep import SweepReport, expired_tasks, expired_events, apply_removals

__all__ = [
    # Dates
    "Weekday",
    "Window",
    "normalize",
    "in_week",
    "in_month",
    "ordered_from",
    "monday_first",
    # Text
    "ordinal",
    "join_and",
    # Errors
    "RecordError",
    "MalformedRecord",
    "InvalidAnchorDate",
    # Events
    "Frequency",
    "RecurringItem",
    "occurrences",
    "describe",
    # Tasks
    "CustomTask",
    "new_task",
    "remove_task_days",
    # Clients
    "ClientScheduleRecord",
    # Agenda
    "week_agenda",
    "today_agenda",
    "todays_sessions",
    "birthdays_in_window",
    "events_in_window",
    "merge_upcoming",
    # Sweep
    "SweepReport",
    "expired_tasks",
    "expired_events",
    "apply_removals",
]
