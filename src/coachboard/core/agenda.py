"""Pure agenda assembly - merges tasks, events, birthdays and workouts."""

from datetime import date, time

from .clients import ClientScheduleRecord, current_clients
from .dates import Weekday, Window, project_to_year
from .events import RecurringItem, occurrences
from .tasks import CustomTask, tasks_on
from .text import join_and

NO_TASKS = "You have no tasks scheduled"

Agenda = dict[Weekday, list[str]]


def workouts_due(clients: list[ClientScheduleRecord], day: Weekday) -> list[str]:
    """Names of current clients with an additional workout on `day`."""
    return [c.client_name for c in current_clients(clients) if c.has_extra_workout(day)]


def week_agenda(
    tasks: list[CustomTask],
    clients: list[ClientScheduleRecord],
    as_of: date | None = None,
) -> Agenda:
    """
    Seven-day agenda in canonical Sunday..Saturday order.

    Each day lists live task titles, then one "Client workouts due" line if
    any client has an additional workout that day. Empty days get a
    placeholder line. Expired tasks are skipped, never removed here.
    """
    as_of = as_of or date.today()
    agenda: Agenda = {}
    for day in Weekday:
        lines = tasks_on(tasks, day, as_of)
        names = workouts_due(clients, day)
        if names:
            lines.append(f"Client workouts due: {join_and(names)}")
        if not lines:
            lines.append(NO_TASKS)
        agenda[day] = lines
    return agenda


def reorder(agenda: Agenda, order: list[Weekday]) -> Agenda:
    """Same agenda with keys in a display order."""
    return {day: agenda[day] for day in order if day in agenda}


def today_agenda(
    tasks: list[CustomTask],
    clients: list[ClientScheduleRecord],
    as_of: date | None = None,
) -> list[str]:
    """
    Today's task titles followed by workout-sending reminders.

    Workouts are sent the day before they are due. Sunday's workouts go
    out on Friday along with Saturday's.
    """
    as_of = as_of or date.today()
    today = Weekday.of(as_of)
    tomorrow = today.next()

    lines = tasks_on(tasks, today, as_of)
    lines += [f"Send tomorrow's workout to {name}" for name in workouts_due(clients, tomorrow)]
    if tomorrow is Weekday.SATURDAY:
        lines += [f"Send Sunday's workout to {name}" for name in workouts_due(clients, Weekday.SUNDAY)]
    return lines


def todays_sessions(
    clients: list[ClientScheduleRecord],
    as_of: date | None = None,
) -> list[tuple[time, str]]:
    """Training sessions today as (start time, client name), earliest first."""
    as_of = as_of or date.today()
    today = Weekday.of(as_of)
    sessions = [
        (c.workout_weekdays[today], c.client_name)
        for c in current_clients(clients)
        if c.trains_on(today)
    ]
    return sorted(sessions)


def birthdays_in_window(
    clients: list[ClientScheduleRecord],
    window: Window,
    as_of: date | None = None,
) -> dict[date, list[str]]:
    """
    Client birthdays in the window, keyed by this year's birthday.

    Covers current and archived clients.
    """
    as_of = as_of or date.today()
    found: dict[date, list[str]] = {}
    for client in clients:
        if window.contains(client.birth_date, as_of):
            day = project_to_year(client.birth_date, as_of.year)
            found.setdefault(day, []).append(client.client_name)
    return dict(sorted(found.items()))


def events_in_window(
    items: list[RecurringItem],
    window: Window,
    as_of: date | None = None,
) -> dict[date, list[str]]:
    """Event titles by occurrence date for occurrences inside the window."""
    as_of = as_of or date.today()
    found: dict[date, list[str]] = {}
    for item in items:
        if item.is_expired(as_of):
            continue
        # One-time items keep their own year; only month and day decide the window.
        for day in occurrences(item, as_of.year):
            if window.contains(day, as_of):
                found.setdefault(day, []).append(item.title)
    return dict(sorted(found.items()))


def merge_upcoming(
    birthdays: dict[date, list[str]],
    events: dict[date, list[str]],
) -> dict[date, list[str]]:
    """Combine birthdays and events into one date-sorted map of display lines."""
    merged: dict[date, list[str]] = {}
    for day, names in birthdays.items():
        merged.setdefault(day, []).extend(f"{name}'s birthday" for name in names)
    for day, titles in events.items():
        merged.setdefault(day, []).extend(titles)
    return dict(sorted(merged.items()))


def days_until(day: date, as_of: date | None = None) -> int:
    as_of = as_of or date.today()
    return (day - as_of).days
