"""Pure formatting of agendas for text and markdown output."""

from datetime import date, time

from .agenda import Agenda, days_until
from .dates import Weekday
from .text import format_clock


def format_relative_day(day: date, as_of: date | None = None) -> str:
    """'today', 'tomorrow', or 'in 5d'."""
    delta = days_until(day, as_of)
    if delta == 0:
        return "today"
    if delta == 1:
        return "tomorrow"
    return f"in {delta}d"


def format_week_markdown(agenda: Agenda, today: Weekday | None = None) -> str:
    """
    Render a week agenda as markdown, one heading per day.

    Pure function - no I/O.
    """
    sections = []
    for day, lines in agenda.items():
        heading = f"### {day.label}"
        if day is today:
            heading += " (today)"
        body = "\n".join(f"- {line}" for line in lines)
        sections.append(f"{heading}\n{body}")
    return "\n\n".join(sections)


def format_today_markdown(
    lines: list[str],
    sessions: list[tuple[time, str]],
    as_of: date | None = None,
) -> str:
    """Today's tasks and training sessions as markdown."""
    as_of = as_of or date.today()
    tasks_md = "\n".join(f"- {line}" for line in lines) or "No tasks today."
    sessions_md = (
        "\n".join(f"- {format_clock(start)} {name}" for start, name in sessions)
        or "No sessions today."
    )
    return (
        f"## {as_of.strftime('%A, %B %d')}\n\n"
        f"### Tasks\n{tasks_md}\n\n"
        f"### Sessions\n{sessions_md}"
    )


def format_upcoming_markdown(upcoming: dict[date, list[str]], as_of: date | None = None) -> str:
    """Upcoming birthdays and events grouped by date."""
    if not upcoming:
        return "Nothing coming up."
    sections = []
    for day, lines in upcoming.items():
        heading = f"### {day.strftime('%A, %B %d')} ({format_relative_day(day, as_of)})"
        body = "\n".join(f"- {line}" for line in lines)
        sections.append(f"{heading}\n{body}")
    return "\n\n".join(sections)
