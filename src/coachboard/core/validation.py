"""Form input validation - returns a readable message, or None when valid."""

import re
from datetime import date

from .events import Frequency, parse_date
from .text import join_and

# Same shape check as a typical mailto address: local@domain.tld
_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9.!#$%&'*+/=?^_`{|}~-]+@[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+$")


def _blank(value) -> bool:
    return value is None or (hasattr(value, "__len__") and len(value) == 0)


def validate_task(title: str, weekdays, frequency_tag: str) -> str | None:
    """Check a new task has a title, at least one day and a frequency."""
    errors = []
    if _blank(title and title.strip()):
        errors.append("enter a task description")
    if _blank(weekdays):
        errors.append("set your task's schedule")
    if _blank(frequency_tag):
        errors.append("select a frequency")
    return f"Please {join_and(errors)}" if errors else None


def validate_event(title: str, anchor: str, frequency: str) -> str | None:
    """Check a new event has a title, a parseable date and a known frequency."""
    errors = []
    if _blank(title and title.strip()):
        errors.append("enter an event description")
    if _blank(anchor):
        errors.append("set your event's date")
    else:
        try:
            parse_date(anchor)
        except ValueError:
            errors.append("set a valid date for your event")
    if _blank(frequency) or frequency not in {f.value for f in Frequency}:
        errors.append("select a frequency")
    return f"Please {join_and(errors)}" if errors else None


def validate_client(form: dict, as_of: date | None = None) -> str | None:
    """
    Check new-client form input.

    Messages are ordered shortest first.
    """
    as_of = as_of or date.today()
    errors = []

    if _blank(str(form.get("first_name") or "").strip()) or _blank(
        str(form.get("last_name") or "").strip()
    ):
        errors.append("a complete name")

    dob = form.get("date_of_birth")
    try:
        if _blank(dob) or parse_date(dob) > as_of:
            errors.append("a valid date of birth")
    except ValueError:
        errors.append("a valid date of birth")

    if not _EMAIL_PATTERN.match(str(form.get("email") or "")):
        errors.append("a valid email address")

    if _blank(str(form.get("address") or "").strip()):
        errors.append("a street address containing the city, state, and street name and number")

    errors.sort(key=len)
    return f"Please enter {join_and(errors)}" if errors else None
