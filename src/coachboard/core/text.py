"""Text helpers for display strings - no I/O."""

from datetime import datetime, time

_CLOCK_FORMATS = ("%H:%M", "%I:%M %p", "%I:%M%p", "%H:%M:%S")


def ordinal(n: int) -> str:
    """1 -> '1st', 11 -> '11th', 22 -> '22nd'."""
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def join_and(items: list[str]) -> str:
    """
    Join words into an English list with an Oxford comma.

    [] -> "", [A] -> "A", [A, B] -> "A and B", [A, B, C] -> "A, B, and C"
    """
    items = list(items)
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return ", ".join(items[:-1]) + f", and {items[-1]}"


def titleize(slug: str) -> str:
    """'john_smith' -> 'John Smith'."""
    return " ".join(part.capitalize() for part in str(slug).split("_") if part)


def slugify_name(first_name: str, last_name: str = "") -> str:
    """'Mary Ann', 'Smith' -> 'mary_ann_smith'. A full name or an existing slug works alone."""
    words = f"{first_name} {last_name}".lower().split()
    return "_".join(words)


def format_clock(t: time) -> str:
    """time(6, 0) -> '6:00 AM'."""
    return t.strftime("%I:%M %p").lstrip("0")


def parse_clock(value: str) -> time:
    """Parse '18:30', '6:30 PM' or '6:30PM'."""
    text = str(value).strip().upper()
    for fmt in _CLOCK_FORMATS:
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Unrecognized time of day: {value!r}")
