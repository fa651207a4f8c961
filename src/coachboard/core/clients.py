"""Pure client schedule logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, time

from .dates import Weekday
from .errors import MalformedRecord
from .events import parse_date
from .text import format_clock, join_and, parse_clock


def slot_time(value) -> time:
    """
    A training slot's time of day.

    Unquoted `6:00` in hand-edited YAML loads as the base-60 integer 360,
    so integers are read as minutes after midnight.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value < 24 * 60:
            raise ValueError(f"Unrecognized time of day: {value!r}")
        return time(*divmod(value, 60))
    return parse_clock(value)


@dataclass(frozen=True)
class ClientScheduleRecord:
    """A client's birthday and weekly workout schedule."""

    client_name: str
    birth_date: date
    workout_weekdays: dict[Weekday, time] = field(default_factory=dict, hash=False)
    extra_workout_weekdays: frozenset[Weekday] = frozenset()
    archived: bool = False
    email: str = ""
    address: str = ""
    extra: dict = field(default_factory=dict, compare=False, hash=False)

    def trains_on(self, day: Weekday) -> bool:
        return day in self.workout_weekdays

    def has_extra_workout(self, day: Weekday) -> bool:
        return day in self.extra_workout_weekdays

    @classmethod
    def from_record(cls, data: dict, archived: bool = False) -> "ClientScheduleRecord":
        """Create from a client's data.yml mapping."""
        if not isinstance(data, dict):
            raise MalformedRecord("Client record is not a mapping", data)
        first = str(data.get("first_name") or "").strip()
        last = str(data.get("last_name") or "").strip()
        if not first and not last:
            raise MalformedRecord("Client record has no name", data)
        name = f"{first} {last}".strip()
        if not data.get("date_of_birth"):
            raise MalformedRecord(f"Client {name!r} has no date of birth", data)

        try:
            birth_date = parse_date(data["date_of_birth"])
            schedule = {
                Weekday.parse(day): slot_time(clock)
                for day, clock in (data.get("training_schedule") or {}).items()
                if clock not in (None, "")
            }
            extra_days = data.get("additional_workouts") or []
            if isinstance(extra_days, dict):
                # Checkbox form input arrives as {day: "on"}
                extra_days = list(extra_days)
            extra_workouts = frozenset(Weekday.parse(day) for day in extra_days)
        except (ValueError, AttributeError) as e:
            raise MalformedRecord(f"Client {name!r}: {e}", data) from e

        known = {
            "first_name", "last_name", "date_of_birth", "email", "address",
            "training_schedule", "additional_workouts",
        }
        return cls(
            client_name=name,
            birth_date=birth_date,
            workout_weekdays=schedule,
            extra_workout_weekdays=extra_workouts,
            archived=archived,
            email=str(data.get("email") or ""),
            address=str(data.get("address") or ""),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def display_fields(self) -> list[tuple[str, "ClientField"]]:
        """Labelled profile fields for a client detail view."""
        return [
            ("Name", ScalarField(self.client_name)),
            ("Date Of Birth", DateField(self.birth_date)),
            ("Email", ScalarField(self.email)),
            ("Address", ScalarField(self.address)),
            ("Training Schedule", ScheduleField(self.workout_weekdays)),
            ("Additional Workouts", ListField([d.label for d in sorted(self.extra_workout_weekdays)])),
        ]


# Profile field variants, one formatter each


@dataclass(frozen=True)
class DateField:
    value: date

    def format(self) -> str:
        return self.value.strftime("%B %d, %Y")


@dataclass(frozen=True)
class ScheduleField:
    value: dict[Weekday, time]

    def format(self) -> str:
        slots = [f"{day.label}s at {format_clock(t)}" for day, t in sorted(self.value.items())]
        return join_and(slots)


@dataclass(frozen=True)
class ListField:
    value: list[str]

    def format(self) -> str:
        return join_and(self.value)


@dataclass(frozen=True)
class ScalarField:
    value: object

    def format(self) -> str:
        return f"{self.value}"


ClientField = DateField | ScheduleField | ListField | ScalarField


def current_clients(clients: list[ClientScheduleRecord]) -> list[ClientScheduleRecord]:
    return [c for c in clients if not c.archived]


def format_client(form: dict) -> dict:
    """
    Normalize new-client form input into a storable record.

    Drops blank training times, stores the birth date as ISO text and
    turns checkbox-style additional workouts into a list of day names.
    """
    record = {k: v for k, v in form.items()}
    record["first_name"] = str(form.get("first_name") or "").strip()
    record["last_name"] = str(form.get("last_name") or "").strip()
    record["date_of_birth"] = parse_date(form["date_of_birth"]).isoformat()
    record["training_schedule"] = {
        Weekday.parse(day).label: format_clock(slot_time(clock))
        for day, clock in (form.get("training_schedule") or {}).items()
        if clock not in (None, "")
    }
    extra_days = form.get("additional_workouts") or []
    record["additional_workouts"] = [Weekday.parse(day).label for day in extra_days]
    return record
