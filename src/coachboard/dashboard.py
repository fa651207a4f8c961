"""Dashboard service layer shared by the CLI and the Telegram bot.

Each read verb loads one snapshot from the record store, computes from it,
and only then writes back any expired items it found along the way.
"""

import logging
from datetime import date

from .adapters.yaml_store import YamlRecordStore
from .config import Config
from .core import agenda
from .core.clients import ClientScheduleRecord, format_client
from .core.dates import Weekday, Window, ordered_from
from .core.errors import RecordError
from .core.events import Frequency, RecurringItem, describe, parse_date, remove_events
from .core.sweep import SweepReport, apply_removals, expired_events, expired_tasks
from .core.tasks import CustomTask, new_task, remove_task_days
from .core.text import slugify_name, titleize
from .core.validation import validate_client, validate_event, validate_task
from .ports.record_store import RecordStore

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Form input rejected; the message is ready to show the user."""


def get_store(config: Config) -> YamlRecordStore:
    """Resolve the record store from config."""
    return YamlRecordStore(config.resolved_data_dir())


class Dashboard:
    """Computes agendas from a record store and sweeps expired items."""

    def __init__(self, store: RecordStore, as_of: date | None = None):
        self.store = store
        self._as_of = as_of

    @classmethod
    def from_config(cls, config: Config, as_of: date | None = None) -> "Dashboard":
        return cls(get_store(config), as_of=as_of)

    @property
    def today(self) -> date:
        return self._as_of or date.today()

    @property
    def load_errors(self) -> list[RecordError]:
        """Records skipped by the latest loads."""
        return list(self.store.load_errors)

    # ============== Sweep ==============

    def _apply_sweep(
        self,
        tasks: list[CustomTask] | None = None,
        events: list[RecurringItem] | None = None,
    ) -> SweepReport:
        """Remove buffered expired items from the store after a pass completes."""
        report = SweepReport()
        if tasks:
            kept, changed = apply_removals(self.store.load_tasks(), tasks)
            if changed:
                self.store.save_tasks(kept)
                report.tasks = tasks
        if events:
            kept, changed = apply_removals(self.store.load_events(), events)
            if changed:
                self.store.save_events(kept)
                report.events = events
        if report.removed:
            logger.info(f"Swept {report.removed} expired item(s): {', '.join(report.titles())}")
        return report

    def sweep(self) -> SweepReport:
        """Remove every expired task and event."""
        return self._apply_sweep(
            expired_tasks(self.store.load_tasks(), self.today),
            expired_events(self.store.load_events(), self.today),
        )

    # ============== Read verbs ==============

    def week_agenda(self, order: list[Weekday] | None = None) -> agenda.Agenda:
        """Tasks and client workouts for each day of the week."""
        tasks = self.store.load_tasks()
        clients = self.store.load_client_records()
        result = agenda.week_agenda(tasks, clients, self.today)
        self._apply_sweep(tasks=expired_tasks(tasks, self.today))
        if order is not None:
            result = agenda.reorder(result, order)
        return result

    def week_order(self, starts_on: str = "today") -> list[Weekday]:
        """Display order for a config `week_starts_on` value."""
        match starts_on:
            case "sunday":
                return list(Weekday)
            case "monday":
                return ordered_from(Weekday.MONDAY)
            case _:
                return ordered_from(Weekday.of(self.today))

    def today_agenda(self) -> list[str]:
        """Today's tasks plus reminders to send tomorrow's workouts."""
        tasks = self.store.load_tasks()
        clients = self.store.load_client_records()
        result = agenda.today_agenda(tasks, clients, self.today)
        self._apply_sweep(tasks=expired_tasks(tasks, self.today))
        return result

    def todays_sessions(self):
        return agenda.todays_sessions(self.store.load_client_records(), self.today)

    def birthdays_in_window(self, window: Window) -> dict[date, list[str]]:
        return agenda.birthdays_in_window(self.store.load_client_records(), window, self.today)

    def events_in_window(self, window: Window) -> dict[date, list[str]]:
        events = self.store.load_events()
        result = agenda.events_in_window(events, window, self.today)
        self._apply_sweep(events=expired_events(events, self.today))
        return result

    def upcoming(self, window: Window) -> dict[date, list[str]]:
        """Birthdays and events in the window, merged by date."""
        clients = self.store.load_client_records()
        events = self.store.load_events()
        birthdays = agenda.birthdays_in_window(clients, window, self.today)
        found = agenda.events_in_window(events, window, self.today)
        self._apply_sweep(events=expired_events(events, self.today))
        return agenda.merge_upcoming(birthdays, found)

    def describe_recurrence(self, item: RecurringItem) -> str:
        return describe(item, self.today)

    def list_tasks(self) -> list[CustomTask]:
        tasks = self.store.load_tasks()
        return [t for t in tasks if t.is_live(self.today)]

    def list_events(self) -> list[tuple[RecurringItem, str]]:
        """Live events sorted by title, each with its recurrence description."""
        events = [e for e in self.store.load_events() if not e.is_expired(self.today)]
        return [(e, describe(e, self.today)) for e in sorted(events, key=lambda e: e.title.lower())]

    def list_clients(self) -> list[ClientScheduleRecord]:
        return self.store.load_client_records()

    # ============== Write verbs ==============

    def add_task(self, title: str, weekdays: list[Weekday], frequency_tag: str) -> CustomTask:
        error = validate_task(title, weekdays, frequency_tag)
        if error:
            raise ValidationError(error)
        task = new_task(title, weekdays, frequency_tag, self.today)
        self.store.save_tasks(self.store.load_tasks() + [task])
        logger.info(f"Added task {task.title!r}")
        return task

    def delete_task_days(self, removals: dict[Weekday, list[str]]) -> list[str]:
        """Unschedule tasks from days. Returns the affected titles."""
        tasks = self.store.load_tasks()
        self.store.save_tasks(remove_task_days(tasks, removals))
        titles = []
        for day_titles in removals.values():
            titles += [t for t in day_titles if t not in titles]
        return titles

    def add_event(self, title: str, anchor: str, frequency: str) -> RecurringItem:
        error = validate_event(title, anchor, frequency)
        if error:
            raise ValidationError(error)
        item = RecurringItem(
            title=title.strip(),
            anchor_date=parse_date(anchor),
            frequency=Frequency(frequency),
        )
        self.store.save_events(self.store.load_events() + [item])
        logger.info(f"Added event {item.title!r}")
        return item

    def delete_events(self, titles: list[str]) -> None:
        self.store.save_events(remove_events(self.store.load_events(), titles))

    def add_client(self, form: dict) -> str:
        """Validate and store a new current client. Returns the directory slug."""
        error = validate_client(form, self.today)
        if error:
            raise ValidationError(error)
        record = format_client(form)
        slug = slugify_name(record["first_name"], record["last_name"])
        self._require_new_client(slug)
        self.store.save_client_record(slug, record)
        logger.info(f"Added client {slug}")
        return slug

    def _require_new_client(self, slug: str) -> None:
        if self.store.has_client(slug) or self.store.has_client(slug, archived=True):
            raise ValidationError(f"{titleize(slug)} already exists")

    def _require_client(self, slug: str) -> None:
        if not (self.store.has_client(slug) or self.store.has_client(slug, archived=True)):
            raise ValidationError(f"There is no client named {titleize(slug)}")

    def update_client(self, slug: str, changes: dict) -> str:
        """
        Apply edits to a current client and store the re-validated record.

        A changed name renames the client directory. Returns the new slug.
        """
        existing = self.store.load_client_data(slug)
        if existing is None:
            raise ValidationError(f"There is no current client named {titleize(slug)}")
        form = {**existing, **changes}
        error = validate_client(form, self.today)
        if error:
            raise ValidationError(error)
        record = format_client(form)
        new_slug = slugify_name(record["first_name"], record["last_name"])
        if new_slug != slug:
            self._require_new_client(new_slug)
            self.store.rename_client(slug, new_slug)
            logger.info(f"Renamed client {slug} to {new_slug}")
        self.store.save_client_record(new_slug, record)
        return new_slug

    def archive_client(self, slug: str) -> bool:
        """Move a client to the archive. False if already archived."""
        self._require_client(slug)
        return self.store.archive_client(slug)

    def restore_client(self, slug: str) -> bool:
        """Move a client back to current. False if already current."""
        self._require_client(slug)
        return self.store.restore_client(slug)

    def delete_client(self, slug: str) -> bool:
        """Delete an archived client. False if there was nothing to delete."""
        if self.store.has_client(slug):
            raise ValidationError(f"Archive {titleize(slug)} before deleting")
        return self.store.delete_client(slug)
