"""Record store interface."""

from typing import Protocol

from coachboard.core.clients import ClientScheduleRecord
from coachboard.core.errors import RecordError
from coachboard.core.events import RecurringItem
from coachboard.core.tasks import CustomTask


class RecordStore(Protocol):
    """Interface for loading and saving dashboard records from any backend."""

    # Records skipped by loads since the list was last cleared
    load_errors: list[RecordError]

    def load_tasks(self) -> list[CustomTask]:
        """Load all custom tasks in stored order."""
        ...

    def save_tasks(self, tasks: list[CustomTask]) -> None:
        """Overwrite the stored tasks."""
        ...

    def load_events(self) -> list[RecurringItem]:
        """Load all custom events in stored order."""
        ...

    def save_events(self, events: list[RecurringItem]) -> None:
        """Overwrite the stored events."""
        ...

    def load_client_records(self) -> list[ClientScheduleRecord]:
        """Load current and archived clients."""
        ...

    def save_client_record(self, slug: str, record: dict) -> None:
        """Write one client's record, creating its directory if needed."""
        ...

    def has_client(self, slug: str, archived: bool = False) -> bool:
        """Whether a client directory exists in current or archived."""
        ...

    def load_client_data(self, slug: str) -> dict | None:
        """Raw stored record of a current client, or None."""
        ...

    def archive_client(self, slug: str) -> bool:
        """Move a current client to the archive. False if it was not current."""
        ...

    def restore_client(self, slug: str) -> bool:
        """Move an archived client back to current. False if it was not archived."""
        ...

    def rename_client(self, old_slug: str, new_slug: str) -> None:
        """Rename a current client, keeping its documents."""
        ...

    def delete_client(self, slug: str) -> bool:
        """Remove an archived client. False if it was already gone."""
        ...
