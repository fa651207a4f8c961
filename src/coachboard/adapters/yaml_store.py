"""YAML file record store adapter."""

import logging
import shutil
from pathlib import Path

import yaml

from coachboard.core.clients import ClientScheduleRecord
from coachboard.core.errors import MalformedRecord, RecordError
from coachboard.core.events import RecurringItem
from coachboard.core.tasks import CustomTask

logger = logging.getLogger(__name__)


class YamlRecordStore:
    """
    File-based record storage.

    Implements RecordStore protocol. Tasks and events each live in one YAML
    list; every client gets a directory holding data.yml and documents/.
    Records that fail to parse are skipped on load, kept in `load_errors`,
    and written back untouched on the next save.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()
        self.tasks_file = self.data_dir / "tasks.yml"
        self.events_file = self.data_dir / "events.yml"
        self.current_dir = self.data_dir / "clients" / "current"
        self.archived_dir = self.data_dir / "clients" / "archived"
        self._errors: dict[str, list[RecordError]] = {}
        self._unparsed: dict[Path, list] = {}
        self._unreadable: set[Path] = set()

    @property
    def load_errors(self) -> list[RecordError]:
        """Records skipped by the latest load of each file."""
        return [e for errors in self._errors.values() for e in errors]

    # ============== Raw YAML ==============

    def _read_list(self, path: Path) -> list:
        self._unreadable.discard(path)
        if not path.exists():
            return []
        text = path.read_text(encoding="utf-8")
        if not text.strip():
            return []
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            logger.warning(f"Failed to parse {path}: {e}")
            self._unreadable.add(path)
            return []
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning(f"Expected a list in {path}, got {type(data).__name__}")
            self._unreadable.add(path)
            return []
        return data

    def _write_list(self, path: Path, records: list[dict]) -> None:
        if path in self._unreadable:
            raise RuntimeError(f"Refusing to overwrite unreadable file {path}")
        path.parent.mkdir(parents=True, exist_ok=True)
        records = records + self._unparsed.get(path, [])
        path.write_text(
            yaml.safe_dump(records, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )

    def _parse_all(self, path: Path, parse) -> list:
        items = []
        unparsed = []
        errors = []
        for raw in self._read_list(path):
            try:
                items.append(parse(raw))
            except RecordError as e:
                logger.warning(f"Skipping record in {path.name}: {e}")
                errors.append(e)
                unparsed.append(raw)
        self._unparsed[path] = unparsed
        self._errors[path.name] = errors
        return items

    # ============== Tasks and events ==============

    def load_tasks(self) -> list[CustomTask]:
        """Load all custom tasks in stored order."""
        return self._parse_all(self.tasks_file, CustomTask.from_record)

    def save_tasks(self, tasks: list[CustomTask]) -> None:
        """Overwrite the stored tasks."""
        self._write_list(self.tasks_file, [t.to_record() for t in tasks])

    def load_events(self) -> list[RecurringItem]:
        """Load all custom events in stored order."""
        return self._parse_all(self.events_file, RecurringItem.from_record)

    def save_events(self, events: list[RecurringItem]) -> None:
        """Overwrite the stored events."""
        self._write_list(self.events_file, [e.to_record() for e in events])

    # ============== Clients ==============

    def client_dirs(self, archived: bool = False) -> list[Path]:
        """Client directories, sorted by directory name."""
        root = self.archived_dir if archived else self.current_dir
        if not root.exists():
            return []
        return sorted(p for p in root.iterdir() if p.is_dir())

    def load_client_records(self) -> list[ClientScheduleRecord]:
        """Load current clients, then archived clients."""
        clients = []
        errors = []
        for archived in (False, True):
            for client_dir in self.client_dirs(archived):
                data_path = client_dir / "data.yml"
                if not data_path.exists():
                    logger.warning(f"No data.yml in {client_dir}")
                    continue
                try:
                    data = yaml.safe_load(data_path.read_text(encoding="utf-8"))
                    clients.append(ClientScheduleRecord.from_record(data, archived=archived))
                except yaml.YAMLError as e:
                    logger.warning(f"Failed to parse {data_path}: {e}")
                    errors.append(MalformedRecord(f"Unreadable client file {data_path}: {e}"))
                except RecordError as e:
                    logger.warning(f"Skipping client {client_dir.name}: {e}")
                    errors.append(e)
        self._errors["clients"] = errors
        return clients

    def save_client_record(self, slug: str, record: dict) -> None:
        """Write a current client's data.yml, creating its documents directory."""
        client_dir = self.current_dir / slug
        (client_dir / "documents").mkdir(parents=True, exist_ok=True)
        (client_dir / "data.yml").write_text(
            yaml.safe_dump(record, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )

    def has_client(self, slug: str, archived: bool = False) -> bool:
        root = self.archived_dir if archived else self.current_dir
        return (root / slug).is_dir()

    def load_client_data(self, slug: str) -> dict | None:
        """Raw data.yml mapping for a current client, or None if there is no such client."""
        data_path = self.current_dir / slug / "data.yml"
        if not data_path.exists():
            return None
        try:
            data = yaml.safe_load(data_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise MalformedRecord(f"Unreadable client file {data_path}: {e}") from e
        if not isinstance(data, dict):
            raise MalformedRecord(f"Client file {data_path} is not a mapping", data)
        return data

    def _move_client(self, slug: str, source: Path, target: Path) -> bool:
        if not (source / slug).is_dir():
            return False
        if (target / slug).exists():
            raise RuntimeError(f"Refusing to overwrite existing client directory {target / slug}")
        target.mkdir(parents=True, exist_ok=True)
        shutil.move(source / slug, target / slug)
        logger.info(f"Moved {source / slug} to {target / slug}")
        return True

    def archive_client(self, slug: str) -> bool:
        """Move a current client to the archive. False if it was not current."""
        return self._move_client(slug, self.current_dir, self.archived_dir)

    def restore_client(self, slug: str) -> bool:
        """Move an archived client back to current. False if it was not archived."""
        return self._move_client(slug, self.archived_dir, self.current_dir)

    def rename_client(self, old_slug: str, new_slug: str) -> None:
        """Rename a current client's directory, documents included."""
        old_dir = self.current_dir / old_slug
        new_dir = self.current_dir / new_slug
        if new_dir.exists():
            raise RuntimeError(f"Refusing to overwrite existing client directory {new_dir}")
        old_dir.rename(new_dir)

    def delete_client(self, slug: str) -> bool:
        """Remove an archived client's directory. False if it was already gone."""
        client_dir = self.archived_dir / slug
        if not client_dir.is_dir():
            return False
        shutil.rmtree(client_dir)
        logger.info(f"Deleted {client_dir}")
        return True
