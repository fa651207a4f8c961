"""Tests for the YAML record store adapter."""

from datetime import date, time

import pytest
import yaml

from coachboard.adapters.yaml_store import YamlRecordStore
from coachboard.core.dates import Weekday
from coachboard.core.errors import InvalidAnchorDate, MalformedRecord
from coachboard.core.events import Frequency, RecurringItem
from coachboard.core.tasks import CustomTask


@pytest.fixture
def store(tmp_path):
    return YamlRecordStore(tmp_path)


def write_yaml(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False))


def write_client(store, slug, data, archived=False):
    root = store.archived_dir if archived else store.current_dir
    write_yaml(root / slug / "data.yml", data)


class TestTasks:
    def test_missing_file_is_empty(self, store):
        assert store.load_tasks() == []

    def test_empty_file_is_empty(self, store):
        store.tasks_file.write_text("")
        assert store.load_tasks() == []

    def test_round_trip(self, store):
        tasks = [
            CustomTask("Post schedule", frozenset({Weekday.MONDAY})),
            CustomTask("Invoices", frozenset({Weekday.FRIDAY}), "this_week", expiry=date(2025, 1, 22)),
        ]
        store.save_tasks(tasks)
        assert store.load_tasks() == tasks

    def test_unknown_keys_survive_save(self, store):
        write_yaml(store.tasks_file, [{"title": "X", "schedule": ["Monday"], "notes": "keep me"}])
        store.save_tasks(store.load_tasks())
        saved = yaml.safe_load(store.tasks_file.read_text())
        assert saved[0]["notes"] == "keep me"

    def test_malformed_record_skipped_and_kept(self, store):
        write_yaml(
            store.tasks_file,
            [
                {"title": "Good", "schedule": ["Monday"]},
                {"schedule": ["Tuesday"]},
            ],
        )
        tasks = store.load_tasks()
        assert [t.title for t in tasks] == ["Good"]
        assert len(store.load_errors) == 1
        assert isinstance(store.load_errors[0], MalformedRecord)

        store.save_tasks(tasks)
        saved = yaml.safe_load(store.tasks_file.read_text())
        assert {"schedule": ["Tuesday"]} in saved

    def test_errors_reset_on_reload(self, store):
        write_yaml(store.tasks_file, [{"schedule": ["Tuesday"]}])
        store.load_tasks()
        store.load_tasks()
        assert len(store.load_errors) == 1

    def test_corrupt_file_not_overwritten(self, store):
        store.tasks_file.write_text("title: [unclosed")
        assert store.load_tasks() == []
        with pytest.raises(RuntimeError):
            store.save_tasks([])
        assert store.tasks_file.read_text() == "title: [unclosed"


class TestEvents:
    def test_round_trip(self, store):
        events = [RecurringItem("Rent", date(2025, 1, 31), Frequency.MONTHLY)]
        store.save_events(events)
        assert store.load_events() == events

    def test_invalid_anchor_reported(self, store):
        write_yaml(
            store.events_file,
            [
                {"title": "Rent", "date": "2025-01-31", "frequency": "monthly"},
                {"title": "Bad", "date": "not a date", "frequency": "once"},
            ],
        )
        events = store.load_events()
        assert [e.title for e in events] == ["Rent"]
        assert isinstance(store.load_errors[0], InvalidAnchorDate)

    def test_yaml_dates_accepted(self, store):
        store.events_file.write_text("- title: Rent\n  date: 2025-01-31\n  frequency: monthly\n")
        assert store.load_events()[0].anchor_date == date(2025, 1, 31)


class TestClients:
    def test_current_then_archived_sorted(self, store):
        base = {"date_of_birth": "1990-01-20"}
        write_client(store, "zed_a", {**base, "first_name": "Zed", "last_name": "A"})
        write_client(store, "amy_b", {**base, "first_name": "Amy", "last_name": "B"})
        write_client(store, "old_c", {**base, "first_name": "Old", "last_name": "C"}, archived=True)

        clients = store.load_client_records()
        assert [c.client_name for c in clients] == ["Amy B", "Zed A", "Old C"]
        assert [c.archived for c in clients] == [False, False, True]

    def test_malformed_client_skipped(self, store):
        write_client(store, "no_dob", {"first_name": "No", "last_name": "Dob"})
        write_client(store, "ok", {"first_name": "O", "last_name": "K", "date_of_birth": "1990-01-01"})
        clients = store.load_client_records()
        assert [c.client_name for c in clients] == ["O K"]
        assert len(store.load_errors) == 1

    def test_save_client_record(self, store):
        store.save_client_record("jane_doe", {"first_name": "Jane", "last_name": "Doe", "date_of_birth": "1990-01-20"})
        assert (store.current_dir / "jane_doe" / "documents").is_dir()
        assert store.load_client_records()[0].client_name == "Jane Doe"

    def test_unparseable_client_file_reported(self, store):
        path = store.current_dir / "bad" / "data.yml"
        path.parent.mkdir(parents=True)
        path.write_text("first_name: [unclosed\n")
        write_client(store, "ok", {"first_name": "O", "last_name": "K", "date_of_birth": "1990-01-01"})

        clients = store.load_client_records()
        assert [c.client_name for c in clients] == ["O K"]
        assert len(store.load_errors) == 1
        assert isinstance(store.load_errors[0], MalformedRecord)

    def test_unquoted_clock_time(self, store):
        data_path = store.current_dir / "ann_lee" / "data.yml"
        data_path.parent.mkdir(parents=True)
        data_path.write_text(
            "first_name: Ann\nlast_name: Lee\ndate_of_birth: 1990-01-18\n"
            "training_schedule:\n  Monday: 6:00\n  Friday: 18:30\n"
        )
        client = store.load_client_records()[0]
        assert client.workout_weekdays == {
            Weekday.MONDAY: time(6, 0),
            Weekday.FRIDAY: time(18, 30),
        }


class TestClientLifecycle:
    @pytest.fixture
    def jane(self, store):
        store.save_client_record("jane_doe", {"first_name": "Jane", "last_name": "Doe", "date_of_birth": "1990-01-20"})
        (store.current_dir / "jane_doe" / "documents" / "waiver.pdf").write_text("signed")
        return "jane_doe"

    def test_has_client(self, store, jane):
        assert store.has_client(jane)
        assert not store.has_client(jane, archived=True)
        assert not store.has_client("nobody")

    def test_load_client_data(self, store, jane):
        assert store.load_client_data(jane)["first_name"] == "Jane"
        assert store.load_client_data("nobody") is None

    def test_archive_and_restore(self, store, jane):
        assert store.archive_client(jane)
        assert store.has_client(jane, archived=True)
        assert (store.archived_dir / jane / "documents" / "waiver.pdf").exists()
        assert store.load_client_records()[0].archived

        assert store.restore_client(jane)
        assert store.has_client(jane)
        assert not store.load_client_records()[0].archived

    def test_archive_twice_is_noop(self, store, jane):
        assert store.archive_client(jane)
        assert not store.archive_client(jane)
        assert store.has_client(jane, archived=True)

    def test_archive_refuses_to_clobber(self, store, jane):
        write_client(store, jane, {"first_name": "Other"}, archived=True)
        with pytest.raises(RuntimeError):
            store.archive_client(jane)
        assert store.has_client(jane)

    def test_rename_keeps_documents(self, store, jane):
        store.rename_client(jane, "jane_smith")
        assert not store.has_client(jane)
        assert (store.current_dir / "jane_smith" / "documents" / "waiver.pdf").exists()

    def test_delete_only_from_archive(self, store, jane):
        assert not store.delete_client(jane)
        assert store.has_client(jane)

        store.archive_client(jane)
        assert store.delete_client(jane)
        assert not store.has_client(jane, archived=True)
        assert not store.delete_client(jane)
