"""Tests for form validation messages."""

from datetime import date

import pytest

from coachboard.core.dates import Weekday
from coachboard.core.validation import validate_client, validate_event, validate_task


@pytest.fixture
def today():
    return date(2025, 1, 15)


@pytest.fixture
def client_form():
    return {
        "first_name": "Jane",
        "last_name": "Doe",
        "date_of_birth": "1990-01-20",
        "email": "jane@example.com",
        "address": "1 Main St, Springfield, IL",
    }


class TestValidateTask:
    def test_valid(self):
        assert validate_task("Post schedule", [Weekday.MONDAY], "every_week") is None

    def test_missing_everything(self):
        assert validate_task("", [], "") == (
            "Please enter a task description, set your task's schedule, and select a frequency"
        )

    def test_missing_schedule(self):
        assert validate_task("X", [], "every_week") == "Please set your task's schedule"


class TestValidateEvent:
    def test_valid(self):
        assert validate_event("Rent", "2025-01-31", "monthly") is None

    def test_missing_title_and_date(self):
        assert validate_event("  ", "", "monthly") == (
            "Please enter an event description and set your event's date"
        )

    def test_unparseable_date(self):
        assert validate_event("Rent", "soon", "monthly") == "Please set a valid date for your event"

    def test_unknown_frequency(self):
        assert validate_event("Rent", "2025-01-31", "weekly") == "Please select a frequency"


class TestValidateClient:
    def test_valid(self, client_form, today):
        assert validate_client(client_form, today) is None

    def test_future_birth_date(self, client_form, today):
        client_form["date_of_birth"] = "2030-01-01"
        assert validate_client(client_form, today) == "Please enter a valid date of birth"

    def test_bad_email(self, client_form, today):
        client_form["email"] = "jane-at-example"
        assert validate_client(client_form, today) == "Please enter a valid email address"

    def test_errors_sorted_shortest_first(self, client_form, today):
        client_form["last_name"] = ""
        client_form["email"] = ""
        client_form["date_of_birth"] = ""
        assert validate_client(client_form, today) == (
            "Please enter a complete name, a valid date of birth, and a valid email address"
        )
