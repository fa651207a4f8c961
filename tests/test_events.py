"""Tests for recurring events - occurrences and descriptions."""

from datetime import date

import pytest

from coachboard.core.errors import InvalidAnchorDate, MalformedRecord
from coachboard.core.events import (
    Frequency,
    RecurringItem,
    describe,
    is_past,
    occurrences,
    quarter_months,
    remove_events,
)


@pytest.fixture
def today():
    return date(2025, 1, 15)


def make_item(anchor: date, frequency: Frequency, title: str = "Event") -> RecurringItem:
    return RecurringItem(title=title, anchor_date=anchor, frequency=frequency)


class TestOccurrences:
    def test_once_returns_anchor(self):
        item = make_item(date(2026, 3, 9), Frequency.ONCE)
        assert occurrences(item, 2025) == [date(2026, 3, 9)]

    def test_annual_moves_to_target_year(self):
        item = make_item(date(2020, 6, 12), Frequency.ANNUAL)
        assert occurrences(item, 2025) == [date(2025, 6, 12)]

    def test_annual_leap_day(self):
        item = make_item(date(2024, 2, 29), Frequency.ANNUAL)
        assert occurrences(item, 2025) == [date(2025, 2, 28)]

    def test_monthly_day_31(self):
        item = make_item(date(2024, 1, 31), Frequency.MONTHLY)
        dates = occurrences(item, 2025)
        assert len(dates) == 12
        assert [d.month for d in dates] == list(range(1, 13))
        assert dates[1] == date(2025, 2, 28)
        assert dates[3] == date(2025, 4, 30)
        assert dates[11] == date(2025, 12, 31)

    def test_monthly_sorted(self):
        item = make_item(date(2024, 8, 5), Frequency.MONTHLY)
        dates = occurrences(item, 2025)
        assert dates == sorted(dates)
        assert all(d.day == 5 for d in dates)

    @pytest.mark.parametrize(
        "anchor_month, months",
        [
            (1, [1, 4, 7, 10]),
            (2, [2, 5, 8, 11]),
            (3, [3, 6, 9, 12]),
            (10, [1, 4, 7, 10]),
            (11, [2, 5, 8, 11]),
            (12, [3, 6, 9, 12]),
        ],
    )
    def test_quarter_months(self, anchor_month, months):
        assert quarter_months(anchor_month) == months

    def test_quarterly_occurrences(self):
        item = make_item(date(2024, 2, 15), Frequency.QUARTERLY)
        dates = occurrences(item, 2025)
        assert [d.month for d in dates] == [2, 5, 8, 11]
        assert all(d.day == 15 for d in dates)

    def test_quarterly_day_31_normalized(self):
        item = make_item(date(2024, 3, 31), Frequency.QUARTERLY)
        assert occurrences(item, 2025) == [
            date(2025, 3, 31),
            date(2025, 6, 30),
            date(2025, 9, 30),
            date(2025, 12, 31),
        ]


class TestDescribe:
    def test_monthly(self):
        item = make_item(date(2025, 1, 2), Frequency.MONTHLY)
        assert describe(item) == "Repeats Every Month on the 2nd"

    def test_monthly_final_day(self):
        item = make_item(date(2025, 1, 31), Frequency.MONTHLY)
        assert describe(item) == "Repeats Every Month on the Final Day"

    def test_quarterly(self):
        item = make_item(date(2025, 1, 15), Frequency.QUARTERLY)
        assert describe(item) == (
            "Repeats Quarterly on January 15th, April 15th, July 15th, and October 15th"
        )

    def test_quarterly_uses_normalized_days(self):
        item = make_item(date(2024, 11, 30), Frequency.QUARTERLY)
        assert describe(item, as_of=date(2024, 12, 1)) == (
            "Repeats Quarterly on February 29th, May 30th, August 30th, and November 30th"
        )

    def test_quarterly_normalized_for_current_year(self):
        item = make_item(date(2024, 11, 30), Frequency.QUARTERLY)
        assert describe(item, as_of=date(2026, 10, 18)) == (
            "Repeats Quarterly on February 28th, May 30th, August 30th, and November 30th"
        )

    def test_annual(self):
        item = make_item(date(2019, 3, 5), Frequency.ANNUAL)
        assert describe(item) == "Repeats Annualy on March 5th"

    def test_once(self):
        item = make_item(date(2025, 7, 4), Frequency.ONCE)
        assert describe(item) == "Occurs on July 4, 2025"


class TestExpiry:
    def test_once_in_past_is_past(self, today):
        item = make_item(date(2025, 1, 14), Frequency.ONCE)
        assert is_past(item, today) is True
        assert item.is_expired(today) is True

    def test_once_today_not_past(self, today):
        item = make_item(today, Frequency.ONCE)
        assert is_past(item, today) is False

    def test_recurring_never_past(self, today):
        item = make_item(date(2020, 1, 1), Frequency.MONTHLY)
        assert is_past(item, today) is False
        assert item.is_expired(today) is False

    def test_explicit_expiry(self, today):
        item = RecurringItem("Promo", date(2024, 5, 1), Frequency.MONTHLY, expiry=today)
        assert item.is_expired(today) is True


class TestFromRecord:
    def test_parses_record(self):
        item = RecurringItem.from_record(
            {"title": "Rent", "date": "2025-01-31", "frequency": "monthly"}
        )
        assert item.title == "Rent"
        assert item.anchor_date == date(2025, 1, 31)
        assert item.frequency is Frequency.MONTHLY

    def test_accepts_date_objects(self):
        item = RecurringItem.from_record(
            {"title": "Rent", "date": date(2025, 1, 31), "frequency": "monthly"}
        )
        assert item.anchor_date == date(2025, 1, 31)

    def test_keeps_unknown_keys(self):
        record = {"title": "Rent", "date": "2025-01-31", "frequency": "monthly", "color": "red"}
        item = RecurringItem.from_record(record)
        assert item.extra == {"color": "red"}
        assert item.to_record() == record

    def test_missing_title(self):
        with pytest.raises(MalformedRecord):
            RecurringItem.from_record({"date": "2025-01-31", "frequency": "monthly"})

    def test_unknown_frequency(self):
        with pytest.raises(MalformedRecord):
            RecurringItem.from_record({"title": "X", "date": "2025-01-31", "frequency": "weekly"})

    def test_unparseable_date(self):
        with pytest.raises(InvalidAnchorDate) as exc:
            RecurringItem.from_record({"title": "X", "date": "someday", "frequency": "once"})
        assert exc.value.record["title"] == "X"


def test_remove_events():
    items = [
        make_item(date(2025, 1, 1), Frequency.ANNUAL, "A"),
        make_item(date(2025, 1, 1), Frequency.ANNUAL, "B"),
        make_item(date(2025, 1, 1), Frequency.ANNUAL, "C"),
    ]
    assert [i.title for i in remove_events(items, ["A", "C", "missing"])] == ["B"]
