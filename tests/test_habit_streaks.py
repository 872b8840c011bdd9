"""Tests for streak decay and completion rules.

Covers:
- Reset detection by calendar day (not elapsed time)
- Displayed streak vs stored streak
- Completion increments, same-day idempotence and gap restarts
"""

from __future__ import annotations

import time
from datetime import date, datetime, timedelta, timezone

import pytest

from habitflow.models import Habit, HabitStatus
from habitflow.services.streaks import (
    completion_update,
    effective_streak,
    record_completion,
    should_reset_streak,
)

TODAY = date(2024, 6, 1)
YESTERDAY = datetime(2024, 5, 31, 18, 30)


def make_habit(**overrides) -> Habit:
    values = {"user_id": "u", "title": "Test Habit", "status": HabitStatus.TODO, "streak": 5}
    values.update(overrides)
    return Habit(**values)


class TestShouldResetStreak:
    """Tests for detecting a broken streak."""

    def test_no_last_completion_resets(self):
        assert should_reset_streak(make_habit(), TODAY) is True

    def test_long_ago_resets(self):
        habit = make_habit(last_completed_date=datetime(2023, 1, 1))
        assert should_reset_streak(habit, TODAY) is True

    def test_yesterday_keeps(self):
        habit = make_habit(last_completed_date=YESTERDAY)
        assert should_reset_streak(habit, TODAY) is False

    def test_today_counts_as_reset(self):
        habit = make_habit(last_completed_date=datetime(2024, 6, 1, 7, 0))
        assert should_reset_streak(habit, TODAY) is True

    def test_comparison_is_by_calendar_day(self):
        """11:59pm yesterday checked at 12:01am today is still yesterday."""
        habit = make_habit(last_completed_date=datetime(2024, 5, 31, 23, 59))
        assert should_reset_streak(habit, datetime(2024, 6, 1, 0, 1)) is False

    def test_just_over_a_day_but_two_calendar_days_resets(self):
        habit = make_habit(last_completed_date=datetime(2024, 5, 30, 23, 0))
        assert should_reset_streak(habit, datetime(2024, 6, 1, 0, 30)) is True

    def test_month_boundary(self):
        habit = make_habit(last_completed_date=datetime(2024, 2, 29, 12, 0))
        assert should_reset_streak(habit, date(2024, 3, 1)) is False


class TestEffectiveStreak:
    """Tests for the displayed streak value."""

    def test_done_returns_stored_streak_even_if_stale(self):
        habit = make_habit(status=HabitStatus.DONE, last_completed_date=datetime(2023, 1, 1))
        assert should_reset_streak(habit, TODAY) is True
        assert effective_streak(habit, TODAY) == 5

    def test_todo_with_gap_displays_zero(self):
        habit = make_habit(last_completed_date=datetime(2023, 1, 1))
        assert effective_streak(habit, TODAY) == 0

    def test_todo_never_completed_displays_zero(self):
        assert effective_streak(make_habit(), TODAY) == 0

    def test_todo_within_grace_day_keeps_streak(self):
        habit = make_habit(last_completed_date=YESTERDAY)
        assert effective_streak(habit, TODAY) == 5

    def test_does_not_mutate_record(self):
        habit = make_habit(last_completed_date=datetime(2023, 1, 1))
        effective_streak(habit, TODAY)
        assert habit.streak == 5
        assert habit.status == HabitStatus.TODO

    def test_negative_stored_streak_reads_as_zero(self):
        habit = make_habit(status=HabitStatus.DONE, streak=-3)
        assert effective_streak(habit, TODAY) == 0


class TestRecordCompletion:
    """Tests for the streak persisted on completion."""

    def test_first_completion_returns_one(self):
        assert record_completion(make_habit(streak=0), TODAY) == 1

    def test_yesterday_increments(self):
        habit = make_habit(last_completed_date=YESTERDAY)
        assert record_completion(habit, TODAY) == 6

    def test_same_day_is_idempotent(self):
        habit = make_habit(last_completed_date=datetime(2024, 6, 1, 6, 0))
        assert record_completion(habit, datetime(2024, 6, 1, 21, 0)) == 5

    @pytest.mark.parametrize("days_ago", [2, 3, 30, 365])
    def test_gap_restarts_at_one(self, days_ago):
        habit = make_habit(last_completed_date=datetime(2024, 6, 1, 8, 0) - timedelta(days=days_ago))
        assert record_completion(habit, TODAY) == 1

    def test_never_negative(self):
        habit = make_habit(streak=-1, last_completed_date=YESTERDAY)
        assert record_completion(habit, TODAY) == 1


class TestScenarios:
    def test_consecutive_day_scenario(self):
        habit = make_habit(last_completed_date=YESTERDAY)
        assert effective_streak(habit, TODAY) == 5
        assert record_completion(habit, TODAY) == 6

    def test_long_gap_scenario(self):
        habit = make_habit(last_completed_date=datetime(2023, 1, 1))
        assert effective_streak(habit, date(2024, 6, 1)) == 0
        assert record_completion(habit, date(2024, 6, 1)) == 1

    def test_plain_mapping_records(self):
        record = {"streak": 2, "status": "Todo", "lastCompletedDate": "2024-05-31T12:00:00Z"}
        assert effective_streak(record, TODAY) == 2
        assert record_completion(record, TODAY) == 3

    def test_unparseable_timestamp_is_treated_as_absent(self):
        record = {"streak": 4, "status": "Todo", "lastCompletedDate": "not a date"}
        assert effective_streak(record, TODAY) == 0
        assert record_completion(record, TODAY) == 1


class TestCompletionUpdate:
    def test_builds_single_write_payload(self):
        now = datetime(2024, 6, 1, 9, 15)
        habit = make_habit(last_completed_date=YESTERDAY)

        update = completion_update(habit, now)

        assert update == {"status": HabitStatus.DONE, "streak": 6, "last_completed_date": now}

    def test_does_not_touch_the_record(self):
        habit = make_habit(last_completed_date=YESTERDAY)
        completion_update(habit, datetime(2024, 6, 1, 9, 15))
        assert habit.streak == 5
        assert habit.last_completed_date == YESTERDAY


@pytest.fixture
def tokyo_time(monkeypatch):
    """Run the test with the process clock in Asia/Tokyo (UTC+9)."""

    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "Asia/Tokyo")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


class TestLocalCalendarDay:
    """Offset timestamps are compared on the local calendar."""

    def test_utc_string_late_evening_is_next_local_day(self, tokyo_time):
        # 23:00Z on 31 May is 08:00 on 1 June in Tokyo.
        record = {"streak": 3, "status": "Done", "lastCompletedDate": "2024-05-31T23:00:00Z"}

        assert should_reset_streak(record, TODAY) is True
        assert record_completion(record, TODAY) == 3

    def test_repeat_completion_same_local_day_does_not_increment(self, tokyo_time):
        record = {"streak": 3, "status": "Todo", "lastCompletedDate": "2024-05-30T23:00:00Z"}
        assert record_completion(record, TODAY) == 4

        record.update(streak=4, status="Done", lastCompletedDate="2024-05-31T23:30:00Z")
        assert record_completion(record, TODAY) == 4

    def test_offset_string_uses_local_day(self, tokyo_time):
        record = {"streak": 2, "status": "Todo", "lastCompletedDate": "2024-05-31T10:00:00-05:00"}
        # 15:00Z on 31 May is 00:00 on 1 June in Tokyo.
        assert record_completion(record, TODAY) == 2

    def test_aware_datetime_uses_local_day(self, tokyo_time):
        habit = make_habit(
            streak=7,
            last_completed_date=datetime(2024, 5, 30, 16, 0, tzinfo=timezone.utc),
        )
        # 01:00 on 31 May local, one day before TODAY.
        assert effective_streak(habit, TODAY) == 7
        assert record_completion(habit, TODAY) == 8

    def test_aware_reference_moment_uses_local_day(self, tokyo_time):
        record = {"streak": 1, "status": "Todo", "lastCompletedDate": "2024-05-31T12:00:00+09:00"}
        now = datetime(2024, 5, 31, 20, 0, tzinfo=timezone.utc)  # 05:00 on 1 June local
        assert record_completion(record, now) == 2
