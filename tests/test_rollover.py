"""Tests for day rollover bookkeeping."""

from __future__ import annotations

from datetime import date, datetime

import pytest
from dateutil import tz

from pasos_tool.model import DayRecord
from pasos_tool.rollover import StepTracker, seconds_until_midnight


def test_no_rollover_on_same_day() -> None:
    tracker = StepTracker(today=date(2025, 3, 1))
    tracker.add_steps(5)
    assert tracker.check_for_new_day(datetime(2025, 3, 1, 23, 59, 59)) is None
    assert tracker.steps == 5
    assert tracker.history == {}


def test_rollover_archives_and_resets(caplog: pytest.LogCaptureFixture) -> None:
    tracker = StepTracker(today=date(2025, 3, 1))
    tracker.add_steps(42)

    record = tracker.check_for_new_day(datetime(2025, 3, 2, 0, 0, 0))

    assert record == DayRecord(day=date(2025, 3, 1), steps=42)
    assert tracker.history == {"2025-03-01": 42}
    assert tracker.steps == 0
    assert tracker.current_day == date(2025, 3, 2)
    assert "Cambio de dia" in caplog.text


def test_rollover_happens_once_per_day() -> None:
    tracker = StepTracker(today=date(2025, 3, 1))
    tracker.add_steps(3)
    tracker.check_for_new_day(datetime(2025, 3, 2, 0, 0, 1))
    tracker.add_steps(2)
    assert tracker.check_for_new_day(datetime(2025, 3, 2, 0, 0, 2)) is None
    assert tracker.history == {"2025-03-01": 3}
    assert tracker.steps == 2


def test_history_only_grows() -> None:
    tracker = StepTracker(today=date(2025, 3, 1), history={"2025-02-28": 7})
    tracker.add_steps(1)
    tracker.check_for_new_day(datetime(2025, 3, 2, 8, 0))
    tracker.add_steps(4)
    tracker.check_for_new_day(datetime(2025, 3, 3, 8, 0))
    assert tracker.history == {"2025-02-28": 7, "2025-03-01": 1, "2025-03-02": 4}


def test_skipped_days_read_as_zero() -> None:
    tracker = StepTracker(today=date(2025, 3, 1))
    tracker.add_steps(9)
    tracker.check_for_new_day(datetime(2025, 3, 4, 10, 0))
    assert tracker.steps_for(date(2025, 3, 1)) == 9
    assert tracker.steps_for(date(2025, 3, 2)) == 0
    assert tracker.current_day == date(2025, 3, 4)


def test_clock_moving_back_does_not_roll_over() -> None:
    tracker = StepTracker(today=date(2025, 3, 2))
    tracker.add_steps(6)
    assert tracker.check_for_new_day(datetime(2025, 3, 1, 23, 0)) is None
    assert tracker.steps == 6


def test_steps_for_today_is_live() -> None:
    tracker = StepTracker(today=date(2025, 3, 1), history={"2025-02-27": 11})
    tracker.add_steps(3)
    assert tracker.steps_for(date(2025, 3, 1)) == 3
    assert tracker.steps_for(date(2025, 2, 27)) == 11


def test_negative_steps_rejected() -> None:
    tracker = StepTracker(today=date(2025, 3, 1))
    with pytest.raises(ValueError):
        tracker.add_steps(-1)
    with pytest.raises(ValueError):
        StepTracker(today=date(2025, 3, 1), steps=-3)


def test_history_frame_sorted() -> None:
    tracker = StepTracker(
        today=date(2025, 3, 5),
        history={"2025-03-02": 20, "2025-03-01": 10},
    )
    df = tracker.history_frame()
    assert list(df["date"]) == [date(2025, 3, 1), date(2025, 3, 2)]
    assert list(df["steps"]) == [10, 20]


def test_history_frame_empty() -> None:
    df = StepTracker(today=date(2025, 3, 5)).history_frame()
    assert df.empty
    assert list(df.columns) == ["date", "steps"]


def test_seconds_until_midnight() -> None:
    assert seconds_until_midnight(datetime(2025, 3, 1, 23, 59, 59)) == 1
    assert seconds_until_midnight(datetime(2025, 3, 1, 0, 0, 0)) == 86400
    assert seconds_until_midnight(datetime(2025, 3, 1, 23, 59, 59, 500000)) == 0
    assert seconds_until_midnight(datetime(2025, 3, 1, 12, 0, 0)) == 43200


def test_seconds_until_midnight_across_dst_changes() -> None:
    madrid = tz.gettz("Europe/Madrid")
    # 2025-03-30 02:00 -> 03:00: the day lasts 23 hours.
    assert seconds_until_midnight(datetime(2025, 3, 30, 0, 30, tzinfo=madrid)) == 81000
    # 2025-10-26 03:00 -> 02:00: the day lasts 25 hours.
    assert seconds_until_midnight(datetime(2025, 10, 26, 0, 30, tzinfo=madrid)) == 88200


def test_seconds_until_midnight_aware_regular_day() -> None:
    madrid = tz.gettz("Europe/Madrid")
    now = datetime(2025, 6, 1, 23, 0, tzinfo=madrid)
    assert seconds_until_midnight(now) == 3600
