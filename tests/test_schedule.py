import threading
from datetime import datetime, timedelta

import pytest

from testframe.schedule import RecurringTrigger, first_fire_time, next_fire_time, weekly_slot

WEEK = timedelta(days=7)
MONDAY_9 = datetime(2026, 10, 12, 9, 0)


def test_future_slot_is_kept():
    now = MONDAY_9 - timedelta(hours=1)

    assert next_fire_time(now, MONDAY_9, WEEK) == MONDAY_9


def test_elapsed_slot_advances_one_period():
    now = MONDAY_9 + timedelta(minutes=1)

    assert next_fire_time(now, MONDAY_9, WEEK) == MONDAY_9 + WEEK


def test_slot_equal_to_now_is_not_fired_again():
    assert next_fire_time(MONDAY_9, MONDAY_9, WEEK) == MONDAY_9 + WEEK


def test_many_missed_periods_advance_by_whole_periods():
    now = MONDAY_9 + 3 * WEEK + timedelta(days=2)

    assert next_fire_time(now, MONDAY_9, WEEK) == MONDAY_9 + 4 * WEEK


def test_non_positive_period_rejected():
    with pytest.raises(ValueError):
        next_fire_time(MONDAY_9, MONDAY_9, timedelta(0))


@pytest.mark.parametrize("now", [
    datetime(2026, 10, 12, 0, 0),
    datetime(2026, 10, 14, 15, 30),
    datetime(2026, 10, 18, 23, 59),
])
def test_weekly_slot_is_monday_of_same_week(now):
    assert weekly_slot(now, 0, 9) == MONDAY_9


def test_first_fire_before_slot_uses_this_week():
    assert first_fire_time(datetime(2026, 10, 12, 8, 0), 0, 9) == MONDAY_9


def test_first_fire_after_slot_rolls_to_next_week():
    assert first_fire_time(datetime(2026, 10, 16, 12, 0), 0, 9) == MONDAY_9 + WEEK


def test_trigger_fires_and_schedules_next_slot():
    fired = threading.Event()
    first = datetime.now() + timedelta(milliseconds=50)
    trigger = RecurringTrigger(fired.set, first, timedelta(hours=1))

    trigger.start()
    try:
        assert fired.wait(2)
    finally:
        trigger.stop(2)

    assert trigger.fire_count == 1
    assert trigger.next_fire > first


def test_trigger_does_not_catch_up_elapsed_first_slot():
    calls = []
    first = datetime.now() - timedelta(minutes=5)
    trigger = RecurringTrigger(lambda: calls.append(1), first, timedelta(hours=1))

    trigger.start()
    stopped = threading.Event()
    stopped.wait(0.2)
    trigger.stop(2)

    assert calls == []
    assert trigger.next_fire == first + timedelta(hours=1)


def test_callback_errors_are_contained():
    fired = threading.Event()

    def broken():
        fired.set()
        raise RuntimeError("boom")

    trigger = RecurringTrigger(broken, datetime.now() + timedelta(milliseconds=20), timedelta(hours=1))
    trigger.start()
    try:
        assert fired.wait(2)
    finally:
        trigger.stop(2)

    assert not trigger.running
