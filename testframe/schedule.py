"""
Recurring trigger for scheduled test runs.

The fire time arithmetic is kept in pure functions so it can be tested
without a real clock. A missed slot is skipped, never caught up.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional

logger = logging.getLogger("Scheduler")


def next_fire_time(now: datetime, scheduled: datetime, period: timedelta) -> datetime:
    """
    Earliest slot of the series ``scheduled + k * period`` that is still in the future.

    :param now: Current time
    :param scheduled: A slot of the series (may be in the past)
    :param period: Series period, must be positive
    :return: ``scheduled`` if it is after ``now``, otherwise advanced by whole periods
    """
    if period <= timedelta(0):
        raise ValueError(f"Period must be positive, got {period}")
    if scheduled > now:
        return scheduled
    missed = (now - scheduled) // period + 1
    return scheduled + missed * period


def weekly_slot(now: datetime, weekday: int, hour: int, minute: int = 0) -> datetime:
    """
    The given weekday/time inside the week of ``now`` (Monday based).

    :param now: Reference time
    :param weekday: 0 = Monday ... 6 = Sunday
    :param hour: Hour of day
    :param minute: Minute of hour
    :return: Slot datetime, possibly before ``now``
    """
    week_start = now.replace(hour=0, minute=0, second=0, microsecond=0) - timedelta(days=now.weekday())
    return week_start + timedelta(days=weekday, hours=hour, minutes=minute)


def first_fire_time(now: datetime, weekday: int, hour: int, minute: int = 0,
                    period: timedelta = timedelta(days=7)) -> datetime:
    """
    First weekly fire time at startup. A slot that already passed this week
    is rolled forward instead of firing immediately.
    """
    return next_fire_time(now, weekly_slot(now, weekday, hour, minute), period)


class RecurringTrigger:
    """
    Calls a callback at fixed-period slots on a background daemon thread.
    """

    def __init__(self, callback: Callable[[], object], first_fire: datetime, period: timedelta,
                 clock: Callable[[], datetime] = datetime.now, name: str = "recurring-trigger"):
        """
        Initialize trigger.

        :param callback: Invoked once per slot
        :param first_fire: First slot (rolled forward if already elapsed when the thread runs)
        :param period: Distance between slots
        :param clock: Source of the current time
        :param name: Thread name
        """
        if period <= timedelta(0):
            raise ValueError(f"Period must be positive, got {period}")
        self.callback = callback
        self.period = period
        self.clock = clock
        self.name = name
        self._next_fire = first_fire
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.fire_count = 0

    @property
    def next_fire(self) -> datetime:
        return self._next_fire

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            logger.warning(f"{self.name} already running")
            return
        self._stop_event.clear()
        self._next_fire = next_fire_time(self.clock(), self._next_fire, self.period)
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.info(f"Next scheduled test run: {self._next_fire:%Y-%m-%d %H:%M}")

    def stop(self, timeout: float = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while True:
            delay = (self._next_fire - self.clock()).total_seconds()
            if self._stop_event.wait(max(delay, 0)):
                return
            if self.clock() < self._next_fire:
                # Woke up early (clock adjustment); wait again for the same slot
                continue

            logger.info("[Scheduler] Scheduled test run triggered.")
            try:
                self.callback()
            except Exception as e:
                logger.error(f"Scheduled run failed: {e}")
            self.fire_count += 1
            # Slots missed while the callback ran are skipped
            self._next_fire = next_fire_time(self.clock(), self._next_fire, self.period)
