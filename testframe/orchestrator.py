"""
Test manager: gates test cycles on source code check-in, drains the
execution registry on manual or scheduled triggers, records results and
notifies stakeholders about cycle phase changes.
"""

import logging
import threading
from datetime import datetime
from enum import Enum, auto
from pathlib import Path
from typing import Callable, List, Optional

from testframe.commands import (CommandInvoker, FaultPolicy, ReportingCommand,
                                SourceCodeCheckInCommand, TestExecutionCommand)
from testframe.components import TestComponent
from testframe.config import Paths, ScheduleConfig, Timings
from testframe.errors import GateViolation, LogSinkError
from testframe.execution import ExecutionCaretaker, ExecutionRegistry, TestExecution
from testframe.lifecycle import CyclePhase, TestExecutionState, default_state
from testframe.log_sink import JsonLogSink
from testframe.schedule import RecurringTrigger, first_fire_time

logger = logging.getLogger("Manager")


class ManagerState(Enum):
    AWAITING_CHECK_IN = auto()
    RUNNING = auto()
    COMPLETED = auto()


class TestManager:
    """
    Coordinates the test lifecycle for one registry.

    At most one test cycle runs per check-in: the flag is armed by a
    check-in and consumed by the next successful cycle.
    """
    __test__ = False

    def __init__(self, registry: ExecutionRegistry, state: TestExecutionState, log_sink: JsonLogSink,
                 caretaker: Optional[ExecutionCaretaker] = None,
                 fault_policy: FaultPolicy = FaultPolicy.CONTINUE, auto_check_in: bool = False,
                 check_in_factory: Optional[Callable[["TestManager"], SourceCodeCheckInCommand]] = None):
        """
        Initialize manager with its collaborators.

        :param registry: Pending execution requests
        :param state: Phase subject notified during each cycle
        :param log_sink: Receives one entry per completed cycle
        :param caretaker: Optional store for execution snapshots taken on each run
        :param fault_policy: Policy for pipelines built by this manager
        :param auto_check_in: Prepend a check-in command to every pipeline
        :param check_in_factory: Builds check-in commands (defaults to SourceCodeCheckInCommand)
        """
        self.registry = registry
        self.state = state
        self.log_sink = log_sink
        self.caretaker = caretaker
        self.fault_policy = fault_policy
        self.auto_check_in = auto_check_in
        self.check_in_factory = check_in_factory or SourceCodeCheckInCommand

        self._lock = threading.RLock()
        self._checked_in = False
        self._manager_state = ManagerState.AWAITING_CHECK_IN
        self._trigger: Optional[RecurringTrigger] = None
        self.last_trace: List[TestComponent] = []

    @classmethod
    def create(cls, log_file: Path = None, **kwargs) -> "TestManager":
        """
        Build a manager wired with default collaborators.

        :param log_file: JSON log location (defaults to Paths.LOG_FILE)
        :return: TestManager instance
        """
        return cls(
            registry=ExecutionRegistry(),
            state=default_state(),
            log_sink=JsonLogSink(log_file or Paths.LOG_FILE),
            caretaker=ExecutionCaretaker(),
            **kwargs
        )

    # --- check-in gate ---

    @property
    def is_checked_in(self) -> bool:
        with self._lock:
            return self._checked_in

    @property
    def manager_state(self) -> ManagerState:
        with self._lock:
            return self._manager_state

    def mark_checked_in(self) -> None:
        with self._lock:
            self._checked_in = True
        logger.debug("Check-in flag armed")

    def check_in(self) -> None:
        """Run a source code check-in command bound to this manager."""
        self.check_in_factory(self).execute()

    def _require_check_in(self, execution: TestExecution) -> None:
        if not self._checked_in:
            raise GateViolation(f"Source code not checked in. Cannot start testing cycle for: {execution.description}")

    # --- cycles ---

    def start_cycle(self, execution: TestExecution) -> bool:
        """
        Run one gated test cycle.

        :param execution: Request whose test tree is executed
        :return: True if the cycle ran, False if it was rejected by the gate
        :raises Exception: Whatever a test action raised; the cycle is still
            completed and the check-in consumed before it propagates
        """
        with self._lock:
            try:
                self._require_check_in(execution)
            except GateViolation as e:
                logger.warning(f"[Manager] {e}")
                return False

            logger.info("[Manager] Starting testing cycle...")
            self._manager_state = ManagerState.RUNNING
            self.state.set_phase(CyclePhase.RUNNING)

            trace: List[TestComponent] = []
            try:
                try:
                    execution.execute_tests(trace)
                finally:
                    self.last_trace = trace

                try:
                    self.log_sink.append(execution.description, execution.platform)
                except LogSinkError as e:
                    logger.warning(f"⚠ Error writing log: {e}")
            finally:
                # The check-in is spent once the gate has passed, even if the tree raised
                self._manager_state = ManagerState.COMPLETED
                self._checked_in = False
                logger.info("[Manager] Testing cycle completed.")
                self.state.set_phase(CyclePhase.COMPLETED)
                self._manager_state = ManagerState.AWAITING_CHECK_IN
            return True

    def build_pipeline(self, execution: TestExecution) -> CommandInvoker:
        """
        Commands for one request: [check-in] -> execute -> report.

        :param execution: Request bound to the commands
        :return: CommandInvoker ready to run
        """
        invoker = CommandInvoker(self.fault_policy)
        if self.auto_check_in:
            invoker.add_command(self.check_in_factory(self))
        invoker.add_command(TestExecutionCommand(self, execution))
        invoker.add_command(ReportingCommand(execution))
        return invoker

    def run_pending(self) -> int:
        """
        Drain the registry and run a pipeline for each pending request.
        The registry is empty afterwards even if cycles were rejected.

        :return: Number of cycles that actually ran
        """
        with self._lock:
            executions = self.registry.drain()
            if not executions:
                logger.info("No tests currently scheduled.")
                return 0

            completed = 0
            for execution in executions:
                if self.caretaker is not None:
                    self.caretaker.save_state(execution.description, execution)
                invoker = self.build_pipeline(execution)
                invoker.execute_all()
                completed += sum(1 for c in invoker.commands
                                 if isinstance(c, TestExecutionCommand) and c.completed)

            logger.info(f"Ran {completed}/{len(executions)} scheduled executions")
            return completed

    def report_pending(self) -> int:
        """
        Report on every pending request without draining the registry.

        :return: Number of requests reported
        """
        invoker = CommandInvoker(self.fault_policy)
        for execution in self.registry.pending():
            invoker.add_command(ReportingCommand(execution))
        invoker.execute_all()
        return len(invoker)

    # --- recurring trigger ---

    def start_schedule(self, now: datetime = None, clock: Callable[[], datetime] = datetime.now) -> RecurringTrigger:
        """
        Start the weekly trigger that runs every pending request.

        :param now: Reference time for the first slot (defaults to clock())
        :param clock: Time source for the trigger thread
        :return: The running trigger
        """
        with self._lock:
            if self._trigger is not None and self._trigger.running:
                return self._trigger
            first = first_fire_time(now or clock(), ScheduleConfig.WEEKDAY, ScheduleConfig.HOUR,
                                    ScheduleConfig.MINUTE, ScheduleConfig.PERIOD)
            self._trigger = RecurringTrigger(self.run_pending, first, ScheduleConfig.PERIOD, clock=clock)
            self._trigger.start()
            return self._trigger

    def stop_schedule(self) -> None:
        trigger = self._trigger
        if trigger is not None:
            trigger.stop(Timings.TRIGGER_JOIN_TIMEOUT)
            self._trigger = None
