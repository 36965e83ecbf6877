"""
Command pipeline: encapsulated check-in, execution and reporting actions
run strictly in insertion order by an invoker.
"""

import logging
import time
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Callable, List, Optional

from tenacity import Retrying, stop_after_attempt, wait_fixed

from testframe.config import Limits, Timings
from testframe.execution import TestExecution

if TYPE_CHECKING:
    from testframe.orchestrator import TestManager

logger = logging.getLogger("Command")


class Command(ABC):
    """
    Encapsulated action executed by a CommandInvoker.
    """

    @abstractmethod
    def execute(self) -> None:
        pass


class SourceCodeCheckInCommand(Command):
    """
    Simulates committing source code to the repository.
    On success the manager is told that testing may proceed.
    """

    def __init__(self, manager: "TestManager", committer: Optional[Callable[[], None]] = None,
                 attempts: int = Limits.CHECKIN_ATTEMPTS, retry_delay: float = Timings.CHECKIN_RETRY_DELAY):
        """
        Initialize check-in command.

        :param manager: Manager whose check-in flag is armed on success
        :param committer: Callable performing the commit (defaults to a timed simulation)
        :param attempts: Maximum commit attempts
        :param retry_delay: Seconds between attempts
        """
        self.manager = manager
        self.committer = committer or self._simulate_commit
        self._retrying = Retrying(stop=stop_after_attempt(attempts), wait=wait_fixed(retry_delay), reraise=True)

    @staticmethod
    def _simulate_commit():
        time.sleep(Timings.CHECKIN_DELAY)

    def execute(self):
        logger.info("[Command] Committing source code to the repository...")
        try:
            self._retrying(self.committer)
        except Exception as e:
            logger.error(f"[Command] Error during source code check-in: {e}")
            return

        self.manager.mark_checked_in()
        logger.info("[Command] Source code check-in completed. Testing team may proceed.")


class TestExecutionCommand(Command):
    """
    Runs one test cycle through the manager, which enforces the check-in gate.
    """
    __test__ = False

    def __init__(self, manager: "TestManager", execution: TestExecution):
        self.manager = manager
        self.execution = execution
        self.completed = False

    def execute(self):
        self.completed = self.manager.start_cycle(self.execution)


class ReportingCommand(Command):
    """
    Reports on an execution. Not gated by check-in.
    """

    def __init__(self, execution: TestExecution):
        self.execution = execution

    def execute(self):
        self.execution.report_results()


class FaultPolicy(Enum):
    CONTINUE = "continue"  # log the fault and run the remaining commands
    ABORT = "abort"        # log the fault and skip the remaining commands


class CommandInvoker:
    """
    Stores commands and executes them in insertion order.
    """

    def __init__(self, fault_policy: FaultPolicy = FaultPolicy.CONTINUE):
        self.fault_policy = fault_policy
        self._commands: List[Command] = []

    @property
    def commands(self) -> List[Command]:
        return list(self._commands)

    def add_command(self, command: Command) -> None:
        self._commands.append(command)

    def execute_all(self) -> bool:
        """
        Execute every queued command in order.

        :return: True if no command raised
        """
        ok = True
        for command in self._commands:
            try:
                command.execute()
            except Exception as e:
                ok = False
                logger.error(f"{type(command).__name__} failed: {e}")
                if self.fault_policy is FaultPolicy.ABORT:
                    logger.warning("Aborting remaining commands")
                    break
        return ok

    def clear(self) -> None:
        self._commands.clear()

    def __len__(self):
        return len(self._commands)
