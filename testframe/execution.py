"""
Test execution requests, the registry of pending requests and the snapshot caretaker.
"""

import logging
import threading
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from testframe.components import TestComponent, TestSuite

logger = logging.getLogger("Execution")


class TestExecution:
    """
    A planned run of one test suite on one platform.
    All attributes are fixed at construction time.
    """
    __test__ = False

    def __init__(self, description: str, platform: str, suite: TestSuite,
                 gui_only: bool = False, network_only: bool = False):
        """
        Initialize execution request.

        :param description: Label shown in listings and written to the log
        :param platform: Platform tag (e.g. "AIX", "macOS")
        :param suite: Test tree owned by this request
        :param gui_only: Only GUI tests were requested
        :param network_only: Only network tests were requested
        """
        self._description = description
        self._platform = platform
        self._suite = suite
        self._gui_only = gui_only
        self._network_only = network_only

    @property
    def description(self) -> str:
        return self._description

    @property
    def platform(self) -> str:
        return self._platform

    @property
    def suite(self) -> TestSuite:
        return self._suite

    @property
    def gui_only(self) -> bool:
        return self._gui_only

    @property
    def network_only(self) -> bool:
        return self._network_only

    def execute_tests(self, trace: Optional[List[TestComponent]] = None) -> None:
        """
        Run the owned test tree.

        :param trace: Optional list collecting executed components
        """
        logger.info(f"[Execution] Executing tests for {self._platform}...")
        self._suite.execute(trace)

    def report_results(self) -> None:
        logger.info(f"[Execution] Reporting results for: {self._description}")

    def __repr__(self):
        return f"TestExecution({self._description!r}, platform={self._platform!r})"


class ExecutionRegistry:
    """
    Holds pending execution requests until a run is triggered.
    Insertion order is planning order.
    """

    def __init__(self):
        self._pending: List[TestExecution] = []
        self._lock = threading.Lock()

    def schedule(self, execution: TestExecution) -> None:
        with self._lock:
            self._pending.append(execution)
        logger.debug(f"Scheduled: {execution.description}")

    def pending(self) -> List[TestExecution]:
        """
        Snapshot of the pending requests. The registry is not modified.

        :return: List copy in planning order
        """
        with self._lock:
            return list(self._pending)

    def drain(self) -> List[TestExecution]:
        """
        Take every pending request and empty the registry in one step,
        so concurrent triggers never see the same request twice.

        :return: The requests that were pending, in planning order
        """
        with self._lock:
            drained, self._pending = self._pending, []
        return drained

    def clear(self) -> None:
        with self._lock:
            self._pending.clear()

    def __len__(self):
        with self._lock:
            return len(self._pending)


class ExecutionCaretaker:
    """
    Saved execution states keyed by description.
    Stores references (no deep copy); the last save for a description wins.
    """

    def __init__(self):
        self._saved_states: Dict[str, TestExecution] = {}

    def save_state(self, name: str, execution: TestExecution) -> None:
        self._saved_states[name] = execution

    def get_state(self, name: str) -> Optional[TestExecution]:
        return self._saved_states.get(name)

    def all_states(self) -> Mapping[str, TestExecution]:
        """Read-only view of every saved state, in first-save order."""
        return MappingProxyType(self._saved_states)
