"""
Composite test structure: single test cases and named groups of test cases.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterator, List, Optional

logger = logging.getLogger("TestTree")


class TestComponent(ABC):
    """
    Common interface for test cases and test suites.
    """
    __test__ = False

    def add(self, component: "TestComponent") -> None:
        """
        Attach a child component. Leaves cannot hold children, so the
        default implementation ignores the call.

        :param component: Child test component
        """
        logger.debug(f"{self!r} cannot hold children, ignoring {component!r}")

    @abstractmethod
    def execute(self, trace: Optional[List["TestComponent"]] = None) -> None:
        """
        Execute this component.

        :param trace: Optional list collecting every executed component in execution order
        """

    @abstractmethod
    def leaves(self) -> Iterator["TestCase"]:
        """Yield every test case below (and including) this component, depth-first."""


class TestCase(TestComponent):
    """
    Atomic test case. The optional action is the inert test body.
    """

    def __init__(self, name: str, action: Optional[Callable[[], None]] = None):
        self._name = name
        self._action = action

    @property
    def name(self) -> str:
        return self._name

    def execute(self, trace=None):
        logger.info(f"[TestCase] Executing: {self._name}")
        if self._action is not None:
            self._action()
        if trace is not None:
            trace.append(self)

    def leaves(self):
        yield self

    def __repr__(self):
        return f"TestCase({self._name!r})"


class TestSuite(TestComponent):
    """
    Named, ordered group of test components.
    Execution visits the suite first, then each child in insertion order.
    """

    def __init__(self, description: str):
        self._description = description
        self._tests: List[TestComponent] = []

    @property
    def description(self) -> str:
        return self._description

    @property
    def tests(self) -> List[TestComponent]:
        """Direct children (copy; the suite itself is append-only)."""
        return list(self._tests)

    def add(self, component):
        self._tests.append(component)

    def execute(self, trace=None):
        logger.info(f"[TestSuite] Executing: {self._description}")
        if trace is not None:
            trace.append(self)
        if not self._tests:
            logger.debug(f"[TestSuite] {self._description}: no test cases")
        for test in self._tests:
            test.execute(trace)

    def leaves(self):
        for test in self._tests:
            yield from test.leaves()

    def __iter__(self) -> Iterator[TestComponent]:
        return iter(list(self._tests))

    def __len__(self):
        return len(self._tests)

    def __repr__(self):
        return f"TestSuite({self._description!r}, tests={len(self._tests)})"
