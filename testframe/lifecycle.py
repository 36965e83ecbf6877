"""
Test cycle phase tracking with synchronous observer notification.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, Tuple

from testframe.config import ObserverConfig

logger = logging.getLogger("Lifecycle")


class CyclePhase(Enum):
    IDLE = "Idle"
    RUNNING = "Test cycle running."
    COMPLETED = "Test cycle completed."


class Observer(ABC):
    """
    Reacts to phase changes of a StateSubject. Observers cannot veto a change.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def update(self, phase: CyclePhase) -> None:
        """
        Called synchronously after the subject changed phase.

        :param phase: The new phase
        """


class TestObserver(Observer):
    """
    Named stakeholder that is told about every phase change.
    """
    __test__ = False

    def __init__(self, name: str):
        super().__init__(name)
        self.received: List[CyclePhase] = []

    def update(self, phase):
        self.received.append(phase)
        logger.info(f"[Observer] {self.name} has been notified: {phase.value}")

    def __repr__(self):
        return f"TestObserver({self.name!r})"


class StateSubject:
    """
    Keeps attached observers and notifies them in attachment order.
    The same observer may be attached more than once.
    """

    def __init__(self):
        self._observers: List[Observer] = []

    def attach(self, observer: Observer) -> None:
        self._observers.append(observer)

    def detach(self, observer: Observer) -> None:
        """
        Remove the first attachment of an observer. Unknown observers are ignored.

        :param observer: Previously attached observer
        """
        for index, attached in enumerate(self._observers):
            if attached is observer:
                del self._observers[index]
                return

    @property
    def observers(self) -> List[Tuple[str, Observer]]:
        """(name, observer) pairs in attachment order, one per attachment."""
        return [(observer.name, observer) for observer in self._observers]

    def notify_observers(self, phase: CyclePhase) -> None:
        for observer in list(self._observers):
            try:
                observer.update(phase)
            except Exception as e:
                logger.error(f"Observer {observer.name} failed: {e}")


class TestExecutionState(StateSubject):
    """
    Current phase of the test cycle. Only the last phase is kept.
    """
    __test__ = False

    def __init__(self, phase: CyclePhase = CyclePhase.IDLE):
        super().__init__()
        self._phase = phase

    @property
    def phase(self) -> CyclePhase:
        return self._phase

    def set_phase(self, phase: CyclePhase) -> None:
        """
        Store the new phase and notify every observer before returning.

        :param phase: New cycle phase
        """
        self._phase = phase
        logger.debug(f"Phase -> {phase.name}")
        self.notify_observers(phase)


def default_state(names: Optional[List[str]] = None) -> TestExecutionState:
    """
    Build a state subject with one TestObserver per stakeholder name.

    :param names: Observer names (defaults to ObserverConfig.DEFAULT_OBSERVERS)
    :return: TestExecutionState with observers attached
    """
    if names is None:
        names = ObserverConfig.DEFAULT_OBSERVERS

    state = TestExecutionState()
    for name in names:
        state.attach(TestObserver(name))
    return state
