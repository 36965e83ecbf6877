import pytest

from testframe.commands import SourceCodeCheckInCommand
from testframe.execution import ExecutionCaretaker, ExecutionRegistry
from testframe.lifecycle import TestExecutionState, TestObserver
from testframe.log_sink import JsonLogSink
from testframe.orchestrator import TestManager


def instant_check_in(manager):
    """Check-in command without the simulated commit delay."""
    return SourceCodeCheckInCommand(manager, committer=lambda: None, retry_delay=0)


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "test_log.json"


@pytest.fixture
def observer():
    return TestObserver("QA Team")


@pytest.fixture
def manager(log_path, observer):
    state = TestExecutionState()
    state.attach(observer)
    return TestManager(
        registry=ExecutionRegistry(),
        state=state,
        log_sink=JsonLogSink(log_path),
        caretaker=ExecutionCaretaker(),
        check_in_factory=instant_check_in,
    )
