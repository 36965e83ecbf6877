"""
Check-in gated test cycle orchestration.
"""
from testframe.commands import (CommandInvoker, FaultPolicy, ReportingCommand,
                                SourceCodeCheckInCommand, TestExecutionCommand)
from testframe.components import TestCase, TestComponent, TestSuite
from testframe.execution import ExecutionCaretaker, ExecutionRegistry, TestExecution
from testframe.factories import plan_execution
from testframe.lifecycle import CyclePhase, TestExecutionState, TestObserver
from testframe.log_sink import JsonLogSink
from testframe.orchestrator import ManagerState, TestManager

__version__ = "1.0.0"

__all__ = [
    'CommandInvoker', 'FaultPolicy', 'ReportingCommand', 'SourceCodeCheckInCommand', 'TestExecutionCommand',
    'TestCase', 'TestComponent', 'TestSuite',
    'ExecutionCaretaker', 'ExecutionRegistry', 'TestExecution',
    'plan_execution',
    'CyclePhase', 'TestExecutionState', 'TestObserver',
    'JsonLogSink',
    'ManagerState', 'TestManager',
]
