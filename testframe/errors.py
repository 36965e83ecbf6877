"""
Exceptions raised at the boundaries of the test framework.
"""


class FrameworkError(Exception):
    """Base class for all framework errors."""


class GateViolation(FrameworkError):
    """Test execution attempted before the source code was checked in."""


class LogSinkError(FrameworkError, OSError):
    """The execution log could not be read or written."""


class InvalidSelection(FrameworkError, ValueError):
    """Unsupported platform or test type given while planning an execution."""
