"""
Platform specific test factories and execution planning.
"""

import logging
from abc import ABC, abstractmethod

from testframe.components import TestCase, TestSuite
from testframe.config import Platforms
from testframe.errors import InvalidSelection
from testframe.execution import TestExecution

logger = logging.getLogger("Factory")


# --- SINGLE TESTS ---
class PlatformTest(ABC):
    """Inert test body for one platform."""

    kind = ""

    def __init__(self, platform: str):
        self.platform = platform

    def run(self) -> None:
        logger.info(f"[{self.kind}Test] Running {self.platform} {self.kind} Test")


class GUITest(PlatformTest):
    kind = "GUI"


class NetworkTest(PlatformTest):
    kind = "Network"


class TestCaseFactory(ABC):
    """
    Creates single GUI and network tests for a platform.
    """
    __test__ = False

    platform = ""

    def create_gui_test(self) -> GUITest:
        return GUITest(self.platform)

    def create_network_test(self) -> NetworkTest:
        return NetworkTest(self.platform)


class AIXTestFactory(TestCaseFactory):
    platform = Platforms.AIX


class MacOSTestFactory(TestCaseFactory):
    platform = Platforms.MACOS


# --- SUITES ---
class TestSuiteFactory(ABC):
    """
    Creates the canonical test suites for a platform.
    """
    __test__ = False

    platform = ""

    @abstractmethod
    def create_gui_test_suite(self) -> TestSuite:
        pass

    @abstractmethod
    def create_network_test_suite(self) -> TestSuite:
        pass

    def create_all_tests_suite(self) -> TestSuite:
        """
        GUI test cases followed by network test cases in one suite.

        :return: TestSuite named "<platform> All Tests"
        """
        suite = TestSuite(f"{self.platform} All Tests")
        for test in self.create_gui_test_suite():
            suite.add(test)
        for test in self.create_network_test_suite():
            suite.add(test)
        return suite

    @staticmethod
    def _build(description, names):
        suite = TestSuite(description)
        for name in names:
            suite.add(TestCase(name))
        return suite


class AIXTestSuiteFactory(TestSuiteFactory):
    platform = Platforms.AIX

    def create_gui_test_suite(self):
        return self._build("AIX GUI Test Suite", ["AIX GUI Login Test", "AIX GUI Navigation Test"])

    def create_network_test_suite(self):
        return self._build("AIX Network Test Suite", ["AIX Network Connectivity Test", "AIX Network Latency Test"])


class MacOSTestSuiteFactory(TestSuiteFactory):
    platform = Platforms.MACOS

    def create_gui_test_suite(self):
        return self._build("macOS GUI Test Suite", ["macOS GUI Login Test", "macOS GUI Navigation Test"])

    def create_network_test_suite(self):
        return self._build("macOS Network Test Suite", ["macOS Network Speed Test", "macOS Network Security Test"])


SUITE_FACTORIES = {
    Platforms.AIX: AIXTestSuiteFactory,
    Platforms.MACOS: MacOSTestSuiteFactory,
}

CASE_FACTORIES = {
    Platforms.AIX: AIXTestFactory,
    Platforms.MACOS: MacOSTestFactory,
}


# --- INPUT VALIDATION ---
def _canonical(value: str, choices, label: str) -> str:
    cleaned = (value or "").strip()
    for choice in choices:
        if cleaned.lower() == choice.lower():
            return choice
    raise InvalidSelection(f"Invalid {label} '{cleaned}'. Use one of: {', '.join(choices)}")


def parse_platform(value: str) -> str:
    """
    Canonical platform name for user input (case-insensitive).

    :param value: Raw input, e.g. "aix" or "MacOS"
    :return: "AIX" or "macOS"
    :raises InvalidSelection: If the platform is not supported
    """
    return _canonical(value, Platforms.SUPPORTED, "platform")


def parse_test_type(value: str) -> str:
    """
    Canonical test type for user input (case-insensitive).

    :param value: Raw input, e.g. "gui"
    :return: "GUI", "Network" or "All"
    :raises InvalidSelection: If the test type is unknown
    """
    return _canonical(value, Platforms.TEST_TYPES, "test type")


def suite_factory_for(platform: str) -> TestSuiteFactory:
    return SUITE_FACTORIES[parse_platform(platform)]()


def case_factory_for(platform: str) -> TestCaseFactory:
    return CASE_FACTORIES[parse_platform(platform)]()


def plan_execution(platform: str, test_type: str) -> TestExecution:
    """
    Validate a platform/test type selection and build the execution request.
    Nothing is constructed for an invalid selection.

    :param platform: Platform input
    :param test_type: Test type input
    :return: New TestExecution owning a fresh suite
    :raises InvalidSelection: On unsupported platform or test type
    """
    platform = parse_platform(platform)
    test_type = parse_test_type(test_type)
    factory = SUITE_FACTORIES[platform]()

    if test_type == Platforms.GUI:
        suite = factory.create_gui_test_suite()
    elif test_type == Platforms.NETWORK:
        suite = factory.create_network_test_suite()
    else:
        suite = factory.create_all_tests_suite()

    return TestExecution(
        description=f"{platform} - {test_type} Test Execution",
        platform=platform,
        suite=suite,
        gui_only=test_type == Platforms.GUI,
        network_only=test_type == Platforms.NETWORK,
    )
