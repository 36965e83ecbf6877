"""
Interactive menu for planning, running and inspecting test executions.
"""

import argparse
import logging
import sys
from typing import Callable

from testframe.config import Paths, setup_logging
from testframe.errors import InvalidSelection, LogSinkError
from testframe.factories import case_factory_for, plan_execution, suite_factory_for
from testframe.orchestrator import TestManager

logger = logging.getLogger("CLI")

MENU = [
    ("plan", "Plan a Test Execution"),
    ("list", "List Planned Executions"),
    ("run", "Run Tests (Simulate Monday)"),
    ("check-in", "Simulate Source Code Check-In Command"),
    ("report", "Report Results"),
    ("clear", "Clear All Scheduled Tests"),
    ("restore", "Restore Execution State"),
    ("view-states", "View Saved States"),
    ("view-suite", "View Test Cases in a Test Suite"),
    ("unit-test", "Run a Single Platform Unit Test"),
    ("view-logs", "View Test Logs"),
    ("exit", "Exit"),
]


class TestFrameShell:
    """
    Menu loop issuing operations against a TestManager.
    Input and output are injectable so the shell can be driven from tests.
    """
    __test__ = False

    def __init__(self, manager: TestManager, input_func: Callable[[str], str] = input,
                 output: Callable[[str], None] = print):
        self.manager = manager
        self.input = input_func
        self.output = output
        self.handlers = {
            "plan": self.plan,
            "list": self.list_planned,
            "run": self.run_tests,
            "check-in": self.check_in,
            "report": self.report,
            "clear": self.clear,
            "restore": self.restore,
            "view-states": self.view_states,
            "view-suite": self.view_suite,
            "unit-test": self.unit_test,
            "view-logs": self.view_logs,
        }

    def show_menu(self):
        self.output("\n--- MAIN MENU ---")
        for index, (_, label) in enumerate(MENU, start=1):
            self.output(f"{index:>3}. {label}")

    def resolve_choice(self, raw: str):
        """
        Map a menu number or operation name to an operation name.

        :param raw: User input
        :return: Operation name or None if unknown
        """
        choice = raw.strip().lower()
        if choice.isdigit():
            index = int(choice) - 1
            return MENU[index][0] if 0 <= index < len(MENU) else None
        return choice if choice in dict(MENU) else None

    def run(self) -> None:
        while True:
            self.show_menu()
            try:
                raw = self.input(f"Choose an option [1-{len(MENU)}]: ")
            except EOFError:
                raw = "exit"

            operation = self.resolve_choice(raw)
            if operation is None:
                self.output("Invalid selection. Try again.")
                continue
            if operation == "exit":
                self.output("Exiting the Testing Framework System. Goodbye!")
                return
            self.dispatch(operation)

    def dispatch(self, operation: str) -> None:
        try:
            self.handlers[operation]()
        except InvalidSelection as e:
            self.output(f"✖ {e}")
        except LogSinkError as e:
            logger.warning(f"⚠ {e}")

    # --- operations ---

    def plan(self):
        self.output("\n--- Plan a Test Execution ---")
        platform = self.input("Select Platform (AIX/macOS): ")
        test_type = self.input("Select Test Type (GUI/Network/All): ")
        execution = plan_execution(platform, test_type)
        self.manager.registry.schedule(execution)
        self.output(f"✓ Test execution successfully planned: {execution.description}")

    def list_planned(self):
        self.output("\n--- Planned Test Executions ---")
        executions = self.manager.registry.pending()
        if not executions:
            self.output("No tests currently scheduled.")
            return
        for index, execution in enumerate(executions, start=1):
            self.output(f"{index}. {execution.description}")

    def run_tests(self):
        self.output("\n--- Running All Scheduled Tests (Simulated Monday) ---")
        completed = self.manager.run_pending()
        self.output(f"✓ {completed} test cycle(s) completed")

    def check_in(self):
        self.manager.check_in()

    def report(self):
        self.output("\n--- Reporting Test Results ---")
        if not self.manager.report_pending():
            self.output("No tests currently scheduled.")

    def clear(self):
        self.manager.registry.clear()
        self.output("✓ All scheduled tests have been cleared.")

    def restore(self):
        caretaker = self.manager.caretaker
        description = self.input("Enter exact execution description to restore (as shown in list): ")
        restored = caretaker.get_state(description) if caretaker else None
        if restored is None:
            self.output(f"✖ No saved state found for: {description}")
            return
        self.output("✓ Test state successfully restored:")
        self.output(f"  Description: {restored.description}")
        self.output(f"  Platform: {restored.platform}")

    def view_states(self):
        self.output("\n--- Saved Test Execution States ---")
        states = self.manager.caretaker.all_states() if self.manager.caretaker else {}
        if not states:
            self.output("✖ No saved states found.")
            return
        for index, name in enumerate(states, start=1):
            self.output(f"{index}. {name}")

    def view_suite(self):
        platform = self.input("Select Platform (AIX/macOS): ")
        factory = suite_factory_for(platform)
        suite = factory.create_gui_test_suite()
        self.output(f"Test Suite: {suite.description}")
        if not suite.tests:
            self.output("No test cases found.")
            return
        for index, test in enumerate(suite.tests, start=1):
            self.output(f"{index}. Test case: {test.name}")

    def unit_test(self):
        platform = self.input("Select Platform (AIX/macOS): ")
        kind = self.input("Select Test Type (GUI/Network): ").strip().lower()
        factory = case_factory_for(platform)
        if kind == "gui":
            factory.create_gui_test().run()
        elif kind == "network":
            factory.create_network_test().run()
        else:
            raise InvalidSelection(f"Invalid test type '{kind}'. Use one of: GUI, Network")

    def view_logs(self):
        lines = self.manager.log_sink.read_lines()
        if not lines:
            self.output("No logs found.")
            return
        self.output("\n--- Test Execution Log ---")
        for line in lines:
            self.output(line)
        self.output("---------------------------")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Testing Framework System")
    parser.add_argument('--log-file', default=None,
                        help=f'JSON execution log (default: {Paths.LOG_FILE.name})')
    parser.add_argument('--schedule', action='store_true',
                        help='Run scheduled tests automatically every Monday at 09:00')
    parser.add_argument('--auto-check-in', action='store_true',
                        help='Check in source code before every scheduled execution')
    parser.add_argument('--verbose', action='store_true',
                        help='Enable debug logging')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    manager = TestManager.create(log_file=Paths.resolve_log_file(args.log_file),
                                 auto_check_in=args.auto_check_in)
    if args.schedule:
        manager.start_schedule()

    try:
        TestFrameShell(manager).run()
    except KeyboardInterrupt:
        logger.warning("\n⚠ Interrupted by user (Ctrl+C)")
        return 130
    finally:
        manager.stop_schedule()
    return 0


if __name__ == "__main__":
    sys.exit(main())
