import json

import pytest

from testframe.cli import MENU, TestFrameShell, build_parser


def drive(manager, answers):
    """Run the shell with scripted input, return everything printed."""
    feed = iter(answers)
    printed = []
    shell = TestFrameShell(manager, input_func=lambda prompt="": next(feed), output=printed.append)
    shell.run()
    return printed


def test_plan_list_and_exit(manager):
    printed = drive(manager, ["plan", "aix", "gui", "list", "exit"])

    assert [e.description for e in manager.registry.pending()] == ["AIX - GUI Test Execution"]
    assert "1. AIX - GUI Test Execution" in printed
    assert printed[-1] == "Exiting the Testing Framework System. Goodbye!"


def test_numeric_menu_choices(manager):
    exit_number = str(len(MENU))

    printed = drive(manager, ["1", "macOS", "Network", "2", exit_number])

    assert "1. macOS - Network Test Execution" in printed


def test_invalid_plan_input_builds_nothing(manager):
    printed = drive(manager, ["plan", "windows", "gui", "exit"])

    assert manager.registry.pending() == []
    assert any("Invalid platform" in line for line in printed)


def test_invalid_menu_choice(manager):
    printed = drive(manager, ["99", "bogus", "exit"])

    assert printed.count("Invalid selection. Try again.") == 2


def test_run_without_check_in_then_with_check_in(manager, log_path):
    drive(manager, ["plan", "AIX", "GUI", "plan", "macOS", "Network", "run", "exit"])
    assert manager.registry.pending() == []
    assert not log_path.exists()

    printed = drive(manager, ["plan", "macOS", "Network", "check-in", "run", "view-logs", "exit"])

    entries = json.loads(log_path.read_text(encoding="utf-8"))
    assert [e["platform"] for e in entries] == ["macOS"]
    assert "--- Test Execution Log ---" in printed


def test_restore_and_view_states(manager):
    printed = drive(manager, ["plan", "AIX", "All", "run", "view-states",
                              "restore", "AIX - All Test Execution", "restore", "missing", "exit"])

    assert "1. AIX - All Test Execution" in printed
    assert "  Platform: AIX" in printed
    assert "✖ No saved state found for: missing" in printed


def test_clear_report_and_empty_views(manager):
    printed = drive(manager, ["report", "view-logs", "view-states", "plan", "AIX", "GUI", "clear", "list", "exit"])

    assert "No logs found." in printed
    assert "✖ No saved states found." in printed
    assert "✓ All scheduled tests have been cleared." in printed
    assert printed.count("No tests currently scheduled.") == 2


def test_view_suite_and_unit_test(manager, caplog):
    caplog.set_level("INFO")

    printed = drive(manager, ["view-suite", "macOS", "unit-test", "aix", "network", "exit"])

    assert "Test Suite: macOS GUI Test Suite" in printed
    assert "1. Test case: macOS GUI Login Test" in printed
    assert "Running AIX Network Test" in caplog.text


def test_end_of_input_exits(manager):
    def closed(prompt=""):
        raise EOFError

    printed = []
    TestFrameShell(manager, input_func=closed, output=printed.append).run()

    assert printed[-1] == "Exiting the Testing Framework System. Goodbye!"


def test_parser_defaults():
    args = build_parser().parse_args([])

    assert args.log_file is None
    assert not args.schedule and not args.auto_check_in and not args.verbose


@pytest.mark.parametrize("flag", ["--schedule", "--auto-check-in", "--verbose"])
def test_parser_flags(flag):
    args = vars(build_parser().parse_args([flag]))

    assert args[flag.lstrip("-").replace("-", "_")] is True


def test_view_logs_on_undecodable_file_keeps_shell_running(manager, log_path):
    log_path.write_bytes(b"[\xff\xfe]")

    printed = drive(manager, ["view-logs", "list", "exit"])

    assert "No tests currently scheduled." in printed
    assert printed[-1] == "Exiting the Testing Framework System. Goodbye!"
