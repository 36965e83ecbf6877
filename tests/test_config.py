import io
import logging

from testframe.config import ConsoleOverwriterHandler, MinimalFormatter, Paths


class TerminalStream(io.StringIO):
    def isatty(self):
        return True


def record(msg, level=logging.INFO):
    return logging.LogRecord("Manager", level, __file__, 1, msg, None, None)


def test_plain_stream_gets_plain_lines():
    stream = io.StringIO()
    handler = ConsoleOverwriterHandler(stream)

    handler.emit(record("cycle done"))

    assert stream.getvalue() == "cycle done\n"


def test_terminal_line_is_cleared_first():
    stream = TerminalStream()
    handler = ConsoleOverwriterHandler(stream)

    handler.emit(record("cycle done"))

    assert stream.getvalue() == "\r" + " " * ConsoleOverwriterHandler.CLEAR_WIDTH + "\rcycle done\n"


def test_formatter_marks_errors_and_logger_name():
    text = MinimalFormatter().format(record("disk full", logging.ERROR))

    assert "✖" in text
    assert "[Manager]" in text
    assert "disk full" in text


def test_relative_log_file_resolves_under_base_dir():
    assert Paths.resolve_log_file(None) == Paths.LOG_FILE
    assert Paths.resolve_log_file("logs/run.json") == Paths.BASE_DIR / "logs" / "run.json"
