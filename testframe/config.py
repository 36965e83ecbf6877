import logging
import sys
from datetime import timedelta
from pathlib import Path


# --- PATH CONFIGURATION ---
class Paths:
    """
    Centralized path configuration using pathlib.
    """
    # Working directory of the process; the log lives next to where the CLI was started
    BASE_DIR = Path.cwd()

    LOG_FILE = BASE_DIR / "test_log.json"

    @staticmethod
    def resolve_log_file(path: str = None) -> Path:
        """
        Resolve the log file location, falling back to the default.

        :param path: Optional user supplied path (absolute or relative to BASE_DIR)
        :return: Resolved Path object
        """
        if not path:
            return Paths.LOG_FILE
        target = Path(path)
        if not target.is_absolute():
            target = Paths.BASE_DIR / target
        return target


# --- PLATFORM CONFIGURATION ---
class Platforms:
    """
    Supported platforms and test types (canonical spelling).
    """
    AIX = "AIX"
    MACOS = "macOS"
    SUPPORTED = [AIX, MACOS]

    GUI = "GUI"
    NETWORK = "Network"
    ALL = "All"
    TEST_TYPES = [GUI, NETWORK, ALL]


class ScheduleConfig:
    """
    Recurring test run slot: every Monday at 09:00 local time.
    """
    WEEKDAY = 0  # Monday (datetime.weekday())
    HOUR = 9
    MINUTE = 0
    PERIOD = timedelta(days=7)


class ObserverConfig:
    """
    Parties notified about test cycle phase changes.
    """
    DEFAULT_OBSERVERS = ["Project Manager", "Test Lead", "QA Team"]


class Timings:
    """
    Timeout and delay constants (in seconds).
    """
    CHECKIN_DELAY = 2
    CHECKIN_RETRY_DELAY = 1
    TRIGGER_JOIN_TIMEOUT = 5


class Limits:
    """
    Retry and attempt limits for operations.
    """
    CHECKIN_ATTEMPTS = 3


# --- LOGGING SYSTEM ---
class ConsoleOverwriterHandler(logging.StreamHandler):
    """
    Log handler that wipes a half-typed menu prompt before printing.
    Streams that are not terminals (pipes, captured output) get plain lines.
    """
    CLEAR_WIDTH = 80

    def _is_terminal(self) -> bool:
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def emit(self, record):
        """
        Write a record, clearing the prompt line first on a terminal.

        :param record: LogRecord instance
        """
        try:
            line = self.format(record) + self.terminator
            if self._is_terminal():
                line = '\r' + ' ' * self.CLEAR_WIDTH + '\r' + line
            self.stream.write(line)
            self.flush()
        except Exception:
            self.handleError(record)


class MinimalFormatter(logging.Formatter):
    """
    Minimalist colored formatter with symbols for log levels.
    """
    GREY = "\x1b[38;5;240m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    RED = "\x1b[31m"
    RESET = "\x1b[0m"

    LEVEL_STYLES = {
        logging.DEBUG: (f"{GREY}d{RESET}", GREY),
        logging.INFO: (f"{GREEN}•{RESET}", RESET),
        logging.WARNING: (f"{YELLOW}⚠{RESET}", YELLOW),
    }

    def format(self, record):
        """
        Format a log record with color and level symbol.

        :param record: LogRecord instance
        :return: Formatted string
        """
        if record.levelno >= logging.ERROR:
            prefix, msg_color = f"{self.RED}✖{self.RESET}", self.RED
        else:
            prefix, msg_color = self.LEVEL_STYLES.get(record.levelno, ("", self.RESET))

        logger_name = f"{self.GREY}[{record.name}]{self.RESET} " if record.name != "root" else ""
        timestamp = f"{self.GREY}{self.formatTime(record, '%H:%M:%S')}{self.RESET}"
        return f"{timestamp} {prefix} {logger_name}{msg_color}{record.getMessage()}{self.RESET}"


def setup_logging(verbose: bool = False):
    """
    Configure root logger with custom console handler.

    :param verbose: If True, set level to DEBUG, otherwise INFO
    :return: Configured root logger
    """
    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler = ConsoleOverwriterHandler(sys.stdout)
    console_handler.setFormatter(MinimalFormatter())
    root_logger.addHandler(console_handler)

    logging.getLogger("tenacity").setLevel(logging.WARNING)

    return root_logger
