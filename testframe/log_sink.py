"""
Append-only JSON log of completed test cycles.
The file holds a single JSON array with one object per cycle.
"""

import json
import logging
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, List

from testframe.errors import LogSinkError

logger = logging.getLogger("TestLog")

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


class JsonLogSink:
    """
    Stores cycle results as a JSON array.
    Every append re-reads the array, adds the entry and rewrites the file,
    so the file is a valid document after each write.
    """

    def __init__(self, path: Path):
        """
        Initialize log sink.

        :param path: Location of the JSON log file (created on first append)
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def append(self, description: str, platform: str, timestamp: str = None) -> Dict[str, str]:
        """
        Append one cycle result.

        :param description: Execution description
        :param platform: Platform tag
        :param timestamp: Optional preformatted timestamp (defaults to now)
        :return: The entry that was written
        :raises LogSinkError: If the log cannot be read or written
        """
        entry = {
            'description': description,
            'platform': platform,
            'timestamp': timestamp or datetime.now().strftime(TIMESTAMP_FORMAT),
        }

        with self._lock:
            entries = self._load()
            entries.append(entry)
            self._write(entries)

        logger.debug(f"Logged cycle: {description} ({platform})")
        return entry

    def entries(self) -> List[Dict]:
        """
        Parsed log entries. A missing file is an empty log.

        :return: List of entry dictionaries in append order
        :raises LogSinkError: If the file exists but cannot be parsed
        """
        with self._lock:
            return self._load()

    def read_lines(self) -> List[str]:
        """
        Raw lines of the log file for display.

        :return: List of lines (empty if no log exists yet)
        :raises LogSinkError: If the file cannot be read
        """
        if not self.path.exists():
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return f.read().splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise LogSinkError(f"Cannot read log {self.path}: {e}") from e

    def _load(self) -> List[Dict]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise LogSinkError(f"Cannot read log {self.path}: {e}") from e

        if not content.strip():
            return []

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise LogSinkError(f"Log {self.path} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise LogSinkError(f"Log {self.path} does not contain a JSON array")
        return data

    def _write(self, entries: List[Dict]) -> None:
        # Write to a sibling temp file, then swap it in
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(entries, f, indent=2, ensure_ascii=False)
                    f.write('\n')
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise LogSinkError(f"Cannot write log {self.path}: {e}") from e
