"""Process-wide logger that writes to the console, a file, memory or the system log."""

from __future__ import annotations

import io
import logging
import threading
import time
from enum import Enum, IntEnum
from pathlib import Path
from typing import IO, Optional

MSGID_MAIN = "MAIN"
MSGID_MANAGER = "MANAGER"
MSGID_HANDLER = "HANDLER"
MSGID_CONFIGDSERVICE = "CONFIGDSERVICE"
MSGID_CONFIGUREDATA = "CONFIGUREDATA"

_LINE_LIMIT = 1024
_SYSTEM_LOGGER_NAME = "configd"


class LogType(Enum):
    """Where log lines go."""

    PMLOG = 0
    CONSOLE = 1
    FILE = 2
    MEMORY = 3


class LogLevel(IntEnum):
    """Log levels; a message is written when its level is at or below the current one."""

    ERROR = 0
    WARNING = 1
    INFO = 2
    DEBUG = 3
    VERBOSE = 4


_SYSTEM_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _timestamp() -> str:
    seconds, nanos = divmod(time.monotonic_ns(), 1_000_000_000)
    return f"[{seconds:5d}.{nanos:09d}]"


def _format(message: str, args: tuple) -> str:
    return message % args if args else message


class Logger:
    """Leveled logger with switchable output."""

    def __init__(self) -> None:
        self._type = LogType.CONSOLE
        self.level = LogLevel.VERBOSE
        self._path = ""
        self._memory = io.StringIO()
        self._file: Optional[IO[str]] = None
        self._file_written = 0
        self._lock = threading.RLock()

    @property
    def log_type(self) -> LogType:
        return self._type

    @property
    def log_file_path(self) -> str:
        return self._path

    def clear(self) -> None:
        """Reset to system logging at debug level and drop buffered output."""
        with self._lock:
            self._type = LogType.PMLOG
            self.level = LogLevel.DEBUG
            self._path = ""
            self._memory = io.StringIO()
            self._close_file()

    def set_log_type(self, log_type: LogType, path: str | Path = "") -> bool:
        """Switch the output; a file output needs a path that can be opened."""
        with self._lock:
            if log_type == self._type:
                return True
            if log_type == LogType.FILE:
                if not path or not self._open_file(str(path)):
                    return False
            self._type = log_type
            return True

    def is_exist_log(self, level: str, target: str) -> bool:
        """Tell whether some logged line holds both the level name and the target text."""
        if level is None or target is None:
            return False
        with self._lock:
            if self._type == LogType.FILE:
                lines = self._file_lines()
            elif self._type == LogType.MEMORY:
                lines = self._memory.getvalue().splitlines()
            else:
                return False
        return any(target in line and level in line for line in lines)

    def is_empty(self) -> bool:
        """Tell whether nothing has been written to the memory or file output."""
        with self._lock:
            if self._type == LogType.MEMORY and not self._memory.getvalue():
                return True
            if self._type == LogType.FILE and self._file_written == 0:
                return True
            return False

    def memory_log(self) -> str:
        """Everything written to the memory output so far."""
        with self._lock:
            return self._memory.getvalue()

    def verbose(self, message: str, *args) -> bool:
        if self._type not in (LogType.CONSOLE, LogType.FILE):
            return False
        return self._log(LogLevel.VERBOSE, "verbose", "", message, args)

    def debug(self, message: str, *args) -> bool:
        return self._log(LogLevel.DEBUG, "debug", "", message, args)

    def info(self, msgid: str, message: str, *args) -> bool:
        return self._log(LogLevel.INFO, "info", msgid, message, args)

    def warning(self, msgid: str, message: str, *args) -> bool:
        return self._log(LogLevel.WARNING, "warning", msgid, message, args)

    def error(self, msgid: str, message: str, *args) -> bool:
        return self._log(LogLevel.ERROR, "error", msgid, message, args)

    def _log(self, level: LogLevel, name: str, msgid: str, message: str, args: tuple) -> bool:
        if self.level < level:
            return False
        with self._lock:
            return self._write(name, msgid, message, args)

    def _write(self, name: str, msgid: str, message: str, args: tuple) -> bool:
        if self._type == LogType.CONSOLE:
            print(f"{_timestamp()} [{name:<7}] {msgid:<15} {_format(message, args)}")
            return True
        if self._type == LogType.MEMORY:
            if not args:
                line = f"[{name}] {msgid} {message}"
            else:
                line = f"[{name}] {msgid} " + message % args
                if len(line) > _LINE_LIMIT:
                    return False
            self._memory.write(line + "\n")
            return True
        if self._type == LogType.FILE:
            if self._file is None or self._file.closed or not self._path:
                return False
            if not args:
                line = f"[{name}] {msgid} {message}"
            else:
                line = f"{_timestamp()} [{name:<7}] {msgid:<15} " + message % args
                if len(line) > _LINE_LIMIT:
                    return False
            self._file.write(line + "\n")
            self._file.flush()
            self._file_written += len(line) + 1
            return True
        system_logger = logging.getLogger(_SYSTEM_LOGGER_NAME)
        text = _format(message, args)
        system_logger.log(_SYSTEM_LEVELS[name], f"{msgid} {text}" if msgid else text)
        return True

    def _open_file(self, path: str) -> bool:
        if path == self._path and self._file is not None and not self._file.closed:
            return True
        self._close_file()
        try:
            self._file = open(path, "a", encoding="utf-8")
        except OSError:
            return False
        self._path = path
        self._file_written = 0
        return True

    def _close_file(self) -> None:
        if self._file is not None:
            try:
                self._file.close()
            except OSError:
                pass
        self._file = None
        self._file_written = 0

    def _file_lines(self) -> list[str]:
        try:
            return Path(self._path).read_text(encoding="utf-8").splitlines()
        except OSError:
            return []


_instance: Optional[Logger] = None
_instance_lock = threading.Lock()


def get_logger() -> Logger:
    """The shared process-wide logger."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = Logger()
        return _instance