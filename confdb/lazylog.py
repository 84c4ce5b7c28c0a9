"""Coalescing debug printer that folds repeated messages into counted log lines."""

from __future__ import annotations

import dataclasses
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .logger import MSGID_CONFIGDSERVICE, get_logger

LAZY_WAIT = 0.3
LAZY_FORGET = 30.0
LAZY_DELAY_MAX = 10.0
LAZY_COUNT_THRESHOLD_MIN = 10


@dataclass
class LazyMessage:
    """A repeated message with its timing and pending count."""

    message: str
    first: float
    last: float
    count: int = 1
    flush_threshold: int = LAZY_COUNT_THRESHOLD_MIN


def _default_emit(entry: LazyMessage) -> None:
    get_logger().info(
        MSGID_CONFIGDSERVICE,
        "uptime=%.3f count=%d %s",
        entry.first,
        entry.count,
        entry.message,
    )


class LazyDebugPrinter:
    """Collects messages and emits each one once per quiet period or count threshold.

    With the default clock a background timer calls handle(); when a custom
    clock is given the caller drives handle() itself.
    """

    def __init__(
        self,
        emit: Optional[Callable[[LazyMessage], None]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._emit = emit or _default_emit
        self._clock = clock or time.monotonic
        self._auto = clock is None
        self._messages: list[LazyMessage] = []
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None

    def post(self, message: str, *args) -> None:
        """Record one occurrence of a message."""
        text = message % args if args else message
        now = self._clock()
        with self._lock:
            entry = next((m for m in self._messages if m.message == text), None)
            if entry is None:
                self._messages.append(LazyMessage(text, now, now))
            else:
                if entry.count == 0:
                    entry.first = now
                entry.count += 1
                entry.last = now
            if self._auto and self._timer is None:
                self._schedule()

    def handle(self) -> bool:
        """Emit due messages, forget stale ones; False once nothing is left."""
        now = self._clock()
        with self._lock:
            kept: list[LazyMessage] = []
            for entry in self._messages:
                since_last = now - entry.last
                since_first = now - entry.first
                time_off = entry.count > 0 and (
                    since_last > LAZY_WAIT or since_first > LAZY_DELAY_MAX
                )
                count_off = entry.count >= entry.flush_threshold
                if count_off:
                    entry.flush_threshold *= 2
                if time_off or count_off:
                    self._emit(dataclasses.replace(entry))
                    entry.count = 0
                if since_last <= LAZY_FORGET:
                    kept.append(entry)
            self._messages = kept
            if not self._messages:
                self._timer = None
                return False
            return True

    def pending(self) -> list[LazyMessage]:
        """Snapshots of the messages currently tracked."""
        with self._lock:
            return [dataclasses.replace(entry) for entry in self._messages]

    def _schedule(self) -> None:
        self._timer = threading.Timer(LAZY_WAIT, self._tick)
        self._timer.daemon = True
        self._timer.start()

    def _tick(self) -> None:
        if self.handle():
            with self._lock:
                self._schedule()