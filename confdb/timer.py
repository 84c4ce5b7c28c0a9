"""Blocking one-shot timer that another thread can cancel."""

from __future__ import annotations

import threading
import time


class Timer:
    """Waits for a timeout unless cleared first."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._waiting = False
        self._expired = False

    def wait(self, ms: int) -> bool:
        """Block for ms milliseconds; True if the time ran out, False if cleared or busy."""
        with self._cond:
            if self._waiting or self._expired:
                return False
            self._waiting = True
            self._expired = False
            deadline = time.monotonic() + ms / 1000.0
            while self._waiting:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    self._waiting = False
                    self._expired = True
                    break
                self._cond.wait(remaining)
            return self._expired

    def clear(self) -> None:
        """Cancel a pending wait and reset the expired state."""
        with self._cond:
            if self._waiting:
                self._waiting = False
                self._cond.notify_all()
            self._expired = False

    def is_waiting(self) -> bool:
        return self._waiting

    def is_expired(self) -> bool:
        return self._expired