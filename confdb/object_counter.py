"""Mixin that counts live instances per class."""

from __future__ import annotations

import threading


class ObjectCounter:
    """Counts how many instances of each subclass are alive."""

    _count = 0
    _count_lock = threading.Lock()

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        cls._count = 0

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._register()

    def _register(self) -> None:
        cls = type(self)
        with ObjectCounter._count_lock:
            cls._count += 1

    def __copy__(self):
        cls = type(self)
        duplicate = cls.__new__(cls)
        duplicate.__dict__.update(self.__dict__)
        duplicate._register()
        return duplicate

    def __del__(self) -> None:
        cls = type(self)
        with ObjectCounter._count_lock:
            cls._count -= 1

    @classmethod
    def instance_count(cls) -> int:
        """Number of live instances of this class."""
        return cls._count