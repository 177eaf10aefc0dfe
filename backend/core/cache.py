"""In-memory measurement cache with separate fresh and stale lookups.

Entries are never evicted: once an entry ages past the freshness window it
stays around as fallback data for when every provider is down.
"""
from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, Optional, Tuple

from backend.core.abstractions import Weather


class ReadWriteLock:
    """Many concurrent readers or a single writer.

    A queued writer blocks new readers, so a steady stream of reads cannot
    starve writes.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writing = False

    @contextmanager
    def reading(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def writing(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class MeasurementCache:
    """Most recent normalized weather per city, tagged with its creation time."""

    def __init__(self, ttl: float, time_func: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self._time_func = time_func
        self._storage: Dict[str, Tuple[float, Weather]] = {}
        self._lock = ReadWriteLock()

    def get_fresh(self, key: str) -> Optional[Weather]:
        with self._lock.reading():
            item = self._storage.get(key)
        if item is None:
            return None
        created_at, value = item
        if self._time_func() - created_at <= self.ttl:
            return value
        return None

    def get_stale(self, key: str) -> Optional[Weather]:
        """Return the cached value regardless of its age."""
        with self._lock.reading():
            item = self._storage.get(key)
        if item is None:
            return None
        return item[1]

    def set(self, key: str, value: Weather) -> None:
        with self._lock.writing():
            self._storage[key] = (self._time_func(), value)

    def __len__(self) -> int:
        with self._lock.reading():
            return len(self._storage)


__all__ = ["MeasurementCache", "ReadWriteLock"]
