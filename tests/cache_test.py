from __future__ import annotations

import threading
import time

from backend.core.abstractions import Weather
from backend.core.cache import MeasurementCache, ReadWriteLock


class TimeController:
    def __init__(self) -> None:
        self.now = 0.0

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


def test_get_fresh_within_window() -> None:
    clock = TimeController()
    cache = MeasurementCache(ttl=3.0, time_func=clock)
    cache.set("melbourne", Weather(wind_speed=30.0, temperature_degrees=20.0))

    clock.advance(3.0)

    assert cache.get_fresh("melbourne") == Weather(wind_speed=30.0, temperature_degrees=20.0)


def test_get_fresh_misses_once_expired_but_stale_survives() -> None:
    clock = TimeController()
    cache = MeasurementCache(ttl=3.0, time_func=clock)
    cache.set("melbourne", Weather(wind_speed=10.0, temperature_degrees=15.0))

    clock.advance(3.001)

    assert cache.get_fresh("melbourne") is None
    assert cache.get_stale("melbourne") == Weather(wind_speed=10.0, temperature_degrees=15.0)

    clock.advance(86400)
    assert cache.get_stale("melbourne") == Weather(wind_speed=10.0, temperature_degrees=15.0)


def test_absent_key_is_not_found() -> None:
    cache = MeasurementCache(ttl=3.0)

    assert cache.get_fresh("sydney") is None
    assert cache.get_stale("sydney") is None
    assert len(cache) == 0


def test_set_overwrites_existing_entry() -> None:
    cache = MeasurementCache(ttl=3.0)
    cache.set("perth", Weather(wind_speed=1.0, temperature_degrees=2.0))
    cache.set("perth", Weather(wind_speed=3.0, temperature_degrees=4.0))

    assert cache.get_stale("perth") == Weather(wind_speed=3.0, temperature_degrees=4.0)
    assert len(cache) == 1


def test_repeated_set_only_refreshes_timestamp() -> None:
    clock = TimeController()
    cache = MeasurementCache(ttl=3.0, time_func=clock)
    value = Weather(wind_speed=5.5, temperature_degrees=12.3)
    cache.set("hobart", value)

    clock.advance(2.5)
    cache.set("hobart", value)
    clock.advance(2.5)

    assert cache.get_fresh("hobart") == value
    assert cache.get_stale("hobart") == value
    assert len(cache) == 1


def test_concurrent_writers_and_readers() -> None:
    cache = MeasurementCache(ttl=60.0)
    errors = []

    def worker(index: int) -> None:
        key = f"city-{index % 5}"
        try:
            for step in range(200):
                cache.set(key, Weather(wind_speed=float(step), temperature_degrees=float(index)))
                assert cache.get_stale(key) is not None
                cache.get_fresh(key)
        except AssertionError as exc:  # pragma: no cover - reported below
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert not errors
    assert len(cache) == 5


def test_readers_do_not_block_each_other() -> None:
    lock = ReadWriteLock()
    barrier = threading.Barrier(2, timeout=2)
    failures = []

    def reader() -> None:
        with lock.reading():
            try:
                barrier.wait()
            except threading.BrokenBarrierError as exc:  # pragma: no cover - failure path
                failures.append(exc)

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert not failures


def test_writer_waits_for_active_reader() -> None:
    lock = ReadWriteLock()
    reader_entered = threading.Event()
    release_reader = threading.Event()
    written = threading.Event()

    def reader() -> None:
        with lock.reading():
            reader_entered.set()
            release_reader.wait(timeout=2)

    def writer() -> None:
        with lock.writing():
            written.set()

    reader_thread = threading.Thread(target=reader)
    reader_thread.start()
    reader_entered.wait(timeout=2)

    writer_thread = threading.Thread(target=writer)
    writer_thread.start()
    time.sleep(0.05)
    assert not written.is_set()

    release_reader.set()
    reader_thread.join()
    writer_thread.join()
    assert written.is_set()


def test_queued_writer_goes_before_new_readers() -> None:
    lock = ReadWriteLock()
    order = []
    first_reader_in = threading.Event()
    release_first_reader = threading.Event()

    def first_reader() -> None:
        with lock.reading():
            first_reader_in.set()
            release_first_reader.wait(timeout=2)

    def writer() -> None:
        with lock.writing():
            order.append("writer")

    def late_reader() -> None:
        with lock.reading():
            order.append("reader")

    holder = threading.Thread(target=first_reader)
    holder.start()
    first_reader_in.wait(timeout=2)

    writer_thread = threading.Thread(target=writer)
    writer_thread.start()
    deadline = time.monotonic() + 2
    while lock._writers_waiting == 0 and time.monotonic() < deadline:
        time.sleep(0.001)

    reader_thread = threading.Thread(target=late_reader)
    reader_thread.start()
    time.sleep(0.05)
    assert order == []

    release_first_reader.set()
    for thread in (holder, writer_thread, reader_thread):
        thread.join(timeout=2)

    assert order == ["writer", "reader"]
