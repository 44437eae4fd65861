"""Pytest configuration for thermodaq tests."""

import threading
import time

import pytest

from thermodaq.acquisition import AcquisitionController
from thermodaq.sensors import ReplaySource

# Short cadence so threaded tests complete quickly
FAST_INTERVAL = 0.01


class CountingSource:
    """Sensor source returning 1.0, 2.0, 3.0, ... and counting calls."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.calls = 0

    def read(self) -> float:
        with self._lock:
            self.calls += 1
            return float(self.calls)


class BlockingSource:
    """Sensor source whose read blocks until released by the test."""

    def __init__(self, value: float = 21.5) -> None:
        self.value = value
        self.entered = threading.Event()
        self.release = threading.Event()

    def read(self) -> float:
        self.entered.set()
        self.release.wait(timeout=5.0)
        return self.value


def wait_until(predicate, timeout: float = 2.0, poll: float = 0.005) -> bool:
    """Poll predicate until it returns True or timeout elapses."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(poll)
    return predicate()


@pytest.fixture
def counting_source() -> CountingSource:
    return CountingSource()


@pytest.fixture
def stepped_controller():
    """Controller driven manually via sample_once(), never started.

    Yields:
        Tuple of (controller, source) where source replays 18.0, 22.0, 16.0.
    """
    source = ReplaySource([18.0, 22.0, 16.0])
    controller = AcquisitionController(source, buffer_capacity=10, sample_interval=FAST_INTERVAL)
    yield controller, source
    controller.shutdown()


@pytest.fixture
def running_controller(counting_source: CountingSource):
    """Controller sampling a CountingSource on a background thread."""
    controller = AcquisitionController(
        counting_source, buffer_capacity=50, sample_interval=FAST_INTERVAL
    )
    controller.start()
    yield controller
    controller.shutdown()
