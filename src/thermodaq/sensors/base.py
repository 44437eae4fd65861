"""Sensor source interface and a replay source for deterministic runs."""

import threading
from typing import Iterable, Protocol, runtime_checkable

from thermodaq.errors import SourceExhaustedError


@runtime_checkable
class SensorSource(Protocol):
    """Anything that produces one temperature reading per call.

    ``read()`` takes no arguments, must not touch controller state and is
    expected to return promptly. It may raise; the acquisition controller
    treats any exception as a failed reading.
    """

    def read(self) -> float:
        ...


class ReplaySource:
    """Sensor source that plays back a fixed sequence of readings.

    Example:
        >>> source = ReplaySource([18.0, 22.0, 16.0])
        >>> source.read()
        18.0
    """

    def __init__(self, readings: Iterable[float], repeat: bool = False) -> None:
        """Initialize the replay source.

        Args:
            readings: Readings to return, in order.
            repeat: Start over from the first reading once exhausted instead
                of raising.

        Raises:
            ValueError: If ``repeat`` is set and there are no readings.
        """
        self._readings = [float(r) for r in readings]
        if repeat and not self._readings:
            raise ValueError("cannot repeat an empty reading sequence")
        self._repeat = repeat
        self._index = 0
        self._lock = threading.Lock()

    @property
    def reads(self) -> int:
        """Number of readings returned so far."""
        with self._lock:
            return self._index

    @property
    def exhausted(self) -> bool:
        """Whether the next read will raise."""
        with self._lock:
            return not self._repeat and self._index >= len(self._readings)

    def read(self) -> float:
        """Return the next reading.

        Raises:
            SourceExhaustedError: If all readings were returned and ``repeat``
                is off.
        """
        with self._lock:
            if self._index >= len(self._readings) and not self._repeat:
                raise SourceExhaustedError(len(self._readings))
            value = self._readings[self._index % len(self._readings)]
            self._index += 1
            return value
