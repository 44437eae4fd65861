"""Ring buffer implementation for temperature readings.

Provides a fixed-size circular buffer that overwrites the oldest reading when
full. Storage is a pre-allocated float64 array; reset is logical and never
reallocates.
"""

import threading
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True, slots=True)
class RingBufferStats:
    """Statistics for ring buffer state."""

    capacity: int
    size: int
    total_written: int
    overwrites: int

    @property
    def fill_ratio(self) -> float:
        """Fraction of buffer that is filled (0.0 to 1.0)."""
        return self.size / self.capacity if self.capacity > 0 else 0.0

    @property
    def is_full(self) -> bool:
        """Whether the buffer has reached capacity."""
        return self.size >= self.capacity


class RingBuffer:
    """Thread-safe ring buffer for temperature readings.

    Holds the ``capacity`` most recent readings. Once full, each write
    overwrites the oldest remaining reading (the slot under the write cursor)
    and the cursor advances modulo capacity.

    Thread safety: All public methods are atomic with respect to one another.
    The lock may be supplied by the owner so that the owner can guard its own
    state and the buffer with a single lock; it must be re-entrant if the
    owner calls buffer methods while holding it.

    Example:
        >>> buffer = RingBuffer(capacity=3)
        >>> for value in (1.0, 2.0, 3.0, 4.0):
        ...     buffer.write(value)
        >>> buffer.snapshot_valid().tolist()
        [2.0, 3.0, 4.0]
    """

    def __init__(self, capacity: int, lock: Optional[AbstractContextManager] = None) -> None:
        """Initialize ring buffer with given capacity.

        Args:
            capacity: Maximum number of readings the buffer can hold.
            lock: Lock guarding the buffer. A private ``RLock`` if omitted.

        Raises:
            ValueError: If capacity is not positive.
        """
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")

        self._capacity = capacity
        self._lock = lock if lock is not None else threading.RLock()

        self._values = np.zeros(capacity, dtype=np.float64)

        # Buffer state
        self._head = 0  # Next write position
        self._size = 0  # Current number of valid entries
        self._total_written = 0
        self._overwrites = 0

    @property
    def capacity(self) -> int:
        """Maximum number of readings the buffer can hold."""
        return self._capacity

    @property
    def lock(self) -> AbstractContextManager:
        """The lock guarding this buffer."""
        return self._lock

    def __len__(self) -> int:
        with self._lock:
            return self._size

    def write(self, value: float) -> None:
        """Write a reading, overwriting the oldest one if the buffer is full.

        Args:
            value: Reading to store.
        """
        with self._lock:
            self._values[self._head] = value
            self._head = (self._head + 1) % self._capacity
            self._total_written += 1

            if self._size < self._capacity:
                self._size += 1
            else:
                self._overwrites += 1

    def snapshot_valid(self) -> NDArray[np.float64]:
        """Return all valid readings, oldest to newest.

        Returns:
            A copy of the valid region (length == ``len(self)``). Empty when
            nothing has been written since construction or the last reset.
        """
        with self._lock:
            return self._snapshot_unlocked()

    def _snapshot_unlocked(self) -> NDArray[np.float64]:
        """Internal snapshot_valid without locking (caller must hold lock)."""
        n = self._size
        if n == 0:
            return np.empty(0, dtype=np.float64)

        # Head points to the slot after the newest reading
        start = (self._head - n) % self._capacity
        if start < self._head:
            return self._values[start:self._head].copy()
        return np.concatenate([self._values[start:], self._values[:self._head]])

    def stats(self) -> RingBufferStats:
        """Get current buffer statistics."""
        with self._lock:
            return RingBufferStats(
                capacity=self._capacity,
                size=self._size,
                total_written=self._total_written,
                overwrites=self._overwrites,
            )

    def reset(self) -> None:
        """Logically clear the buffer.

        Cursor, size and counters return to zero. Stored values are left in
        place but are unreachable because size is zero.
        """
        with self._lock:
            self._head = 0
            self._size = 0
            self._total_written = 0
            self._overwrites = 0
