"""Acquisition controller for sampling a temperature source into a ring buffer.

The controller runs a dedicated sampling thread that reads the sensor once per
interval and writes the reading into the ring buffer. The control side (the
operator console) pauses, resets, queries and shuts down acquisition
concurrently through the controller's public methods.

Locking: one re-entrant lock, owned by AcquisitionState, guards the ring
buffer and both flags. It is never held across a sensor read.
"""

import logging
import math
import threading
from dataclasses import dataclass
from typing import Optional

from thermodaq.acquisition.ring_buffer import RingBuffer, RingBufferStats
from thermodaq.errors import ControllerStoppedError, SensorReadError
from thermodaq.models import ControllerState, PowerMode, StatsSnapshot
from thermodaq.processing.statistics import compute_stats
from thermodaq.sensors.base import SensorSource

logger = logging.getLogger(__name__)


class AcquisitionState:
    """State shared between the control side and the sampling thread.

    Attributes:
        lock: Guards ``buffer``, ``paused`` and ``alive``.
        buffer: Ring buffer of recent readings, guarded by ``lock``.
        paused: Power-saving flag; the sampling thread skips reads while set.
        alive: Cleared exactly once, on shutdown.
        wake: Set on shutdown to cut short every sampling thread's interval wait.
    """

    def __init__(self, buffer_capacity: int) -> None:
        self.lock = threading.RLock()
        self.buffer = RingBuffer(capacity=buffer_capacity, lock=self.lock)
        self.paused = False
        self.alive = True
        self.wake = threading.Event()

    def stop(self) -> bool:
        """Clear ``alive`` and wake all waiters.

        Returns:
            True if this call performed the shutdown.
        """
        with self.lock:
            first_request = self.alive
            self.alive = False
        self.wake.set()
        return first_request


@dataclass(frozen=True, slots=True)
class AcquisitionStats:
    """Statistics for the acquisition controller."""

    state: ControllerState
    buffer_stats: RingBufferStats
    readings_taken: int
    readings_skipped: int
    readings_discarded: int
    read_errors: int

    @property
    def error_ratio(self) -> float:
        """Fraction of attempted sensor reads that failed (0.0 to 1.0)."""
        attempted = self.readings_taken + self.readings_discarded + self.read_errors
        return self.read_errors / attempted if attempted > 0 else 0.0


class AcquisitionController:
    """Controller owning the sampling thread and its shared state.

    States:
    - RUNNING: a reading is taken every interval
    - PAUSED: power-saving; the loop keeps waiting out intervals without reading
    - STOPPED: terminal, the sampling loop has been told to exit

    Thread model:
    - Sampling thread: reads the sensor outside the lock, writes under it
    - Control thread: toggles pause, resets, snapshots statistics, shuts down

    A reading that completes after a pause or shutdown was requested is
    discarded, so no write ever lands after ``pause_toggle()`` or
    ``shutdown()`` has returned.

    Example:
        >>> controller = AcquisitionController(SimulatedTemperatureSensor())
        >>> controller.start()
        >>> snapshot = controller.current_stats()
        >>> controller.shutdown()
    """

    DEFAULT_BUFFER_CAPACITY = 10
    DEFAULT_SAMPLE_INTERVAL = 1.0

    # Extra time allowed on top of one interval when joining the sampling thread
    JOIN_GRACE_SECONDS = 1.0

    def __init__(
        self,
        source: SensorSource,
        buffer_capacity: int = DEFAULT_BUFFER_CAPACITY,
        sample_interval: float = DEFAULT_SAMPLE_INTERVAL,
        state: Optional[AcquisitionState] = None,
    ) -> None:
        """Initialize the acquisition controller.

        Args:
            source: Sensor producing one reading per call.
            buffer_capacity: Ring buffer capacity in readings (ignored when
                ``state`` is given).
            sample_interval: Seconds between readings.
            state: Pre-built shared state, for sharing with other observers.

        Raises:
            ValueError: If the interval or capacity is not positive.
        """
        if sample_interval <= 0:
            raise ValueError(f"sample_interval must be positive, got {sample_interval}")

        self._source = source
        self._interval = sample_interval
        self._shared = state if state is not None else AcquisitionState(buffer_capacity)

        # Sampling thread
        self._thread: Optional[threading.Thread] = None

        # Statistics, guarded by the shared lock
        self._readings_taken = 0
        self._readings_skipped = 0
        self._readings_discarded = 0
        self._read_errors = 0

    @property
    def shared_state(self) -> AcquisitionState:
        """The state shared with the sampling thread."""
        return self._shared

    @property
    def buffer(self) -> RingBuffer:
        """Direct access to the ring buffer."""
        return self._shared.buffer

    @property
    def sample_interval(self) -> float:
        """Seconds between readings."""
        return self._interval

    @property
    def state(self) -> ControllerState:
        """Current controller state."""
        with self._shared.lock:
            return self._state_unlocked()

    @property
    def power_mode(self) -> PowerMode:
        """Operator-facing power mode."""
        with self._shared.lock:
            return PowerMode.POWER_SAVING if self._shared.paused else PowerMode.NORMAL

    @property
    def is_alive(self) -> bool:
        """Whether shutdown has not yet been requested."""
        with self._shared.lock:
            return self._shared.alive

    def _state_unlocked(self) -> ControllerState:
        if not self._shared.alive:
            return ControllerState.STOPPED
        if self._shared.paused:
            return ControllerState.PAUSED
        return ControllerState.RUNNING

    def start(self) -> None:
        """Start the sampling thread. Non-blocking.

        Raises:
            ControllerStoppedError: If the controller was already shut down.
            RuntimeError: If the sampling thread was already started.
        """
        with self._shared.lock:
            if not self._shared.alive:
                raise ControllerStoppedError("start sampling")
            if self._thread is not None:
                raise RuntimeError("Acquisition already running")

            self._thread = threading.Thread(
                target=self._sampling_loop,
                name="AcquisitionSampling",
                daemon=True,
            )
            self._thread.start()

        logger.info(
            "Acquisition started (capacity=%d, interval=%.3fs)",
            self._shared.buffer.capacity,
            self._interval,
        )

    def sample_once(self) -> bool:
        """Run one iteration of the sampling loop body.

        Reads the sensor if running, then writes the reading unless a pause or
        shutdown was requested while the read was in flight.

        Returns:
            True if a reading was written to the buffer.
        """
        shared = self._shared
        with shared.lock:
            if not shared.alive:
                return False
            if shared.paused:
                self._readings_skipped += 1
                return False

        # Sensor read happens outside the lock
        try:
            value = float(self._source.read())
            if not math.isfinite(value):
                raise ValueError(f"non-finite reading {value!r}")
        except Exception as e:
            error = SensorReadError(str(e) or type(e).__name__)
            with shared.lock:
                self._read_errors += 1
            logger.warning("%s", error, exc_info=True)
            return False

        with shared.lock:
            if not shared.alive or shared.paused:
                self._readings_discarded += 1
                logger.debug("Discarded reading %.2f taken before %s", value, self._state_unlocked().name)
                return False
            shared.buffer.write(value)
            self._readings_taken += 1

        logger.info("Collected temperature: %.2f", value)
        return True

    def pause_toggle(self) -> ControllerState:
        """Flip between RUNNING and PAUSED without touching the buffer.

        Returns:
            The resulting state. STOPPED (unchanged) after shutdown.
        """
        with self._shared.lock:
            if not self._shared.alive:
                return ControllerState.STOPPED
            self._shared.paused = not self._shared.paused
            state = self._state_unlocked()

        logger.info("Power-saving mode %s", "on" if state is ControllerState.PAUSED else "off")
        return state

    def reset(self) -> None:
        """Clear buffered readings, atomically with respect to writes."""
        with self._shared.lock:
            self._shared.buffer.reset()
        logger.info("Buffer reset")

    def current_stats(self) -> StatsSnapshot:
        """Aggregate statistics over a consistent snapshot of the buffer.

        The valid region is copied under the lock; aggregates are computed
        from the copy after the lock is released.
        """
        readings = self._shared.buffer.snapshot_valid()
        return compute_stats(readings)

    def stats(self) -> AcquisitionStats:
        """Get current acquisition statistics."""
        with self._shared.lock:
            return AcquisitionStats(
                state=self._state_unlocked(),
                buffer_stats=self._shared.buffer.stats(),
                readings_taken=self._readings_taken,
                readings_skipped=self._readings_skipped,
                readings_discarded=self._readings_discarded,
                read_errors=self._read_errors,
            )

    def shutdown(self, timeout: Optional[float] = None) -> bool:
        """Stop acquisition and wait for the sampling thread to exit.

        Idempotent: later calls only wait for the thread again.

        Args:
            timeout: Seconds to wait for the sampling thread. Defaults to one
                interval plus ``JOIN_GRACE_SECONDS``.

        Returns:
            True if the sampling thread is no longer running.
        """
        # Also wakes the sampling thread out of its interval wait
        first_request = self._shared.stop()
        if first_request:
            logger.info("Acquisition shutting down")
        return self.join(timeout)

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the sampling thread to terminate.

        Args:
            timeout: Seconds to wait. Defaults to one interval plus
                ``JOIN_GRACE_SECONDS``.

        Returns:
            True if the thread has terminated (or was never started).
        """
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return True

        if timeout is None:
            timeout = self._interval + self.JOIN_GRACE_SECONDS
        thread.join(timeout=timeout)

        if thread.is_alive():
            logger.warning("Sampling thread did not exit within %.2fs", timeout)
            return False
        return True

    def _sampling_loop(self) -> None:
        """Main sampling loop running in the dedicated thread."""
        shared = self._shared
        while self.is_alive:
            self.sample_once()

            # Interruptible: any shutdown of the shared state wakes us early
            if shared.wake.wait(self._interval):
                break

        logger.debug("Sampling loop exited")

    def __enter__(self) -> "AcquisitionController":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Context manager exit."""
        self.shutdown()
