"""Core data models for temperature readings and derived statistics."""

from dataclasses import dataclass
from enum import Enum, auto


class ControllerState(Enum):
    """State of the acquisition controller."""

    RUNNING = auto()
    PAUSED = auto()
    STOPPED = auto()


class PowerMode(Enum):
    """Operator-facing power mode."""

    NORMAL = "normal"
    POWER_SAVING = "power_saving"


@dataclass(frozen=True, slots=True)
class StatsSnapshot:
    """Aggregate statistics over the buffer's valid region at one point in time.

    Derived on demand and never stored. When ``sample_count`` is zero the
    aggregates hold the no-data sentinel (0.0).

    Attributes:
        average: Arithmetic mean of the readings in degrees Celsius.
        minimum: Smallest reading.
        maximum: Largest reading.
        sample_count: Number of readings the aggregates were computed from.
    """

    average: float
    minimum: float
    maximum: float
    sample_count: int

    def __post_init__(self) -> None:
        if self.sample_count < 0:
            raise ValueError(f"sample_count must be non-negative, got {self.sample_count}")

    @property
    def has_data(self) -> bool:
        """Whether any readings contributed to the aggregates."""
        return self.sample_count > 0
