"""Simulated temperature sensor for running without hardware.

Produces uniformly distributed readings (15-30 °C by default) with optional
gaussian noise and fault injection for exercising error handling.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np


@dataclass
class SimulatorConfig:
    """Configuration for the simulated temperature sensor."""

    # Reading range in degrees Celsius, upper bound exclusive
    min_celsius: float = 15.0
    max_celsius: float = 30.0

    # Gaussian noise added on top of the uniform reading
    noise_stddev: float = 0.0

    # Probability that a read raises instead of returning a value
    failure_probability: float = 0.0

    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_celsius <= self.min_celsius:
            raise ValueError(
                f"max_celsius must be greater than min_celsius, "
                f"got {self.min_celsius}..{self.max_celsius}"
            )
        if self.noise_stddev < 0:
            raise ValueError(f"noise_stddev must be non-negative, got {self.noise_stddev}")
        if not 0.0 <= self.failure_probability <= 1.0:
            raise ValueError(
                f"failure_probability must be in [0, 1], got {self.failure_probability}"
            )


class SimulatedTemperatureSensor:
    """Random temperature source.

    Example:
        >>> sensor = SimulatedTemperatureSensor(SimulatorConfig(seed=42))
        >>> 15.0 <= sensor.read() < 30.0
        True
    """

    def __init__(self, config: Optional[SimulatorConfig] = None) -> None:
        """Initialize the simulator.

        Args:
            config: Simulator configuration. Uses defaults if not provided.
        """
        self.config = config or SimulatorConfig()
        self._rng = np.random.default_rng(self.config.seed)

    def read(self) -> float:
        """Produce one reading.

        Raises:
            OSError: When a fault is injected.
        """
        config = self.config
        if config.failure_probability > 0 and self._rng.random() < config.failure_probability:
            raise OSError("simulated sensor fault")

        value = self._rng.uniform(config.min_celsius, config.max_celsius)
        if config.noise_stddev > 0:
            value += self._rng.normal(0.0, config.noise_stddev)
        return float(value)
