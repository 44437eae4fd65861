"""Temperature sources: the sensor interface and its implementations."""

from thermodaq.sensors.base import ReplaySource, SensorSource
from thermodaq.sensors.simulator import SimulatedTemperatureSensor, SimulatorConfig

__all__ = [
    "ReplaySource",
    "SensorSource",
    "SimulatedTemperatureSensor",
    "SimulatorConfig",
]
