"""Data acquisition controller and buffering."""

from thermodaq.acquisition.acquisition_controller import (
    AcquisitionController,
    AcquisitionState,
    AcquisitionStats,
)
from thermodaq.acquisition.ring_buffer import RingBuffer, RingBufferStats

__all__ = [
    "AcquisitionController",
    "AcquisitionState",
    "AcquisitionStats",
    "RingBuffer",
    "RingBufferStats",
]
