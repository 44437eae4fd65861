"""Data processing: aggregate statistics over buffered readings."""

from thermodaq.processing.statistics import (
    NO_DATA_VALUE,
    average,
    compute_stats,
    maximum,
    minimum,
)

__all__ = [
    "NO_DATA_VALUE",
    "average",
    "compute_stats",
    "maximum",
    "minimum",
]
