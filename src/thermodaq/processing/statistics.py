"""Aggregate statistics over temperature readings.

All functions are pure and take any sequence of readings (list, tuple or
numpy array). An empty sequence is not an error: each aggregate returns
``NO_DATA_VALUE`` and logs that no data was available.
"""

import logging
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from thermodaq.models import StatsSnapshot

logger = logging.getLogger(__name__)

# Value reported for every aggregate when there are no readings
NO_DATA_VALUE = 0.0

Readings = Union[Sequence[float], NDArray[np.float64]]


def _as_array(readings: Readings) -> NDArray[np.float64]:
    return np.asarray(readings, dtype=np.float64)


def average(readings: Readings) -> float:
    """Arithmetic mean of the readings, or ``NO_DATA_VALUE`` if empty."""
    values = _as_array(readings)
    if values.size == 0:
        logger.info("No data available to calculate average.")
        return NO_DATA_VALUE
    return float(values.mean())


def minimum(readings: Readings) -> float:
    """Smallest reading, or ``NO_DATA_VALUE`` if empty."""
    values = _as_array(readings)
    if values.size == 0:
        logger.info("No data available to calculate minimum.")
        return NO_DATA_VALUE
    return float(values.min())


def maximum(readings: Readings) -> float:
    """Largest reading, or ``NO_DATA_VALUE`` if empty.

    The reduction is seeded from the data itself, so negative readings are
    handled the same as positive ones.
    """
    values = _as_array(readings)
    if values.size == 0:
        logger.info("No data available to calculate maximum.")
        return NO_DATA_VALUE
    return float(values.max())


def compute_stats(readings: Readings) -> StatsSnapshot:
    """Compute average, minimum and maximum in one snapshot.

    Args:
        readings: Valid readings, typically a ring buffer snapshot.

    Returns:
        StatsSnapshot whose ``has_data`` is False for an empty input. An empty
        input logs the same no-data messages as the individual aggregates.
    """
    values = _as_array(readings)
    return StatsSnapshot(
        average=average(values),
        minimum=minimum(values),
        maximum=maximum(values),
        sample_count=int(values.size),
    )
