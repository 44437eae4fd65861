"""Tests for aggregate statistics."""

import logging

import numpy as np
import pytest

from thermodaq.models import StatsSnapshot
from thermodaq.processing import NO_DATA_VALUE, average, compute_stats, maximum, minimum


class TestEmptyReadings:
    """Empty input returns the sentinel and reports no data."""

    @pytest.mark.parametrize(
        ("func", "name"),
        [(average, "average"), (minimum, "minimum"), (maximum, "maximum")],
    )
    def test_returns_sentinel_and_logs(self, caplog: pytest.LogCaptureFixture, func, name: str) -> None:
        with caplog.at_level(logging.INFO, logger="thermodaq.processing.statistics"):
            assert func([]) == NO_DATA_VALUE == 0.0
        assert f"No data available to calculate {name}." in caplog.text

    def test_empty_numpy_array(self) -> None:
        assert average(np.empty(0)) == 0.0

    def test_compute_stats_flags_no_data(self) -> None:
        snapshot = compute_stats([])
        assert snapshot == StatsSnapshot(average=0.0, minimum=0.0, maximum=0.0, sample_count=0)
        assert snapshot.has_data is False

    def test_compute_stats_logs_each_aggregate(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="thermodaq.processing.statistics"):
            compute_stats(np.empty(0))
        assert caplog.messages == [
            "No data available to calculate average.",
            "No data available to calculate minimum.",
            "No data available to calculate maximum.",
        ]


class TestAggregates:
    """Aggregates over non-empty input."""

    def test_ten_twenty_thirty(self) -> None:
        readings = [10.0, 20.0, 30.0]
        assert average(readings) == 20.0
        assert minimum(readings) == 10.0
        assert maximum(readings) == 30.0

    def test_single_reading(self) -> None:
        assert average([17.5]) == minimum([17.5]) == maximum([17.5]) == 17.5

    def test_negative_readings_maximum(self) -> None:
        # Maximum must not be seeded from a positive sentinel
        assert maximum([-5.0, -2.5, -10.0]) == -2.5
        assert minimum([-5.0, -2.5, -10.0]) == -10.0

    def test_returns_python_floats(self) -> None:
        assert type(average(np.array([1.0, 2.0]))) is float

    def test_compute_stats(self) -> None:
        snapshot = compute_stats([18.0, 22.0, 16.0])
        assert snapshot.average == pytest.approx(18.6667, abs=1e-4)
        assert snapshot.minimum == 16.0
        assert snapshot.maximum == 22.0
        assert snapshot.sample_count == 3
        assert snapshot.has_data is True


class TestStatsSnapshot:
    """Tests for StatsSnapshot dataclass."""

    def test_frozen(self) -> None:
        snapshot = StatsSnapshot(average=1.0, minimum=1.0, maximum=1.0, sample_count=1)
        with pytest.raises(AttributeError):
            snapshot.average = 2.0  # type: ignore[misc]

    def test_rejects_negative_count(self) -> None:
        with pytest.raises(ValueError, match="sample_count must be non-negative"):
            StatsSnapshot(average=0.0, minimum=0.0, maximum=0.0, sample_count=-1)
