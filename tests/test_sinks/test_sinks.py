"""Tests for sinks."""

import numpy as np
import pytest

from pipedsp import drive
from pipedsp.sinks import (
    Bounds,
    Collect,
    Integrate,
    Last,
    Max,
    Mean,
    MeanVariance,
    Min,
    Statistics,
)
from pipedsp.sources import FromIter

SIGNAL = [0, 1, 7, 2, 5, 8, 16, 3, 19, 6, 14, 9, 9, 17, 17, 4, 12, 20, 20, 7]

SINKS = [Last, Min, Max, Bounds, Integrate, Mean, MeanVariance, Statistics]


def _sink_all(sink, values):
    for value in values:
        sink.sink(value)
    return sink.finalize()


class TestEmpty:
    """Tests for sinks that received nothing."""

    @pytest.mark.parametrize("factory", SINKS)
    def test_empty_finalizes_to_none(self, factory):
        """Accumulating sinks report None without input."""
        assert factory().finalize() is None

    def test_collect_empty(self):
        """Collect reports an empty list."""
        assert Collect().finalize() == []


class TestSimpleSinks:
    """Tests for Last, Min, Max, Bounds and Integrate."""

    def test_last(self):
        """Last keeps the newest value."""
        assert _sink_all(Last(), [3, 1, 2]) == 2

    def test_min_max(self, input_a):
        """Global extrema of reference signal A."""
        assert _sink_all(Min(), input_a) == 0
        assert _sink_all(Max(), input_a) == 180

    def test_bounds(self):
        """Bounds pairs the global extrema."""
        result = _sink_all(Bounds(), SIGNAL)
        assert result == (0, 20)
        assert (result.min, result.max) == (0, 20)

    def test_integrate(self):
        """Integrate sums every input."""
        assert _sink_all(Integrate(), SIGNAL) == sum(SIGNAL)

    def test_filter_returns_running_value(self):
        """Accumulators double as filters of their running result."""
        f = Max()
        assert [f.filter(x) for x in [1, 3, 2, 5]] == [1, 3, 3, 5]

    def test_finalize_does_not_consume(self):
        """finalize can be called while sinking continues."""
        sink = Integrate()
        sink.sink(1)
        assert sink.finalize() == 1
        sink.sink(2)
        assert sink.finalize() == 3


class TestCollect:
    """Tests for Collect."""

    def test_collect(self):
        """Collect keeps every input in order."""
        assert _sink_all(Collect(), SIGNAL) == SIGNAL

    def test_drive_collect(self):
        """drive returns the finalized list."""
        assert drive(FromIter("abc"), Collect()) == ["a", "b", "c"]


class TestMoments:
    """Tests for Mean, MeanVariance and Statistics."""

    def test_mean(self, input_a):
        """Mean of reference signal A."""
        assert _sink_all(Mean(), input_a) == pytest.approx(26.56, abs=1e-3)

    def test_mean_variance(self, input_a):
        """Sample variance of reference signal A."""
        result = _sink_all(MeanVariance(), input_a)
        assert result.mean == pytest.approx(26.56, abs=1e-3)
        assert result.variance == pytest.approx(1347.68, abs=1e-2)

    def test_single_value_variance(self):
        """One value has zero variance."""
        result = _sink_all(MeanVariance(), [5.0])
        assert result == (5.0, 0.0)

    def test_matches_numpy(self, rng):
        """Welford moments agree with numpy."""
        x = rng.normal(loc=3.0, scale=2.0, size=500)
        result = _sink_all(MeanVariance(), x.tolist())
        assert result.mean == pytest.approx(np.mean(x))
        assert result.variance == pytest.approx(np.var(x, ddof=1))

    def test_statistics(self, input_a):
        """Statistics combines bounds and moments."""
        result = _sink_all(Statistics(), input_a)
        assert (result.min, result.max) == (0, 180)
        assert result.mean == pytest.approx(26.56, abs=1e-3)
        assert result.variance == pytest.approx(1347.68, abs=1e-2)
