"""Tests for classifying filters."""

import pytest

from pipedsp.filters import Debounce, Peak, Peaks, Schmitt, Slope, Slopes, Threshold

SIGNAL = [0, 1, 7, 2, 5, 8, 16, 3, 19, 6, 14, 9, 9, 17, 17, 4, 12, 20, 20, 7]


class TestDebounce:
    """Tests for Debounce."""

    def test_reference_sequence(self):
        """Threshold 3 on a noisy binary signal."""
        inputs = [0, 1, 1, 0, 1, 1, 1, 0, 1, 1, 1, 1, 0, 1, 0, 0, 1, 1, 0, 1]
        expected = [0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0]
        f = Debounce(threshold=3, predicate=1, outputs=(0, 1))
        assert [f.filter(x) for x in inputs] == expected

    def test_zero_threshold_always_on(self):
        """With threshold 0 every input maps to the on output."""
        f = Debounce(threshold=0, predicate=1, outputs=("off", "on"))
        assert [f.filter(x) for x in [0, 1, 0]] == ["on", "on", "on"]

    def test_counter_saturates(self):
        """A long run does not overflow the counter."""
        f = Debounce(threshold=2, predicate=True)
        for _ in range(1000):
            f.filter(True)
        assert f.state_mut().count == 2

    def test_invalid_outputs(self):
        """Exactly two outputs are required."""
        with pytest.raises(ValueError, match="exactly 2"):
            Debounce(outputs=(0, 1, 2))

    def test_negative_threshold(self):
        """The threshold cannot be negative."""
        with pytest.raises(ValueError):
            Debounce(threshold=-1)


class TestSchmitt:
    """Tests for the Schmitt trigger."""

    def test_reference_sequence(self):
        """Hysteresis band [5, 10]."""
        expected = [0, 0, 0, 0, 0, 0, 1, 0, 1, 1, 1, 1, 1, 1, 1, 0, 1, 1, 1, 1]
        f = Schmitt(thresholds=(5, 10), outputs=(0, 1))
        assert [f.filter(x) for x in SIGNAL] == expected

    def test_stays_on_inside_band(self):
        """Inputs inside the band keep the previous state."""
        f = Schmitt(thresholds=(5, 10))
        assert [f.filter(x) for x in [7, 11, 7, 4, 7]] == [False, True, True, False, False]

    def test_thresholds_order(self):
        """The low threshold may not exceed the high one."""
        with pytest.raises(ValueError, match="exceeds"):
            Schmitt(thresholds=(10, 5))


class TestThreshold:
    """Tests for Threshold."""

    def test_threshold(self):
        """Inputs at or above the threshold switch on."""
        f = Threshold(threshold=10, outputs=("low", "high"))
        assert [f.filter(x) for x in [9, 10, 11]] == ["low", "high", "high"]


class TestSlopes:
    """Tests for Slopes."""

    def test_reference_sequence(self):
        """Slopes over the first twenty samples."""
        R, N, F = Slope.RISING, Slope.NONE, Slope.FALLING
        expected = [N, R, R, F, R, R, R, F, R, F, R, F, N, R, N, F, R, R, N, F]
        f = Slopes()
        assert [f.filter(x) for x in SIGNAL] == expected

    def test_nan_has_no_slope(self):
        """Unordered inputs are classified as no slope."""
        f = Slopes(outputs=(1, 0, -1))
        assert [f.filter(x) for x in [1.0, float("nan"), 2.0]] == [0, 0, 0]

    def test_custom_outputs(self):
        """outputs are ordered rising, none, falling."""
        f = Slopes(outputs=("up", "flat", "down"))
        assert [f.filter(x) for x in [1, 2, 2, 1]] == ["flat", "up", "flat", "down"]


class TestPeaks:
    """Tests for Peaks."""

    def test_reference_sequence(self):
        """Peaks over the first twenty samples."""
        X, N, M = Peak.MAX, Peak.NONE, Peak.MIN
        expected = [N, N, N, X, M, N, N, X, M, X, M, X, N, N, N, N, M, N, N, N]
        f = Peaks()
        assert [f.filter(x) for x in SIGNAL] == expected

    def test_accepts_slopes(self):
        """Slope values can be fed directly."""
        slopes = Slopes()
        direct, piped = Peaks(), Slopes() | Peaks()
        from_slopes = [direct.filter(slopes.filter(x)) for x in SIGNAL]
        assert from_slopes == [piped.filter(x) for x in SIGNAL]

    def test_plateau_is_not_a_peak(self):
        """A flat top breaks the rising-falling pair."""
        f = Peaks(outputs=(1, 0, -1))
        assert [f.filter(x) for x in [0, 1, 1, 0]] == [0, 0, 0, 0]

    def test_classes_order(self):
        """classes() lists the default outputs in order."""
        assert Peak.classes() == (Peak.MAX, Peak.NONE, Peak.MIN)
        assert Slope.classes() == (Slope.RISING, Slope.NONE, Slope.FALLING)
