"""Tests for windowed and exponential means."""

import numpy as np
import pytest

from pipedsp.filters import ExpMean, ExpMeanVariance, ExpMedian, Mean, MeanVariance

WINDOWED_MEAN = [
    0.000, 0.500, 2.667, 3.333, 4.667, 5.000, 9.667, 9.000, 12.667, 9.333,
    13.000, 9.667, 10.667, 11.667, 14.333, 12.667, 11.000, 12.000, 17.333, 15.667,
    11.333, 9.667, 12.333, 13.333, 16.000, 14.333, 48.000, 46.333, 49.000, 18.000,
    47.333, 43.000, 45.667, 14.667, 17.333, 15.667, 18.333, 21.000, 25.333, 21.000,
    50.333, 41.667, 48.667, 17.667, 20.333, 16.000, 45.333, 43.667, 46.333, 19.667,
]

WINDOWED_VARIANCE = [
    0.000, 0.250, 9.556, 9.852, 9.870, 3.815, 26.741, 39.889, 57.667, 41.852,
    30.074, 9.852, 2.815, 12.519, 16.370, 45.852, 34.370, 53.630, 30.889, 60.963,
    49.481, 48.889, 23.778, 13.852, 29.889, 33.815, 2061.222, 2322.000, 2606.111, 576.111,
    2013.667, 2257.111, 2368.556, 665.815, 132.000, 27.074, 13.667, 11.259, 42.296, 112.667,
    1833.556, 2271.074, 2279.000, 576.259, 103.593, 20.556, 1723.296, 2094.741, 2241.148, 488.000,
]

EXP_MEAN = [
    0.000, 0.250, 1.938, 1.953, 2.715, 4.036, 7.027, 6.020, 9.265, 8.449,
    9.837, 9.628, 9.471, 11.353, 12.765, 10.574, 10.930, 13.198, 14.898, 12.924,
    11.443, 12.332, 12.999, 12.249, 14.937, 13.703, 38.027, 33.020, 29.265, 26.449,
    46.337, 36.003, 33.502, 28.376, 24.532, 23.649, 22.987, 22.490, 25.368, 21.026,
    43.019, 34.264, 32.948, 28.711, 25.533, 23.150, 43.363, 35.272, 32.454, 30.340,
]

EXP_VARIANCE = [
    0.000, 0.188, 8.684, 6.513, 6.626, 10.207, 34.493, 28.910, 53.271, 41.953,
    37.242, 28.063, 21.121, 26.470, 25.832, 33.778, 25.715, 34.710, 34.709, 37.728,
    34.875, 28.529, 22.732, 18.735, 35.722, 31.362, 1798.539, 1424.107, 1110.382, 856.581,
    1829.006, 1692.14, 1287.865, 1044.71, 827.864, 623.237, 468.744, 352.298, 289.063, 273.354,
    1656.166, 1472.066, 1109.246, 885.793, 694.640, 538.022, 1629.149, 1418.237, 1087.501, 829.026,
]

EXP_MEDIAN = [
    0.000, 0.063, 0.523, 0.817, 1.207, 1.803, 2.950, 3.456, 4.648, 5.254,
    6.066, 6.605, 6.990, 7.784, 8.708, 8.817, 9.064, 9.856, 10.836, 11.025,
    10.856, 11.042, 11.370, 11.428, 12.177, 12.368, 18.616, 21.311, 22.284, 22.441,
    27.733, 28.627, 28.854, 27.962, 26.637, 25.705, 25.003, 24.446, 24.799, 23.904,
    28.831, 29.684, 30.015, 29.284, 28.133, 26.872, 31.140, 31.749, 31.531, 30.965,
]


class TestMean:
    """Tests for the windowed mean."""

    def test_reference_signal(self, input_b):
        """Width 3 over reference signal B."""
        f = Mean(width=3)
        assert [f.filter(x) for x in input_b] == pytest.approx(WINDOWED_MEAN, abs=1e-3)

    @pytest.mark.parametrize("width", [1, 4, 10])
    def test_matches_numpy(self, rng, width):
        """Agrees with numpy means over the growing then sliding window."""
        x = rng.normal(size=100)
        f = Mean(width=width)
        outputs = [f.filter(float(v)) for v in x]
        expected = [x[max(0, k - width + 1):k + 1].mean() for k in range(len(x))]
        np.testing.assert_allclose(outputs, expected, atol=1e-9)

    def test_invalid_width(self):
        """Width must be positive."""
        with pytest.raises(ValueError):
            Mean(width=0)


class TestMeanVariance:
    """Tests for the windowed mean and variance."""

    def test_reference_signal(self, input_b):
        """Width 3 over reference signal B."""
        f = MeanVariance(width=3)
        outputs = [f.filter(x) for x in input_b]
        assert [o.mean for o in outputs] == pytest.approx(WINDOWED_MEAN, abs=1e-3)
        assert [o.variance for o in outputs] == pytest.approx(WINDOWED_VARIANCE, rel=1e-5, abs=1e-3)

    def test_output_unpacks(self):
        """Outputs are (mean, variance) pairs."""
        f = MeanVariance(width=2)
        mean, variance = f.filter(3.0)
        assert (mean, variance) == (3.0, 0.0)


class TestExpMean:
    """Tests for the exponential mean."""

    def test_reference_signal(self, input_b):
        """inverse_width 0.25 over reference signal B."""
        f = ExpMean(inverse_width=0.25)
        assert [f.filter(x) for x in input_b] == pytest.approx(EXP_MEAN, abs=1e-3)

    def test_first_input_initialises(self):
        """The first output equals the first input."""
        f = ExpMean(inverse_width=0.1)
        assert f.mean is None
        assert f.filter(42.0) == 42.0
        assert f.mean == 42.0

    def test_unit_inverse_width_is_identity(self):
        """inverse_width 1 tracks the input exactly."""
        f = ExpMean(inverse_width=1.0)
        assert [f.filter(x) for x in [3.0, -1.0, 8.0]] == [3.0, -1.0, 8.0]

    @pytest.mark.parametrize("value", [0.0, -0.5, 1.5])
    def test_invalid_inverse_width(self, value):
        """inverse_width must lie in (0, 1]."""
        with pytest.raises(ValueError, match="inverse_width"):
            ExpMean(inverse_width=value)


class TestExpMeanVariance:
    """Tests for the exponential mean and variance."""

    def test_reference_signal(self, input_b):
        """inverse_width 0.25 over reference signal B."""
        f = ExpMeanVariance(inverse_width=0.25)
        outputs = [f.filter(x) for x in input_b]
        assert [o.mean for o in outputs] == pytest.approx(EXP_MEAN, abs=1e-3)
        assert [o.variance for o in outputs] == pytest.approx(EXP_VARIANCE, rel=1e-5, abs=1e-3)


class TestExpMedian:
    """Tests for the exponential median approximation."""

    def test_reference_signal(self, input_b):
        """Chained smoothers over reference signal B."""
        f = ExpMedian(pre=0.5, mid=0.5, post=0.25)
        assert [f.filter(x) for x in input_b] == pytest.approx(EXP_MEDIAN, abs=1e-3)

    def test_invalid_factor(self):
        """Every factor must lie in (0, 1]."""
        with pytest.raises(ValueError, match="mid"):
            ExpMedian(mid=0.0)
