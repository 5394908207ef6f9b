"""Single-input FIR convolution and Savitzky–Golay smoothing kernels.

``Convolve`` keeps the most recent ``len(coefficients)`` inputs in a
``CircularBuffer``. The tap buffer is primed with the first input, so the
history before the stream starts is an edge extension of that input.
The newest tap is weighted by ``coefficients[0]``:

    y[k] = sum_j coefficients[j] * x[k - j]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from pipedsp.core.buffer import CircularBuffer
from pipedsp.core.stage import Filter
from pipedsp.utils import check_coefficients

# Least-squares smoothing coefficients by window width, newest sample first.
SAVITZKY_GOLAY: Dict[int, Tuple[float, ...]] = {
    1: (1.0,),
    2: (1.0, 0.0),
    3: (0.83333, 0.33333, -0.16667),
    4: (0.7, 0.4, 0.1, -0.2),
    5: (0.6, 0.4, 0.2, 0.0, -0.2),
    6: (0.52381, 0.38095, 0.2381, 0.09524, -0.04762, -0.19048),
    7: (0.46429, 0.35714, 0.25, 0.14286, 0.03571, -0.07143, -0.17857),
    8: (0.41667, 0.33333, 0.25, 0.16667, 0.08333, 0.0, -0.08333, -0.16667),
    9: (0.37778, 0.31111, 0.24444, 0.17778, 0.11111, 0.04444, -0.02222, -0.08889, -0.15556),
    10: (
        0.34545, 0.29091, 0.23636, 0.18182, 0.12727,
        0.07273, 0.01818, -0.03636, -0.09091, -0.14545,
    ),
    11: (
        0.31818, 0.27273, 0.22727, 0.18182, 0.13636, 0.09091,
        0.04545, 0.0, -0.04545, -0.09091, -0.13636,
    ),
    12: (
        0.29487, 0.25641, 0.21795, 0.17949, 0.14103, 0.10256,
        0.06410, 0.02564, -0.01282, -0.05128, -0.08974, -0.12821,
    ),
    13: (
        0.27473, 0.24176, 0.20879, 0.17582, 0.14286, 0.10989, 0.07692,
        0.04396, 0.01099, -0.02198, -0.05495, -0.08791, -0.12088,
    ),
}


@dataclass(frozen=True)
class ConvolveConfig:
    """Convolution kernel, newest-sample coefficient first."""

    coefficients: Tuple[float, ...] = (1.0,)

    def __post_init__(self) -> None:
        object.__setattr__(self, "coefficients", check_coefficients(self.coefficients))

    @property
    def width(self) -> int:
        return len(self.coefficients)


class Convolve(Filter):
    """Convolve the input stream with a fixed kernel.

    Args:
        coefficients: Non-empty kernel; ``coefficients[0]`` weights the
            newest sample.

    Example:
        >>> f = Convolve(coefficients=(1.0, -1.0))
        >>> [f.filter(x) for x in [0.0, 1.0, 7.0, 2.0]]
        [0.0, 1.0, 6.0, -5.0]
    """

    Config = ConvolveConfig

    def _initial_state(self, config: ConvolveConfig) -> CircularBuffer:
        return CircularBuffer(config.width)

    @classmethod
    def normalized(cls, config: Any = None, **fields: Any) -> "Convolve":
        """Build a convolution whose coefficients are scaled to sum to one.

        A kernel summing to zero is used unscaled.
        """
        if config is None:
            config = cls.Config(**fields)
        total = sum(config.coefficients)
        if total != 0:
            config = cls.Config(tuple(c / total for c in config.coefficients))
        return cls(config)

    @classmethod
    def savitzky_golay(cls, width: int) -> "Convolve":
        """Build a Savitzky–Golay smoother of the given width (1 to 13)."""
        return savitzky_golay(width)

    def filter(self, input: Any) -> Any:
        taps = self._state
        if taps.is_empty():
            for _ in range(taps.capacity - 1):
                taps.push_back(input)
        taps.push_back(input)

        output = 0.0
        for tap, coefficient in zip(taps, reversed(self._config.coefficients)):
            output = output + tap * coefficient
        return output


def savitzky_golay(width: int) -> Convolve:
    """Savitzky–Golay smoothing filter for a window width in 1..13.

    Raises:
        ValueError: If no coefficient table exists for ``width``.
    """
    try:
        coefficients = SAVITZKY_GOLAY[width]
    except KeyError:
        raise ValueError(
            f"No Savitzky-Golay coefficients for width {width}; "
            f"supported widths are {min(SAVITZKY_GOLAY)}..{max(SAVITZKY_GOLAY)}"
        ) from None
    return Convolve(coefficients=coefficients)

