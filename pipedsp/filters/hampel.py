"""Hampel outlier replacement on top of the sliding median."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pipedsp.core.stage import Filter
from pipedsp.filters.median import Median
from pipedsp.utils import check_width

# Scale factor from median absolute deviation to standard deviation
# for normally distributed samples.
MAD_TO_STD = 1.4826


class Hampel(Filter):
    """Replace samples that deviate too far from the running median.

    Before each step the median window's minimum, median and newest value
    are read (all default to the input while the window is empty). The
    input is then fed to the window. With
    ``mad = max(|median - min|, |max - median|)`` the input is an outlier
    when ``|x - median| > mad * factor * threshold``, in which case the
    median is returned instead of the input.

    Parameters
    ----------
    width:
        Width of the median window.
    threshold:
        Number of estimated standard deviations tolerated (> 0).
    factor:
        MAD-to-sigma scale; 1.4826 for IEEE floating point samples.
    """

    @dataclass(frozen=True)
    class Config:
        width: int = 7
        threshold: float = 2.0
        factor: float = MAD_TO_STD

        def __post_init__(self) -> None:
            check_width(self.width)
            if not self.threshold > 0:
                raise ValueError(f"threshold must be > 0, got {self.threshold}")
            if not self.factor > 0:
                raise ValueError(f"factor must be > 0, got {self.factor}")

    def _initial_state(self, config: "Hampel.Config") -> Median:
        return Median(width=config.width)

    @property
    def window(self) -> Median:
        """The underlying sliding median."""
        return self._state

    def filter(self, input: Any) -> Any:
        window = self._state
        low = window.min()
        median = window.median()
        high = window.max()
        if low is None:
            low = input
        if median is None:
            median = input
        if high is None:
            high = input

        window.filter(input)

        mad = max(abs(median - low), abs(high - median))
        threshold = mad * self._config.factor * self._config.threshold
        if abs(input - median) > threshold:
            return median
        return input
