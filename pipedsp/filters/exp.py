"""Exponential (recursive) smoothers.

These approximate their windowed counterparts with O(1) state: an
exponential mean with ``inverse_width = 1 / n`` behaves roughly like a
moving mean over ``n`` samples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pipedsp.core.stage import Filter
from pipedsp.filters.mean import MeanVarianceOutput
from pipedsp.utils import check_unit_interval


@dataclass(frozen=True)
class ExpConfig:
    """Smoothing factor of an exponential mean, in (0, 1]."""

    inverse_width: float = 1.0

    def __post_init__(self) -> None:
        check_unit_interval(self.inverse_width, "inverse_width")


@dataclass
class ExpMeanState:
    mean: Optional[Any] = None


class ExpMean(Filter):
    """Exponential moving mean.

    The first input initialises the mean; afterwards
    ``mean += (x - mean) * inverse_width``.

    Example:
        >>> f = ExpMean(inverse_width=0.25)
        >>> [round(f.filter(x), 3) for x in [0.0, 1.0, 7.0, 2.0, 5.0]]
        [0.0, 0.25, 1.938, 1.953, 2.715]
    """

    Config = ExpConfig

    def _initial_state(self, config: ExpConfig) -> ExpMeanState:
        return ExpMeanState()

    @property
    def mean(self) -> Optional[Any]:
        """Current mean, or None before the first input."""
        return self._state.mean

    def filter(self, input: Any) -> Any:
        state = self._state
        if state.mean is None:
            state.mean = input
        else:
            state.mean = state.mean + (input - state.mean) * self._config.inverse_width
        return state.mean


@dataclass
class ExpMeanVarianceState:
    mean: ExpMean
    variance: ExpMean


class ExpMeanVariance(Filter):
    """Exponential mean plus an exponential variance estimate.

    Both smoothers share ``inverse_width``. The variance smoother is fed
    ``|x - mean_old| * |x - mean_new|``.
    """

    Config = ExpConfig

    def _initial_state(self, config: ExpConfig) -> ExpMeanVarianceState:
        return ExpMeanVarianceState(mean=ExpMean(config), variance=ExpMean(config))

    def filter(self, input: Any) -> MeanVarianceOutput:
        state = self._state
        mean_old = state.mean.mean
        if mean_old is None:
            mean_old = input
        mean = state.mean.filter(input)
        squared = abs(input - mean_old) * abs(input - mean)
        variance = state.variance.filter(squared)
        return MeanVarianceOutput(mean, variance)


@dataclass
class ExpMedianState:
    pre: ExpMean
    post: ExpMean
    median: Optional[Any] = None


class ExpMedian(Filter):
    """Approximate running median from a chain of exponential smoothers.

    Parameters
    ----------
    pre:
        Inverse width of the input smoother.
    mid:
        Step factor pulling the median estimate toward the smoothed input.
    post:
        Inverse width of the output smoother.

    All three lie in (0, 1].
    """

    @dataclass(frozen=True)
    class Config:
        pre: float = 1.0
        mid: float = 1.0
        post: float = 1.0

        def __post_init__(self) -> None:
            check_unit_interval(self.pre, "pre")
            check_unit_interval(self.mid, "mid")
            check_unit_interval(self.post, "post")

    def _initial_state(self, config: "ExpMedian.Config") -> ExpMedianState:
        return ExpMedianState(
            pre=ExpMean(inverse_width=config.pre),
            post=ExpMean(inverse_width=config.post),
        )

    def filter(self, input: Any) -> Any:
        state = self._state
        mean = state.pre.filter(input)
        if state.median is None:
            approx = mean
        else:
            approx = state.median + (mean - state.median) * self._config.mid
        state.median = state.post.filter(approx)
        return state.median
