"""Windowed moving mean and mean/variance."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

from pipedsp.core.buffer import CircularBuffer
from pipedsp.core.stage import Filter
from pipedsp.utils import check_width


class MeanVarianceOutput(NamedTuple):
    """Mean and variance surfaced together by a single step."""

    mean: Any
    variance: Any


@dataclass(frozen=True)
class WidthConfig:
    width: int = 1

    def __post_init__(self) -> None:
        check_width(self.width)


@dataclass
class MeanState:
    """Window taps, their running sum and the number of samples held."""

    taps: CircularBuffer
    total: Any = 0
    weight: int = 0


class Mean(Filter):
    """Arithmetic mean of the most recent ``width`` samples.

    The running sum is updated in O(1): the sample evicted from the window
    is subtracted as the new one is added. Until the window is full the
    sum is divided by the number of samples seen so far.

    Example:
        >>> f = Mean(width=3)
        >>> [f.filter(x) for x in [0.0, 1.0, 7.0, 2.0]]
        [0.0, 0.5, 2.6666666666666665, 3.3333333333333335]
    """

    Config = WidthConfig

    def _initial_state(self, config: WidthConfig) -> MeanState:
        return MeanState(taps=CircularBuffer(config.width))

    def filter(self, input: Any) -> Any:
        state = self._state
        evicted = state.taps.push_back(input)
        if evicted is None:
            state.total = state.total + input
            state.weight += 1
        else:
            state.total = state.total - evicted + input
        return state.total / state.weight


@dataclass
class MeanVarianceState:
    mean: Mean
    variance: Mean
    last_mean: Optional[Any] = None


class MeanVariance(Filter):
    """Windowed mean together with a windowed variance estimate.

    The variance is the windowed mean of ``(x - mean_old) * (x - mean_new)``
    where ``mean_old`` is the previous step's mean (the input itself on
    the first step).
    """

    Config = WidthConfig

    def _initial_state(self, config: WidthConfig) -> MeanVarianceState:
        return MeanVarianceState(mean=Mean(config), variance=Mean(config))

    def filter(self, input: Any) -> MeanVarianceOutput:
        state = self._state
        mean_old = input if state.last_mean is None else state.last_mean
        mean = state.mean.filter(input)
        variance = state.variance.filter((input - mean_old) * (input - mean))
        state.last_mean = mean
        return MeanVarianceOutput(mean, variance)
