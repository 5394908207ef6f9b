"""Sinks computing running moments with Welford's update.

For each input ``x``:

    count += 1
    delta = x - mean
    mean += delta / count
    m2 += delta * (x - mean)

and the sample variance is ``m2 / (count - 1)`` once two or more values
were seen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional

from pipedsp.core.stage import NoConfig
from pipedsp.filters.mean import MeanVarianceOutput
from pipedsp.sinks.base import Accumulator
from pipedsp.sinks.basic import Bounds


@dataclass
class MomentState:
    count: int = 0
    mean: Any = 0.0
    m2: Any = 0.0

    def update(self, input: Any) -> None:
        self.count += 1
        delta = input - self.mean
        self.mean = self.mean + delta / self.count
        self.m2 = self.m2 + delta * (input - self.mean)

    @property
    def variance(self) -> Any:
        if self.count > 1:
            return self.m2 / (self.count - 1)
        return self.m2


class Mean(Accumulator):
    """Arithmetic mean of all inputs, or None when nothing was sunk."""

    def _initial_state(self, config: NoConfig) -> MomentState:
        return MomentState()

    def filter(self, input: Any) -> Any:
        self._state.update(input)
        return self._state.mean

    def finalize(self) -> Optional[Any]:
        if self._state.count == 0:
            return None
        return self._state.mean


class MeanVariance(Accumulator):
    """Mean and sample variance of all inputs.

    Example:
        >>> sink = MeanVariance()
        >>> for x in [2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0]:
        ...     sink.sink(x)
        >>> result = sink.finalize()
        >>> round(result.mean, 6), round(result.variance, 6)
        (5.0, 4.571429)
    """

    def _initial_state(self, config: NoConfig) -> MomentState:
        return MomentState()

    def filter(self, input: Any) -> MeanVarianceOutput:
        state = self._state
        state.update(input)
        return MeanVarianceOutput(state.mean, state.variance)

    def finalize(self) -> Optional[MeanVarianceOutput]:
        state = self._state
        if state.count == 0:
            return None
        return MeanVarianceOutput(state.mean, state.variance)


class StatisticsOutput(NamedTuple):
    min: Any
    max: Any
    mean: Any
    variance: Any


@dataclass
class StatisticsState:
    bounds: Bounds = field(default_factory=Bounds)
    moments: MeanVariance = field(default_factory=MeanVariance)


class Statistics(Accumulator):
    """Bounds, mean and sample variance of all inputs."""

    def _initial_state(self, config: NoConfig) -> StatisticsState:
        return StatisticsState()

    def filter(self, input: Any) -> StatisticsOutput:
        low, high = self._state.bounds.filter(input)
        mean, variance = self._state.moments.filter(input)
        return StatisticsOutput(low, high, mean, variance)

    def finalize(self) -> Optional[StatisticsOutput]:
        bounds = self._state.bounds.finalize()
        moments = self._state.moments.finalize()
        if bounds is None or moments is None:
            return None
        return StatisticsOutput(bounds.min, bounds.max, moments.mean, moments.variance)
