"""Sinks: stages consuming values and surfacing an accumulated result."""

from .base import Accumulator
from .basic import Bounds, BoundsOutput, Collect, Integrate, Last, Max, Min
from .stats import Mean, MeanVariance, Statistics, StatisticsOutput

__all__ = [
    "Accumulator",
    "Last",
    "Min",
    "Max",
    "Bounds",
    "BoundsOutput",
    "Integrate",
    "Collect",
    "Mean",
    "MeanVariance",
    "Statistics",
    "StatisticsOutput",
]
