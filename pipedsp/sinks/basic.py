"""Sinks tracking the last value, extrema, sum and collected values."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, NamedTuple, Optional

from pipedsp.core.stage import Finalize, NoConfig, Sink
from pipedsp.sinks.base import Accumulator


@dataclass
class ValueState:
    value: Optional[Any] = None


class Last(Accumulator):
    """Most recent input, or None when nothing was sunk."""

    def _initial_state(self, config: NoConfig) -> ValueState:
        return ValueState()

    def filter(self, input: Any) -> Any:
        self._state.value = input
        return input

    def finalize(self) -> Optional[Any]:
        return self._state.value


class Min(Accumulator):
    """Smallest input seen so far."""

    def _initial_state(self, config: NoConfig) -> ValueState:
        return ValueState()

    def filter(self, input: Any) -> Any:
        state = self._state
        if state.value is None or input < state.value:
            state.value = input
        return state.value

    def finalize(self) -> Optional[Any]:
        return self._state.value


class Max(Accumulator):
    """Largest input seen so far."""

    def _initial_state(self, config: NoConfig) -> ValueState:
        return ValueState()

    def filter(self, input: Any) -> Any:
        state = self._state
        if state.value is None or input > state.value:
            state.value = input
        return state.value

    def finalize(self) -> Optional[Any]:
        return self._state.value


class BoundsOutput(NamedTuple):
    min: Any
    max: Any


@dataclass
class BoundsState:
    min: Min = field(default_factory=Min)
    max: Max = field(default_factory=Max)


class Bounds(Accumulator):
    """Smallest and largest input seen so far.

    Example:
        >>> sink = Bounds()
        >>> for x in [3, 1, 4, 1, 5]:
        ...     sink.sink(x)
        >>> sink.finalize()
        BoundsOutput(min=1, max=5)
    """

    def _initial_state(self, config: NoConfig) -> BoundsState:
        return BoundsState()

    def filter(self, input: Any) -> BoundsOutput:
        return BoundsOutput(self._state.min.filter(input), self._state.max.filter(input))

    def finalize(self) -> Optional[BoundsOutput]:
        low = self._state.min.finalize()
        if low is None:
            return None
        return BoundsOutput(low, self._state.max.finalize())


@dataclass
class SumState:
    value: Optional[Any] = None


class Integrate(Accumulator):
    """Sum of all inputs, or None when nothing was sunk."""

    def _initial_state(self, config: NoConfig) -> SumState:
        return SumState()

    def filter(self, input: Any) -> Any:
        state = self._state
        state.value = input if state.value is None else state.value + input
        return state.value

    def finalize(self) -> Optional[Any]:
        return self._state.value


@dataclass
class CollectState:
    values: List[Any] = field(default_factory=list)


class Collect(Sink, Finalize):
    """Collect every input into a list.

    The only sink whose memory grows with the stream.
    """

    def _initial_state(self, config: NoConfig) -> CollectState:
        return CollectState()

    def sink(self, input: Any) -> None:
        self._state.values.append(input)

    def finalize(self) -> List[Any]:
        return self._state.values
