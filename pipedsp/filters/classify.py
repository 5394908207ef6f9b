"""Classifying filters mapping samples onto a small set of outputs.

Every classifier is configured with an ``outputs`` tuple and returns one of
its entries per input, so the output type is chosen by the caller (bools,
integers, strings, the ``Slope``/``Peak`` enums, ...).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from pipedsp.core.stage import Filter


def _check_outputs(outputs: Tuple[Any, ...], count: int) -> Tuple[Any, ...]:
    outputs = tuple(outputs)
    if len(outputs) != count:
        raise ValueError(f"outputs must hold exactly {count} values, got {len(outputs)}")
    return outputs


class Slope(enum.Enum):
    """Direction of change between two consecutive samples."""

    RISING = "rising"
    NONE = "none"
    FALLING = "falling"

    @classmethod
    def classes(cls) -> Tuple["Slope", "Slope", "Slope"]:
        """Outputs in ``Slopes`` order: rising, none, falling."""
        return cls.RISING, cls.NONE, cls.FALLING


class Peak(enum.Enum):
    """Local extremum detected at a change of slope."""

    MAX = "max"
    NONE = "none"
    MIN = "min"

    @classmethod
    def classes(cls) -> Tuple["Peak", "Peak", "Peak"]:
        """Outputs in ``Peaks`` order: max, none, min."""
        return cls.MAX, cls.NONE, cls.MIN


@dataclass
class DebounceState:
    count: int = 0


class Debounce(Filter):
    """Switch on only after ``threshold`` consecutive matches of ``predicate``.

    Any non-matching input resets the counter and switches off again.

    Example:
        >>> f = Debounce(threshold=2, predicate=1, outputs=(False, True))
        >>> [f.filter(x) for x in [1, 1, 1, 0, 1]]
        [False, True, True, False, False]
    """

    @dataclass(frozen=True)
    class Config:
        threshold: int = 1
        predicate: Any = True
        outputs: Tuple[Any, Any] = (False, True)

        def __post_init__(self) -> None:
            if self.threshold < 0:
                raise ValueError(f"threshold must be >= 0, got {self.threshold}")
            object.__setattr__(self, "outputs", _check_outputs(self.outputs, 2))

    def _initial_state(self, config: "Debounce.Config") -> DebounceState:
        return DebounceState()

    def filter(self, input: Any) -> Any:
        config = self._config
        state = self._state
        if input == config.predicate:
            state.count = min(state.count + 1, config.threshold)
        else:
            state.count = 0
        return config.outputs[state.count >= config.threshold]


@dataclass
class SchmittState:
    on: bool = False


class Schmitt(Filter):
    """Comparator with hysteresis.

    Switches on when the input rises above ``thresholds[1]`` and stays on
    until it drops below ``thresholds[0]``.

    Example:
        >>> f = Schmitt(thresholds=(5, 10), outputs=(0, 1))
        >>> [f.filter(x) for x in [0, 16, 6, 3, 8, 11]]
        [0, 1, 1, 0, 0, 1]
    """

    @dataclass(frozen=True)
    class Config:
        thresholds: Tuple[Any, Any] = (0.0, 0.0)
        outputs: Tuple[Any, Any] = (False, True)

        def __post_init__(self) -> None:
            thresholds = tuple(self.thresholds)
            if len(thresholds) != 2:
                raise ValueError(f"thresholds must be a (low, high) pair, got {thresholds!r}")
            if thresholds[0] > thresholds[1]:
                raise ValueError(
                    f"low threshold {thresholds[0]} exceeds high threshold {thresholds[1]}"
                )
            object.__setattr__(self, "thresholds", thresholds)
            object.__setattr__(self, "outputs", _check_outputs(self.outputs, 2))

    def _initial_state(self, config: "Schmitt.Config") -> SchmittState:
        return SchmittState()

    def filter(self, input: Any) -> Any:
        low, high = self._config.thresholds
        state = self._state
        if state.on:
            state.on = input >= low
        else:
            state.on = input > high
        return self._config.outputs[state.on]


class Threshold(Filter):
    """Emit ``outputs[1]`` when ``x >= threshold``, else ``outputs[0]``."""

    @dataclass(frozen=True)
    class Config:
        threshold: Any = 0.0
        outputs: Tuple[Any, Any] = (False, True)

        def __post_init__(self) -> None:
            object.__setattr__(self, "outputs", _check_outputs(self.outputs, 2))

    def filter(self, input: Any) -> Any:
        return self._config.outputs[input >= self._config.threshold]


@dataclass
class SlopesState:
    input: Optional[Any] = None


class Slopes(Filter):
    """Classify each input relative to the previous one.

    ``outputs`` is ordered (rising, none, falling). The first input, equal
    consecutive inputs and unordered pairs (NaN) all yield ``outputs[1]``.

    Example:
        >>> f = Slopes()
        >>> [f.filter(x).value for x in [0, 1, 1, 0]]
        ['none', 'rising', 'none', 'falling']
    """

    @dataclass(frozen=True)
    class Config:
        outputs: Tuple[Any, Any, Any] = Slope.classes()

        def __post_init__(self) -> None:
            object.__setattr__(self, "outputs", _check_outputs(self.outputs, 3))

    def _initial_state(self, config: "Slopes.Config") -> SlopesState:
        return SlopesState()

    def filter(self, input: Any) -> Any:
        previous = self._state.input
        if previous is None:
            index = 1
        elif previous < input:
            index = 0
        elif previous > input:
            index = 2
        else:
            index = 1
        self._state.input = input
        return self._config.outputs[index]


@dataclass
class PeaksState:
    slopes: Slopes
    slope: Optional[Slope] = None


class Peaks(Filter):
    """Detect local maxima and minima from changes in slope.

    ``outputs`` is ordered (max, none, min). A rising slope followed by a
    falling one marks a maximum at the previous sample; falling followed by
    rising marks a minimum. Inputs may be raw samples or ``Slope`` values.
    """

    @dataclass(frozen=True)
    class Config:
        outputs: Tuple[Any, Any, Any] = Peak.classes()

        def __post_init__(self) -> None:
            object.__setattr__(self, "outputs", _check_outputs(self.outputs, 3))

    def _initial_state(self, config: "Peaks.Config") -> PeaksState:
        return PeaksState(slopes=Slopes())

    def filter(self, input: Any) -> Any:
        state = self._state
        slope = input if isinstance(input, Slope) else state.slopes.filter(input)
        previous = state.slope
        if previous is Slope.RISING and slope is Slope.FALLING:
            index = 0
        elif previous is Slope.FALLING and slope is Slope.RISING:
            index = 2
        else:
            index = 1
        state.slope = slope
        return self._config.outputs[index]
