"""Moving minimum, maximum and bounds over a sliding window.

Each filter keeps a monotone deque of ``(value, time)`` entries in a
``CircularBuffer``. An entry is inside the window while
``time + width > now``; entries dominated by a newer input are discarded
from the back, so the front always holds the window extremum. Every
entry is pushed once and popped at most once, giving amortised O(1)
work per sample.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Tuple

from pipedsp.core.buffer import CircularBuffer
from pipedsp.core.stage import Filter
from pipedsp.diagnostics import assert_monotone, assert_window_times, is_debug_enabled
from pipedsp.logging import get_logger
from pipedsp.utils import check_width

logger = get_logger(__name__)


@dataclass(frozen=True)
class WindowConfig:
    """Window configuration shared by ``Min``, ``Max`` and ``Bounds``.

    Attributes:
        width: Number of most recent samples in the window.
        max_time: Largest value of the time counter before it is rebased.
    """

    width: int = 1
    max_time: int = sys.maxsize

    def __post_init__(self) -> None:
        check_width(self.width)
        if self.max_time < 2 * self.width:
            raise ValueError(
                f"max_time must be >= 2 * width ({2 * self.width}), got {self.max_time}"
            )


@dataclass
class WindowState:
    """Time counter and monotone deque of ``(value, time)`` taps."""

    time: int
    taps: CircularBuffer


class _Extremum(Filter):
    Config = WindowConfig

    def _initial_state(self, config: WindowConfig) -> WindowState:
        return WindowState(time=0, taps=CircularBuffer(config.width))

    def _dominated(self, back: Any, input: Any) -> bool:
        raise NotImplementedError

    def filter(self, input: Any) -> Any:
        width = self._config.width
        state = self._state
        taps = state.taps
        now = state.time

        # Evict entries that have left the window.
        while taps and taps.front()[1] + width <= now:
            taps.pop_front()

        while taps and self._dominated(taps.back()[0], input):
            taps.pop_back()

        taps.push_back((input, now))

        if now >= self._config.max_time:
            self._rebase()
        state.time += 1

        if is_debug_enabled():
            assert_window_times([time for _, time in taps], state.time, width)
            assert_monotone((value for value, _ in taps), increasing=self._increasing)

        return taps.front()[0]

    def _rebase(self) -> None:
        width = self._config.width
        state = self._state
        offset = state.time - width
        logger.debug("Rebasing %s time counter %d down by %d", type(self).__name__, state.time, offset)
        state.taps.update(lambda entry: (entry[0], entry[1] - offset))
        state.time = width


class Min(_Extremum):
    """Moving minimum over the most recent ``width`` samples.

    Args:
        width: Window width (>= 1).
        max_time: Rebase threshold of the internal time counter.

    Example:
        >>> f = Min(width=3)
        >>> [f.filter(x) for x in [10, 20, 30, 100, 30, 20, 10]]
        [10, 10, 10, 20, 30, 20, 10]
    """

    _increasing = True

    def _dominated(self, back: Any, input: Any) -> bool:
        return back > input


class Max(_Extremum):
    """Moving maximum over the most recent ``width`` samples.

    Example:
        >>> f = Max(width=3)
        >>> [f.filter(x) for x in [10, 20, 30, 100, 30, 20, 10]]
        [10, 20, 30, 100, 100, 100, 30]
    """

    _increasing = False

    def _dominated(self, back: Any, input: Any) -> bool:
        return back < input


class Bounds(Filter):
    """Moving ``(min, max)`` pair over the most recent ``width`` samples."""

    Config = WindowConfig

    def _initial_state(self, config: WindowConfig) -> Tuple[Min, Max]:
        return Min(config), Max(config)

    def filter(self, input: Any) -> Tuple[Any, Any]:
        low, high = self._state
        return low.filter(input), high.filter(input)
