"""Pass-through, delay and calculus filters, plus the output cache wrapper."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pipedsp.core.buffer import CircularBuffer
from pipedsp.core.stage import Filter, NoConfig, Role, roles_of
from pipedsp.utils import check_width


class Identity(Filter):
    """Return every input unchanged."""

    def filter(self, input: Any) -> Any:
        return input


class Delay(Filter):
    """Delay the stream by ``width`` samples.

    The delay line is primed with the first input, so the first ``width``
    outputs repeat it.

    Example:
        >>> f = Delay(width=2)
        >>> [f.filter(x) for x in [0, 1, 7, 2, 5]]
        [0, 0, 0, 1, 7]
    """

    @dataclass(frozen=True)
    class Config:
        width: int = 1

        def __post_init__(self) -> None:
            check_width(self.width)

    def _initial_state(self, config: "Delay.Config") -> CircularBuffer:
        return CircularBuffer(config.width)

    def filter(self, input: Any) -> Any:
        taps = self._state
        if taps.is_empty():
            for _ in range(taps.capacity):
                taps.push_back(input)
        return taps.push_back(input)


@dataclass
class PreviousState:
    value: Optional[Any] = None


class Differentiate(Filter):
    """First difference ``x[k] - x[k-1]``; zero for the first input."""

    def _initial_state(self, config: NoConfig) -> PreviousState:
        return PreviousState()

    def filter(self, input: Any) -> Any:
        previous = self._state.value
        output = input - input if previous is None else input - previous
        self._state.value = input
        return output


@dataclass
class SumState:
    value: Any = 0


class Integrate(Filter):
    """Cumulative sum of all inputs so far."""

    def _initial_state(self, config: NoConfig) -> SumState:
        return SumState()

    def filter(self, input: Any) -> Any:
        self._state.value = self._state.value + input
        return self._state.value


@dataclass
class CacheState:
    inner: Any
    cached: Optional[Any] = None


class Cache(Filter):
    """Wrap a filter and remember its most recent output.

    Args:
        inner: Filter to wrap.

    Raises:
        TypeError: If ``inner`` is not a filter.
    """

    _wraps = "filter"

    def __init__(self, inner: Any) -> None:
        if Role.FILTER not in roles_of(inner):
            raise TypeError(f"Cache expects a filter, got {type(inner).__name__}")
        super().__init__(NoConfig())
        self._state = CacheState(inner=inner)

    def cached(self) -> Optional[Any]:
        """Most recent output of the wrapped filter, or None."""
        return self._state.cached

    @property
    def inner(self) -> Any:
        return self._state.inner

    def filter(self, input: Any) -> Any:
        output = self._state.inner.filter(input)
        self._state.cached = output
        return output

    def reset(self) -> "Cache":
        return Cache(self._state.inner.reset())

    def __repr__(self) -> str:
        return f"Cache({self._state.inner!r})"
