"""Sources wrapping other sources."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Optional

from pipedsp.core.stage import NoConfig, Role, Source, roles_of


def _require_source(stage: Any, owner: str) -> None:
    if Role.SOURCE not in roles_of(stage):
        raise TypeError(f"{owner} expects a source, got {type(stage).__name__}")


class _Adapter(Source):
    """Source holding an inner source in ``state.inner``.

    ``reset()`` rebuilds the adapter around a reset inner source.
    """

    _wraps = "source"

    def __init__(self, inner: Any, config: Any = None, **fields: Any) -> None:
        _require_source(inner, type(self).__name__)
        super().__init__(config, **fields)
        self._state.inner = inner

    @property
    def inner(self) -> Any:
        return self._state.inner

    def reset(self) -> "_Adapter":
        return type(self)(self._state.inner.reset(), self._config)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._state.inner!r}, {self._config!r})"


@dataclass(frozen=True)
class CountConfig:
    count: int = 0

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"count must be >= 0, got {self.count}")


@dataclass
class CountState:
    remaining: int
    inner: Any = None


class Take(_Adapter):
    """First ``count`` values of the inner source.

    Example:
        >>> from pipedsp.sources import Increment
        >>> list(Take(Increment(start=0, step=2), count=5))
        [0, 2, 4, 6, 8]
    """

    Config = CountConfig

    def _initial_state(self, config: CountConfig) -> CountState:
        return CountState(remaining=config.count)

    def source(self) -> Optional[Any]:
        state = self._state
        if state.remaining == 0:
            return None
        state.remaining -= 1
        return state.inner.source()


class Skip(_Adapter):
    """Inner source with its first ``count`` values discarded."""

    Config = CountConfig

    def _initial_state(self, config: CountConfig) -> CountState:
        return CountState(remaining=config.count)

    def source(self) -> Optional[Any]:
        state = self._state
        while state.remaining > 0 and state.inner.source() is not None:
            state.remaining -= 1
        state.remaining = 0
        return state.inner.source()


@dataclass
class CycleState:
    original: Any = None
    inner: Any = None


class Cycle(_Adapter):
    """Repeat a finite source forever.

    The source is deep-copied before it is first pulled and again each
    time the working copy runs dry, so it must be copyable. Ends only if
    a fresh copy is empty.
    """

    def __init__(self, inner: Any) -> None:
        super().__init__(inner, NoConfig())
        self._state.original = inner
        self._state.inner = copy.deepcopy(inner)

    def _initial_state(self, config: NoConfig) -> CycleState:
        return CycleState()

    def source(self) -> Optional[Any]:
        state = self._state
        value = state.inner.source()
        if value is None:
            state.inner = copy.deepcopy(state.original)
            value = state.inner.source()
        return value

    def reset(self) -> "Cycle":
        return Cycle(self._state.original)


_NOT_PEEKED = object()


@dataclass
class PeekState:
    peeked: Any = _NOT_PEEKED
    inner: Any = None


class Peek(_Adapter):
    """Source with one value of look-ahead.

    Example:
        >>> from pipedsp.sources import Increment
        >>> source = Peek(Increment())
        >>> source.peek(), source.peek(), source.source(), source.source()
        (0, 0, 0, 1)
    """

    def __init__(self, inner: Any) -> None:
        super().__init__(inner, NoConfig())

    def _initial_state(self, config: NoConfig) -> PeekState:
        return PeekState()

    def peek(self) -> Optional[Any]:
        """Next value without consuming it, or None at end of stream."""
        state = self._state
        if state.peeked is _NOT_PEEKED:
            state.peeked = state.inner.source()
        return state.peeked

    def source(self) -> Optional[Any]:
        state = self._state
        if state.peeked is _NOT_PEEKED:
            return state.inner.source()
        value, state.peeked = state.peeked, _NOT_PEEKED
        return value

    def reset(self) -> "Peek":
        return Peek(self._state.inner.reset())


@dataclass
class CachedState:
    cached: Optional[Any] = None
    inner: Any = None


class SourceCache(_Adapter):
    """Source remembering the last value it produced."""

    def __init__(self, inner: Any) -> None:
        super().__init__(inner, NoConfig())

    def _initial_state(self, config: NoConfig) -> CachedState:
        return CachedState()

    def cached(self) -> Optional[Any]:
        """Last sourced value; None before the first pull or after the end."""
        return self._state.cached

    def source(self) -> Optional[Any]:
        value = self._state.inner.source()
        self._state.cached = value
        return value

    def reset(self) -> "SourceCache":
        return SourceCache(self._state.inner.reset())


@dataclass
class ChainState:
    front: Any
    back: Any


class Chain(Source):
    """All values of ``front`` followed by all values of ``back``."""

    _wraps = "source"

    def __init__(self, front: Any, back: Any) -> None:
        _require_source(front, "Chain")
        _require_source(back, "Chain")
        super().__init__(NoConfig())
        self._state = ChainState(front=front, back=back)

    def source(self) -> Optional[Any]:
        value = self._state.front.source()
        if value is None:
            value = self._state.back.source()
        return value

    def reset(self) -> "Chain":
        return Chain(self._state.front.reset(), self._state.back.reset())

    def __repr__(self) -> str:
        return f"Chain({self._state.front!r}, {self._state.back!r})"
