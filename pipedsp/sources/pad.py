"""Padding sources extending a finite stream at both ends."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from pipedsp.sources.adapters import _Adapter


class _Phase(enum.Enum):
    BEFORE = enum.auto()
    FRONT = enum.auto()
    INNER = enum.auto()
    BACK = enum.auto()
    AFTER = enum.auto()


@dataclass
class PadState:
    phase: _Phase = _Phase.FRONT
    remaining: int = 0
    value: Optional[Any] = None
    inner: Any = None


class ConstantPad(_Adapter):
    """Surround the inner stream with ``count`` copies of ``value`` on each side.

    Example:
        >>> from pipedsp.sources import FromIter
        >>> list(ConstantPad(FromIter([1, 2]), value=0, count=2))
        [0, 0, 1, 2, 0, 0]
    """

    @dataclass(frozen=True)
    class Config:
        value: Any = 0.0
        count: int = 0

        def __post_init__(self) -> None:
            if self.count < 0:
                raise ValueError(f"count must be >= 0, got {self.count}")

    def _initial_state(self, config: "ConstantPad.Config") -> PadState:
        return PadState(phase=_Phase.FRONT, remaining=config.count, value=config.value)

    def source(self) -> Optional[Any]:
        state = self._state
        if state.phase is _Phase.FRONT:
            if state.remaining > 0:
                state.remaining -= 1
                return state.value
            state.phase = _Phase.INNER
        if state.phase is _Phase.INNER:
            value = state.inner.source()
            if value is not None:
                return value
            state.phase = _Phase.BACK
            state.remaining = self._config.count
        if state.phase is _Phase.BACK and state.remaining > 0:
            state.remaining -= 1
            return state.value
        state.phase = _Phase.AFTER
        return None


class EdgePad(_Adapter):
    """Extend the inner stream by repeating its first and last values.

    ``count`` extra copies are emitted at each end; an empty inner stream
    stays empty.

    Example:
        >>> from pipedsp.sources import FromIter
        >>> list(EdgePad(FromIter([0, 1, 2, 3, 4]), count=2))
        [0, 0, 0, 1, 2, 3, 4, 4, 4]
    """

    @dataclass(frozen=True)
    class Config:
        count: int = 0

        def __post_init__(self) -> None:
            if self.count < 0:
                raise ValueError(f"count must be >= 0, got {self.count}")

    def _initial_state(self, config: "EdgePad.Config") -> PadState:
        return PadState(phase=_Phase.BEFORE)

    def source(self) -> Optional[Any]:
        state = self._state
        if state.phase is _Phase.BEFORE:
            value = state.inner.source()
            if value is None:
                state.phase = _Phase.AFTER
                return None
            state.phase = _Phase.FRONT
            state.remaining = self._config.count
            state.value = value
            return value
        if state.phase is _Phase.FRONT:
            if state.remaining > 0:
                state.remaining -= 1
                return state.value
            state.phase = _Phase.INNER
        if state.phase is _Phase.INNER:
            value = state.inner.source()
            if value is not None:
                state.value = value
                return value
            state.phase = _Phase.BACK
            state.remaining = self._config.count
        if state.phase is _Phase.BACK and state.remaining > 0:
            state.remaining -= 1
            return state.value
        state.phase = _Phase.AFTER
        state.value = None
        return None
