"""Primitive sources and the iterator adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional

from pipedsp.core.stage import Role, Source, roles_of


class Constant(Source):
    """Infinite stream of one value."""

    @dataclass(frozen=True)
    class Config:
        value: Any = 0.0

    def source(self) -> Optional[Any]:
        return self._config.value


@dataclass
class IncrementState:
    value: Any


class Increment(Source):
    """Infinite arithmetic progression ``start, start + step, ...``.

    Example:
        >>> source = Increment(start=42, step=2)
        >>> [source.source() for _ in range(5)]
        [42, 44, 46, 48, 50]
    """

    @dataclass(frozen=True)
    class Config:
        start: Any = 0
        step: Any = 1

    def _initial_state(self, config: "Increment.Config") -> IncrementState:
        return IncrementState(value=config.start)

    def source(self) -> Optional[Any]:
        state = self._state
        output = state.value
        state.value = state.value + self._config.step
        return output


@dataclass
class CountdownState:
    remaining: int


class Repeat(Source):
    """Emit ``value`` exactly ``count`` times."""

    @dataclass(frozen=True)
    class Config:
        value: Any = 0.0
        count: int = 0

        def __post_init__(self) -> None:
            if self.count < 0:
                raise ValueError(f"count must be >= 0, got {self.count}")

    def _initial_state(self, config: "Repeat.Config") -> CountdownState:
        return CountdownState(remaining=config.count)

    def source(self) -> Optional[Any]:
        state = self._state
        if state.remaining == 0:
            return None
        state.remaining -= 1
        return self._config.value


@dataclass
class IteratorState:
    iterator: Iterator[Any]


class FromIter(Source):
    """Source drawing its values from a Python iterable.

    ``reset()`` iterates ``values`` again, so collections restart from the
    beginning while one-shot iterators stay exhausted.
    """

    @dataclass(frozen=True)
    class Config:
        values: Iterable[Any] = ()

    def __init__(self, values: Any = None, **fields: Any) -> None:
        if values is not None and not isinstance(values, self.Config):
            values = self.Config(values=values)
        super().__init__(values, **fields)

    def _initial_state(self, config: "FromIter.Config") -> IteratorState:
        return IteratorState(iterator=iter(config.values))

    def source(self) -> Optional[Any]:
        return next(self._state.iterator, None)


class IntoIter:
    """Python iterator over the values of a source.

    Stops at the source's end of stream. Infinite sources give infinite
    iterators.
    """

    def __init__(self, source: Any) -> None:
        if Role.SOURCE not in roles_of(source):
            raise TypeError(f"IntoIter expects a source, got {type(source).__name__}")
        self._source = source

    @property
    def source(self) -> Any:
        return self._source

    def __iter__(self) -> "IntoIter":
        return self

    def __next__(self) -> Any:
        value = self._source.source()
        if value is None:
            raise StopIteration
        return value
