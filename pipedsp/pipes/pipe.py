"""Binary composition of stages.

``Pipe(lhs, rhs)`` takes its roles from its endpoints:

==============  ==============  ==============
lhs             rhs             pipe
==============  ==============  ==============
Filter[I, A]    Filter[A, O]    Filter[I, O]
Source[A]       Filter[A, O]    Source[O]
Filter[I, A]    Sink[A]         Sink[I]
anything        Finalize[O]     Finalize[O]
==============  ==============  ==============

Every matching row applies, so a filter piped into a stage that is both a
filter and a sink yields a pipe that is both. Each sample flows from
``lhs`` to ``rhs`` synchronously within one call.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from pipedsp.core.stage import NoConfig, Role, Stage, roles_of
from pipedsp.logging import get_logger

logger = get_logger(__name__)


def _pipe_roles(lhs: Role, rhs: Role) -> Role:
    roles = Role.NONE
    if Role.FILTER in lhs and Role.FILTER in rhs:
        roles |= Role.FILTER
    if Role.SOURCE in lhs and Role.FILTER in rhs:
        roles |= Role.SOURCE
    if Role.FILTER in lhs and Role.SINK in rhs:
        roles |= Role.SINK
    if Role.FINALIZE in rhs:
        roles |= Role.FINALIZE
    return roles


class _Composite(Stage):
    """Shared role checking for pipe-like stages."""

    _wraps = "stage"

    _roles: Role

    @property
    def roles(self) -> Role:
        return self._roles

    def _require(self, role: Role, operation: str) -> None:
        if role not in self._roles:
            raise TypeError(
                f"{type(self).__name__} with roles {self._roles} does not support {operation}()"
            )

    def __iter__(self) -> Iterator[Any]:
        self._require(Role.SOURCE, "source")
        while True:
            value = self.source()
            if value is None:
                return
            yield value


class Pipe(_Composite):
    """Composition of two stages; see the module docstring for its roles.

    Args:
        lhs: Upstream stage.
        rhs: Downstream stage.

    Raises:
        TypeError: If the endpoints match none of the composition rules.

    Example:
        >>> from pipedsp.filters.ops import Add, Mul
        >>> pipe = Pipe(Add(rhs=1), Mul(rhs=2))
        >>> pipe.filter(3)
        8
    """

    def __init__(self, lhs: Any, rhs: Any) -> None:
        roles = _pipe_roles(roles_of(lhs), roles_of(rhs))
        if roles == Role.NONE:
            raise TypeError(
                f"Cannot pipe {type(lhs).__name__} ({roles_of(lhs)}) "
                f"into {type(rhs).__name__} ({roles_of(rhs)})"
            )
        self._config = NoConfig()
        self._state = (lhs, rhs)
        self._roles = roles
        logger.debug("Piped %s into %s as %s", type(lhs).__name__, type(rhs).__name__, roles)

    @classmethod
    def new(cls, lhs: Any, rhs: Any) -> "Pipe":
        return cls(lhs, rhs)

    @classmethod
    def from_guts(cls, guts):
        _, (lhs, rhs) = guts
        return cls(lhs, rhs)

    @property
    def lhs(self) -> Any:
        return self._state[0]

    @property
    def rhs(self) -> Any:
        return self._state[1]

    def filter(self, input: Any) -> Any:
        self._require(Role.FILTER, "filter")
        lhs, rhs = self._state
        return rhs.filter(lhs.filter(input))

    def source(self) -> Optional[Any]:
        self._require(Role.SOURCE, "source")
        lhs, rhs = self._state
        value = lhs.source()
        if value is None:
            return None
        return rhs.filter(value)

    def sink(self, input: Any) -> None:
        self._require(Role.SINK, "sink")
        lhs, rhs = self._state
        rhs.sink(lhs.filter(input))

    def finalize(self) -> Any:
        self._require(Role.FINALIZE, "finalize")
        return self._state[1].finalize()

    def reset(self) -> "Pipe":
        lhs, rhs = self._state
        return Pipe(lhs.reset(), rhs.reset())

    def __repr__(self) -> str:
        lhs, rhs = self._state
        return f"Pipe({lhs!r}, {rhs!r})"


class UnitPipe(_Composite):
    """Identity wrapper that starts a left-associative ``|`` chain.

    ``UnitPipe(a) | b | c`` builds ``Pipe(Pipe(UnitPipe(a), b), c)``; the
    wrapper forwards every operation its inner stage supports.
    """

    def __init__(self, inner: Any) -> None:
        roles = roles_of(inner)
        if roles == Role.NONE:
            raise TypeError(f"{type(inner).__name__} is not a pipeline stage")
        self._config = NoConfig()
        self._state = inner
        self._roles = roles

    @classmethod
    def new(cls, inner: Any) -> "UnitPipe":
        return cls(inner)

    @classmethod
    def from_guts(cls, guts):
        _, inner = guts
        return cls(inner)

    @property
    def inner(self) -> Any:
        return self._state

    def filter(self, input: Any) -> Any:
        self._require(Role.FILTER, "filter")
        return self._state.filter(input)

    def source(self) -> Optional[Any]:
        self._require(Role.SOURCE, "source")
        return self._state.source()

    def sink(self, input: Any) -> None:
        self._require(Role.SINK, "sink")
        self._state.sink(input)

    def finalize(self) -> Any:
        self._require(Role.FINALIZE, "finalize")
        return self._state.finalize()

    def reset(self) -> "UnitPipe":
        return UnitPipe(self._state.reset())

    def __repr__(self) -> str:
        return f"UnitPipe({self._state!r})"
