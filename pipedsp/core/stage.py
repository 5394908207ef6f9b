"""Stage contracts shared by every source, filter and sink.

A stage owns two disjoint fields: a frozen ``Config`` dataclass and a
mutable state object. ``reset()`` rebuilds the state from the config, so
the config is the minimal input needed to recreate a stage.

Roles are expressed through the abstract base classes ``Source``,
``Filter``, ``Sink`` and ``Finalize``. A stage may play several roles;
``roles_of`` reports them as a ``Role`` flag.
"""

from __future__ import annotations

import copy
import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Iterator, Optional, Tuple, Type, TypeVar

from pipedsp.logging import get_logger

logger = get_logger(__name__)

S = TypeVar("S", bound="Stage")


class Role(enum.Flag):
    """Roles a stage can play in a pipeline."""

    NONE = 0
    SOURCE = enum.auto()
    FILTER = enum.auto()
    SINK = enum.auto()
    FINALIZE = enum.auto()


@dataclass(frozen=True)
class NoConfig:
    """Configuration of stages that have nothing to configure."""


class Stage:
    """Base class of all pipeline stages.

    Subclasses set ``Config`` to a frozen dataclass and implement
    ``_initial_state``. Stages are constructed either from a config
    instance or from its fields:

        >>> Kalman(Kalman.Config(r=0.0001))      # doctest: +SKIP
        >>> Kalman(r=0.0001)                      # doctest: +SKIP
    """

    Config: ClassVar[Type[Any]] = NoConfig
    # Set by stages built around other stages; they have no config-only constructor.
    _wraps: ClassVar[Optional[str]] = None

    def __init__(self, config: Any = None, **fields: Any) -> None:
        if config is None:
            config = self.Config(**fields)
        elif fields:
            raise TypeError(
                f"{type(self).__name__} takes either a config or config fields, not both"
            )
        elif not isinstance(config, self.Config):
            raise TypeError(
                f"{type(self).__name__} expects {self.Config.__qualname__}, "
                f"got {type(config).__name__}"
            )
        self._config = config
        self._state = self._initial_state(config)
        logger.debug("Created %s with %r", type(self).__name__, config)

    def _initial_state(self, config: Any) -> Any:
        """Build the state a fresh stage starts from."""
        return None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def _require_config_only(cls) -> None:
        if cls._wraps is not None:
            raise TypeError(
                f"{cls.__name__} wraps an inner {cls._wraps} and cannot be built "
                f"from a config alone; call {cls.__name__}(inner, ...) instead"
            )

    @classmethod
    def with_config(cls: Type[S], config: Any) -> S:
        cls._require_config_only()
        return cls(config)

    @classmethod
    def default(cls: Type[S]) -> S:
        """Build a stage from the config's default field values."""
        cls._require_config_only()
        return cls(cls.Config())

    @classmethod
    def from_guts(cls: Type[S], guts: Tuple[Any, Any]) -> S:
        """Rebuild a stage from a ``(config, state)`` pair.

        The pair is trusted as-is; no validation is performed.
        """
        config, state = guts
        stage = cls.__new__(cls)
        stage._config = config
        stage._state = state
        return stage

    # ------------------------------------------------------------------
    # Config / state access
    # ------------------------------------------------------------------

    @property
    def config(self) -> Any:
        """The stage's configuration, by reference."""
        return self._config

    def clone_config(self) -> Any:
        """A deep copy of the stage's configuration."""
        return copy.deepcopy(self._config)

    def state_mut(self) -> Any:
        """Mutable access to the stage's state.

        This breaks encapsulation: writing an inconsistent state leaves the
        stage's behaviour undefined.
        """
        return self._state

    def into_guts(self) -> Tuple[Any, Any]:
        """Destructure the stage into its ``(config, state)`` pair."""
        return self._config, self._state

    def reset(self: S) -> S:
        """Return a fresh stage built from the same config."""
        logger.debug("Resetting %s", type(self).__name__)
        return type(self)(self._config)

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def __or__(self, rhs: "Stage") -> "Stage":
        from pipedsp.pipes import Pipe

        return Pipe(self, rhs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._config!r})"


class Source(Stage, ABC):
    """A stage that produces values on demand."""

    @abstractmethod
    def source(self) -> Optional[Any]:
        """Produce the next value, or None at the end of the stream."""

    def __iter__(self) -> Iterator[Any]:
        while True:
            value = self.source()
            if value is None:
                return
            yield value


class Filter(Stage, ABC):
    """A stage that maps every input to exactly one output."""

    @abstractmethod
    def filter(self, input: Any) -> Any:
        """Process one sample and return one output."""


class Sink(Stage, ABC):
    """A stage that consumes values."""

    @abstractmethod
    def sink(self, input: Any) -> None:
        """Consume one sample."""


class Finalize(Stage, ABC):
    """A stage that surfaces an accumulated result."""

    @abstractmethod
    def finalize(self) -> Any:
        """Return the accumulated result."""


def roles_of(stage: Any) -> Role:
    """Return the set of roles ``stage`` supports."""
    roles_method = getattr(stage, "roles", None)
    if isinstance(roles_method, Role):
        return roles_method
    roles = Role.NONE
    if isinstance(stage, Source):
        roles |= Role.SOURCE
    if isinstance(stage, Filter):
        roles |= Role.FILTER
    if isinstance(stage, Sink):
        roles |= Role.SINK
    if isinstance(stage, Finalize):
        roles |= Role.FINALIZE
    return roles
