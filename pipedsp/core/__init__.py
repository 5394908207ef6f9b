"""Core building blocks: stage contracts and the circular buffer."""

from .buffer import EMPTY, CircularBuffer
from .stage import Filter, Finalize, NoConfig, Role, Sink, Source, Stage, roles_of

__all__ = [
    "CircularBuffer",
    "EMPTY",
    "Stage",
    "Source",
    "Filter",
    "Sink",
    "Finalize",
    "NoConfig",
    "Role",
    "roles_of",
]
