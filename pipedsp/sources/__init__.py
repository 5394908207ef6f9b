"""Sources: stages producing values on demand until they return None."""

from .adapters import Chain, Cycle, Peek, Skip, SourceCache, Take
from .basic import Constant, FromIter, Increment, IntoIter, Repeat
from .pad import ConstantPad, EdgePad

__all__ = [
    "Constant",
    "Increment",
    "Repeat",
    "FromIter",
    "IntoIter",
    "Take",
    "Skip",
    "Chain",
    "Cycle",
    "Peek",
    "SourceCache",
    "ConstantPad",
    "EdgePad",
]
