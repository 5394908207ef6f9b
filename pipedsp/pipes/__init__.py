"""Pipe combinators for assembling stages into pipelines."""

from .pipe import Pipe, UnitPipe

__all__ = ["Pipe", "UnitPipe"]
