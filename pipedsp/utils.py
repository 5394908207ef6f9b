"""Utility functions for stage construction and driving pipelines.

Provides helper routines for config validation and a loop that pumps a
source into a sink.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Tuple

import numpy as np

from pipedsp.core.stage import Role, roles_of


def check_coefficients(coefficients: Iterable[float], name: str = "coefficients") -> Tuple[float, ...]:
    """Validate and cast filter coefficients to a tuple of floats.

    Args:
        coefficients: 1D array-like of coefficients.
        name: Field name used in error messages.

    Returns:
        Tuple of Python floats, suitable for a frozen config.

    Raises:
        ValueError: If the input is empty, not 1D, or contains NaN/Inf.
    """
    arr = np.asarray(list(coefficients), dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be 1D, got {arr.ndim}D array")
    if arr.size == 0:
        raise ValueError(f"{name} must not be empty")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} contains NaN or Inf values: {arr.tolist()}")
    return tuple(float(c) for c in arr)


def check_width(width: int, name: str = "width") -> int:
    """Validate a window width (integer >= 1)."""
    if isinstance(width, bool) or int(width) != width:
        raise ValueError(f"{name} must be an integer, got {width!r}")
    if width < 1:
        raise ValueError(f"{name} must be >= 1, got {width}")
    return int(width)


def check_unit_interval(value: float, name: str) -> float:
    """Validate a smoothing factor in the half-open interval (0, 1]."""
    if not 0.0 < value <= 1.0:
        raise ValueError(f"{name} must be in (0, 1], got {value}")
    return value


def drive(source: Any, sink: Any) -> Optional[Any]:
    """Pull ``source`` until it is exhausted, feeding every value to ``sink``.

    Args:
        source: Any stage with the ``SOURCE`` role.
        sink: Any stage with the ``SINK`` role.

    Returns:
        ``sink.finalize()`` if the sink finalizes, else None.

    Raises:
        TypeError: If either argument lacks the required role.

    Example:
        >>> from pipedsp.sources import FromIter
        >>> from pipedsp.sinks import Mean
        >>> drive(FromIter([1.0, 2.0, 3.0]), Mean())
        2.0
    """
    if Role.SOURCE not in roles_of(source):
        raise TypeError(f"{type(source).__name__} is not a source")
    sink_roles = roles_of(sink)
    if Role.SINK not in sink_roles:
        raise TypeError(f"{type(sink).__name__} is not a sink")
    while True:
        value = source.source()
        if value is None:
            break
        sink.sink(value)
    if Role.FINALIZE in sink_roles:
        return sink.finalize()
    return None
