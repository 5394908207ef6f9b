"""Switch for the per-step invariant checks of the windowed stages.

When debug mode is on, these stages validate their internal structure
after every step and raise ``ValueError`` on a breach:

* ``CircularBuffer``: ring indices ordered, within capacity and below
  ``max_index``; exactly the live slots hold values.
* ``Min``, ``Max``, ``Bounds``: the tap values are monotone and their
  timestamps fall inside the current window.
* ``Median``: the linked list visits every held value in sorted order
  and the median node sits at the left-middle position.

Debug mode starts from the ``PIPEDSP_DEBUG`` environment variable and
can be changed at runtime. With it off, nothing is checked per sample.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional

_DEBUG_ENV_VAR = "PIPEDSP_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag_from_env(value: Optional[str]) -> bool:
    return (value or "0").strip().lower() in _TRUTHY


_debug_enabled: bool = _flag_from_env(os.getenv(_DEBUG_ENV_VAR))


def is_debug_enabled() -> bool:
    """Return whether per-step invariant checks are active."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Globally enable or disable the invariant checks.

    Parameters
    ----------
    enabled:
        Whether stages validate themselves after each step.
    """
    global _debug_enabled
    _debug_enabled = bool(enabled)


def reload_debug_from_env() -> bool:
    """
    Re-read ``PIPEDSP_DEBUG`` and apply it.

    Returns
    -------
    bool
        The new debug setting.
    """
    set_debug_enabled(_flag_from_env(os.getenv(_DEBUG_ENV_VAR)))
    return _debug_enabled


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Run a block with the invariant checks switched on or off.

    The previous setting is restored on exit, also when the block raises.

    Example
    -------
    >>> from pipedsp.filters import Median
    >>> with debug_context(True):
    ...     f = Median(width=3)
    ...     [f.filter(x) for x in [3, 1, 2]]
    [3, 1, 2]
    """
    global _debug_enabled
    prev = _debug_enabled
    _debug_enabled = bool(enabled)
    try:
        yield
    finally:
        _debug_enabled = prev
