"""Diagnostics and debugging utilities for pipedsp."""

from .core import (
    assert_live_slots,
    assert_monotone,
    assert_ring_indices,
    assert_sorted_window,
    assert_window_times,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    reload_debug_from_env,
    set_debug_enabled,
)

__all__ = [
    "assert_ring_indices",
    "assert_live_slots",
    "assert_monotone",
    "assert_window_times",
    "assert_sorted_window",
    "is_debug_enabled",
    "set_debug_enabled",
    "reload_debug_from_env",
    "debug_context",
]
