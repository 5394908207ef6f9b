"""pipedsp - composable single-sample streaming DSP stages."""

__version__ = "0.1.0"

# Core abstractions
from .core import (
    EMPTY,
    CircularBuffer,
    Filter,
    Finalize,
    NoConfig,
    Role,
    Sink,
    Source,
    Stage,
    roles_of,
)

# Diagnostics
from .diagnostics import debug_context, is_debug_enabled, set_debug_enabled

# Filters, sources and sinks are namespaced: several share names
# (filters.Min is a moving minimum, sinks.Min a global one).
from . import filters, sinks, sources

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Composition
from .pipes import Pipe, UnitPipe

# Utilities
from .utils import drive

__all__ = [
    "__version__",
    # Core
    "Stage",
    "Source",
    "Filter",
    "Sink",
    "Finalize",
    "NoConfig",
    "Role",
    "roles_of",
    "CircularBuffer",
    "EMPTY",
    # Composition
    "Pipe",
    "UnitPipe",
    # Stage collections
    "filters",
    "sources",
    "sinks",
    # Diagnostics
    "debug_context",
    "is_debug_enabled",
    "set_debug_enabled",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
    # Utilities
    "drive",
]
