"""Base class for sinks that accumulate a running result."""

from __future__ import annotations

from typing import Any

from pipedsp.core.stage import Filter, Finalize, Sink


class Accumulator(Filter, Sink, Finalize):
    """Sink that is also a filter returning its running accumulator.

    Subclasses implement ``filter``; ``sink`` discards its result.
    ``finalize`` returns the accumulator without consuming the sink.
    """

    def sink(self, input: Any) -> None:
        self.filter(input)
