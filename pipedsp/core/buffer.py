"""Fixed-capacity circular buffer.

The buffer is the storage substrate of every windowed filter. It keeps two
monotone indices ``start`` and ``end``; the logical contents are the slots
``start mod N, ..., (end - 1) mod N``. Slots outside that range hold the
``EMPTY`` marker so that evicted values are released immediately.

Indices never wrap. When an index is about to pass ``max_index`` both
indices are shifted by the same multiple of the capacity, which keeps
``end - start`` and the slot geometry unchanged.
"""

from __future__ import annotations

import sys
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

from pipedsp.diagnostics import assert_live_slots, assert_ring_indices, is_debug_enabled
from pipedsp.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class _Empty:
    """Marker for uninitialised slots."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<empty>"


EMPTY: Any = _Empty()


class CircularBuffer(Generic[T]):
    """Double-ended ring of at most ``capacity`` values, oldest to newest.

    Args:
        capacity: Fixed number of slots (>= 1).
        max_index: Largest value either index may reach before both are
            rebased. Must be at least ``2 * capacity``.

    Raises:
        ValueError: If capacity < 1 or max_index is too small.

    Example:
        >>> buffer = CircularBuffer(3)
        >>> [buffer.push_back(x) for x in (1, 2, 3, 4)]
        [None, None, None, 1]
        >>> list(buffer)
        [2, 3, 4]
    """

    __slots__ = ("_slots", "_start", "_end", "_max_index")

    def __init__(self, capacity: int, *, max_index: int = sys.maxsize) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        if max_index < 2 * capacity:
            raise ValueError(
                f"max_index must be >= 2 * capacity ({2 * capacity}), got {max_index}"
            )
        self._slots: List[Any] = [EMPTY] * capacity
        self._start = 0
        self._end = 0
        self._max_index = max_index

    @classmethod
    def from_iterable(
        cls, capacity: int, iterable: Iterable[T], *, max_index: int = sys.maxsize
    ) -> "CircularBuffer[T]":
        """Fill a new buffer by ``push_back``; older excess values are evicted."""
        buffer: CircularBuffer[T] = cls(capacity, max_index=max_index)
        for value in iterable:
            buffer.push_back(value)
        return buffer

    # ------------------------------------------------------------------
    # Size
    # ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def max_index(self) -> int:
        return self._max_index

    def __len__(self) -> int:
        return self._end - self._start

    def __bool__(self) -> bool:
        return self._end != self._start

    def is_empty(self) -> bool:
        return self._end == self._start

    def is_full(self) -> bool:
        return self._end - self._start == len(self._slots)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def push_back(self, value: T) -> Optional[T]:
        """Append ``value`` as the newest entry.

        Returns:
            The evicted oldest value if the buffer was full, else None.
        """
        evicted = self.pop_front() if self.is_full() else None
        if self._end >= self._max_index:
            self._rebase_down()
        self._slots[self._end % len(self._slots)] = value
        self._end += 1
        if is_debug_enabled():
            self.validate()
        return evicted

    def push_front(self, value: T) -> Optional[T]:
        """Prepend ``value`` as the oldest entry.

        Returns:
            The evicted newest value if the buffer was full, else None.
        """
        evicted = self.pop_back() if self.is_full() else None
        if self._start == 0:
            self._rebase_up()
        self._start -= 1
        self._slots[self._start % len(self._slots)] = value
        if is_debug_enabled():
            self.validate()
        return evicted

    def pop_front(self) -> Optional[T]:
        """Remove and return the oldest value, or None when empty."""
        if self._end == self._start:
            return None
        index = self._start % len(self._slots)
        value = self._slots[index]
        self._slots[index] = EMPTY
        self._start += 1
        return value

    def pop_back(self) -> Optional[T]:
        """Remove and return the newest value, or None when empty."""
        if self._end == self._start:
            return None
        self._end -= 1
        index = self._end % len(self._slots)
        value = self._slots[index]
        self._slots[index] = EMPTY
        return value

    def clear(self) -> None:
        """Release every live slot and reset both indices."""
        capacity = len(self._slots)
        for index in range(self._start, self._end):
            self._slots[index % capacity] = EMPTY
        self._start = 0
        self._end = 0

    def update(self, func: Callable[[T], T]) -> None:
        """Replace every live value ``v`` by ``func(v)``, oldest first."""
        capacity = len(self._slots)
        for index in range(self._start, self._end):
            slot = index % capacity
            self._slots[slot] = func(self._slots[slot])

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def front(self) -> Optional[T]:
        """Oldest value, or None when empty."""
        if self._end == self._start:
            return None
        return self._slots[self._start % len(self._slots)]

    def back(self) -> Optional[T]:
        """Newest value, or None when empty."""
        if self._end == self._start:
            return None
        return self._slots[(self._end - 1) % len(self._slots)]

    def _slot_of(self, position: int) -> int:
        length = self._end - self._start
        if position < 0:
            position += length
        if not 0 <= position < length:
            raise IndexError(f"CircularBuffer index {position} out of range for length {length}")
        return (self._start + position) % len(self._slots)

    def __getitem__(self, position: int) -> T:
        return self._slots[self._slot_of(position)]

    def __setitem__(self, position: int, value: T) -> None:
        self._slots[self._slot_of(position)] = value

    def __iter__(self) -> Iterator[T]:
        slots = self._slots
        capacity = len(slots)
        for index in range(self._start, self._end):
            yield slots[index % capacity]

    def iter(self) -> Iterator[T]:
        """Iterate oldest to newest without consuming."""
        return iter(self)

    def drain(self) -> Iterator[T]:
        """Consume the buffer, yielding oldest to newest."""
        while self._end != self._start:
            yield self.pop_front()

    def copy(self) -> "CircularBuffer[T]":
        clone: CircularBuffer[T] = CircularBuffer(len(self._slots), max_index=self._max_index)
        clone._slots = list(self._slots)
        clone._start = self._start
        clone._end = self._end
        return clone

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CircularBuffer):
            return NotImplemented
        return self.capacity == other.capacity and list(self) == list(other)

    def __repr__(self) -> str:
        return f"CircularBuffer(capacity={self.capacity}, values={list(self)!r})"

    # ------------------------------------------------------------------
    # Index bookkeeping
    # ------------------------------------------------------------------

    @property
    def indices(self) -> tuple[int, int]:
        """The raw ``(start, end)`` indices."""
        return self._start, self._end

    def _rebase_down(self) -> None:
        capacity = len(self._slots)
        offset = (self._start // capacity) * capacity
        logger.debug(
            "Rebasing ring indices (%d, %d) down by %d", self._start, self._end, offset
        )
        self._start -= offset
        self._end -= offset

    def _rebase_up(self) -> None:
        capacity = len(self._slots)
        logger.debug(
            "Rebasing ring indices (%d, %d) up by %d", self._start, self._end, capacity
        )
        self._start += capacity
        self._end += capacity

    def validate(self) -> None:
        """Check index and slot invariants; raises ValueError on breach."""
        assert_ring_indices(self._start, self._end, len(self._slots), self._max_index)
        assert_live_slots(self._slots, self._start, self._end, EMPTY)
