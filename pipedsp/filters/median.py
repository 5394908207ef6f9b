"""Sliding median after Phil Ekstrom's "Better Than Average" algorithm.

The window is a ring of ``width`` nodes that doubles as a doubly-linked
list kept in ascending order. Each node carries a value (None until the
slot is first written) and the indices of its list neighbours. A step
overwrites the oldest ring slot: the node is unlinked, re-inserted at its
sorted position with the new value, and the median cursor is walked to
the middle of the list on the way. Work per sample is O(width) with no
allocation.

For even widths the left of the two middle values is reported; while the
window is still filling, the left median of the samples seen so far.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from pipedsp.core.stage import Filter
from pipedsp.diagnostics import assert_sorted_window, is_debug_enabled
from pipedsp.utils import check_width


class ListNode:
    """A ring slot and list node: value plus neighbour indices."""

    __slots__ = ("value", "prev", "next")

    def __init__(self, value: Any, prev: Optional[int], next: Optional[int]) -> None:
        self.value = value
        self.prev = prev
        self.next = next

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ListNode):
            return NotImplemented
        return (self.value, self.prev, self.next) == (other.value, other.prev, other.next)

    def __repr__(self) -> str:
        return f"@{self.prev}-{self.value!r}-@{self.next}"


@dataclass
class MedianState:
    """Node storage plus the ring cursor, list head and median positions."""

    nodes: List[ListNode]
    cursor: int = 0
    head: int = 0
    median: int = 0


class Median(Filter):
    """Sliding median over the most recent ``width`` samples.

    Args:
        width: Window width (>= 1).

    Example:
        >>> f = Median(width=5)
        >>> [f.filter(x) for x in [10, 20, 30, 100, 30, 20, 10]]
        [10, 10, 20, 20, 30, 30, 30]
    """

    @dataclass(frozen=True)
    class Config:
        width: int = 1

        def __post_init__(self) -> None:
            check_width(self.width)

    def _initial_state(self, config: "Median.Config") -> MedianState:
        size = config.width
        nodes = [ListNode(None, (index + size - 1) % size, (index + 1) % size) for index in range(size)]
        return MedianState(nodes=nodes)

    def __len__(self) -> int:
        return self._config.width

    def filter(self, input: Any) -> Any:
        self._move_head_forward()
        self._remove_node()
        self._state.median = self._state.head
        self._insert_value(input)
        self._update_head(input)
        if self._config.width % 2 == 0:
            state = self._state
            state.median = state.nodes[state.median].prev
        self._state.cursor = (self._state.cursor + 1) % self._config.width

        if is_debug_enabled():
            self.validate()

        return self._state.nodes[self._state.median].value

    def median(self) -> Optional[Any]:
        """Current median, or None before the first sample."""
        return self._state.nodes[self._state.median].value

    def min(self) -> Optional[Any]:
        """Smallest value in the window (the list head)."""
        return self._state.nodes[self._state.head].value

    def max(self) -> Optional[Any]:
        """Value in the most recently written slot.

        Directly after a step this slot holds the newest sample, which is
        what ``Hampel`` uses as the upper end of its deviation estimate.
        """
        state = self._state
        width = self._config.width
        return state.nodes[(state.cursor + width - 1) % width].value

    # ------------------------------------------------------------------
    # Step phases
    # ------------------------------------------------------------------

    def _move_head_forward(self) -> None:
        state = self._state
        if state.cursor == state.head:
            state.head = state.nodes[state.head].next

    def _remove_node(self) -> None:
        state = self._state
        nodes = state.nodes
        node = nodes[state.cursor]
        predecessor, successor = node.prev, node.next
        nodes[predecessor].next = successor
        nodes[state.cursor] = ListNode(None, None, None)
        nodes[successor].prev = predecessor

    def _insert_value(self, input: Any) -> None:
        state = self._state
        nodes = state.nodes
        width = self._config.width
        current = state.head
        inserted = False
        for index in range(width):
            if not inserted:
                value = nodes[current].value
                if value is None or index + 1 == width or value >= input:
                    self._insert(input, current)
                    inserted = True

            # Shift the median on every other element so it ends up in the middle.
            if index & 1 and nodes[current].value is not None:
                state.median = nodes[state.median].next

            current = nodes[current].next

    def _insert(self, input: Any, successor: int) -> None:
        state = self._state
        nodes = state.nodes
        predecessor = nodes[successor].prev
        nodes[predecessor].next = state.cursor
        nodes[state.cursor] = ListNode(input, predecessor, successor)
        nodes[successor].prev = state.cursor

    def _update_head(self, input: Any) -> None:
        state = self._state
        head_value = state.nodes[state.head].value
        if head_value is None or input <= head_value:
            state.head = state.cursor
            state.median = state.nodes[state.median].prev

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def sorted_values(self) -> List[Any]:
        """Live values in list order, starting from the head."""
        nodes = self._state.nodes
        live = sum(1 for node in nodes if node.value is not None)
        values = []
        current = self._state.head
        for _ in range(live):
            values.append(nodes[current].value)
            current = nodes[current].next
        return values

    def validate(self) -> None:
        """Check list order and median position; raises ValueError on breach."""
        nodes = self._state.nodes
        live = sum(1 for node in nodes if node.value is not None)
        assert_sorted_window(self.sorted_values(), live, self.median())
