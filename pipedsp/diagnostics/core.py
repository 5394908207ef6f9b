"""Invariant checks for the windowed storage used by pipedsp filters.

These helpers are called by filters only while debug mode is enabled.
Each raises ValueError describing the first violation found.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence


def assert_ring_indices(start: int, end: int, capacity: int, max_index: int) -> None:
    """
    Assert the index bookkeeping of a circular buffer.

    Parameters
    ----------
    start, end:
        Monotone read and write indices.
    capacity:
        Fixed buffer capacity.
    max_index:
        Largest index value before a rebase is forced.

    Raises
    ------
    ValueError
        If ``start <= end <= start + capacity`` does not hold or an
        index exceeds ``max_index``.
    """
    if not 0 <= start <= end:
        raise ValueError(f"Ring indices out of order: start={start}, end={end}.")
    if end - start > capacity:
        raise ValueError(
            f"Ring holds {end - start} entries but capacity is {capacity}."
        )
    if end > max_index:
        raise ValueError(f"Ring index {end} exceeds max_index={max_index}.")


def assert_live_slots(slots: Sequence[Any], start: int, end: int, empty: Any) -> None:
    """
    Assert that exactly the slots in ``[start, end)`` (mod capacity) are live.

    Raises
    ------
    ValueError
        If a live slot holds the empty marker or a dead slot holds a value.
    """
    capacity = len(slots)
    live = {index % capacity for index in range(start, end)}
    for index, slot in enumerate(slots):
        if index in live and slot is empty:
            raise ValueError(f"Live slot {index} is empty.")
        if index not in live and slot is not empty:
            raise ValueError(f"Dead slot {index} still holds {slot!r}.")


def assert_monotone(values: Iterable[Any], increasing: bool = True) -> None:
    """
    Assert that ``values`` never decrease (or never increase).

    Raises
    ------
    ValueError
        If two consecutive values are out of order.
    """
    previous = None
    for position, value in enumerate(values):
        if position > 0:
            out_of_order = value < previous if increasing else value > previous
            if out_of_order:
                direction = "non-decreasing" if increasing else "non-increasing"
                raise ValueError(
                    f"Sequence is not {direction} at position {position}: "
                    f"{previous!r} followed by {value!r}."
                )
        previous = value


def assert_window_times(times: Sequence[int], now: int, width: int) -> None:
    """
    Assert that timestamps are strictly increasing and inside the window.

    Raises
    ------
    ValueError
        If a timestamp repeats, goes backwards or has left the window.
    """
    for earlier, later in zip(times, times[1:]):
        if later <= earlier:
            raise ValueError(f"Timestamps not strictly increasing: {earlier} then {later}.")
    for time in times:
        if time + width <= now - 1 or time >= now:
            raise ValueError(
                f"Timestamp {time} outside window of width {width} ending at {now - 1}."
            )


def assert_sorted_window(values: Sequence[Any], live: int, median_value: Any) -> None:
    """
    Assert the sorted-list view of a sliding median window.

    Parameters
    ----------
    values:
        Values in list order, starting from the head.
    live:
        Number of samples currently held by the window.
    median_value:
        Value the filter reports as its median.

    Raises
    ------
    ValueError
        If the list is unsorted, has the wrong length, or the median is
        not the left-middle element.
    """
    if len(values) != live:
        raise ValueError(f"Sorted list holds {len(values)} values, expected {live}.")
    assert_monotone(values, increasing=True)
    expected = values[(live - 1) // 2]
    if expected is not median_value and expected != median_value:
        raise ValueError(f"Median is {median_value!r}, expected {expected!r}.")
