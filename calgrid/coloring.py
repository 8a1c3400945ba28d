# calgrid/coloring.py
"""Greedy interval coloring over an abstract integer axis.

Intervals are half-open [lo, hi) on any axis (day index for month rows,
minute-of-day for time-grid columns). Visiting intervals in left-endpoint
order and giving each the smallest lane not used by an overlapping, already
placed interval uses exactly as many lanes as the largest clique, since
interval graphs are perfect.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

Interval = Tuple[int, int]
SortKey = Callable[[int, Interval], tuple]


def by_start(i: int, iv: Interval) -> tuple:
    """Left endpoint, then input order."""
    return (iv[0], i)


def by_start_end(i: int, iv: Interval) -> tuple:
    """Left endpoint, then right endpoint, then input order."""
    return (iv[0], iv[1], i)


def overlaps(a: Interval, b: Interval) -> bool:
    return a[0] < b[1] and a[1] > b[0]


def visit_order(intervals: Sequence[Interval], key: SortKey = by_start) -> List[int]:
    return sorted(range(len(intervals)), key=lambda i: key(i, intervals[i]))


def greedy_lanes(intervals: Sequence[Interval], key: SortKey = by_start) -> List[int]:
    """Lane per interval (indexed like `intervals`).

    Raises ValueError for an empty or inverted interval; callers widen
    degenerate intervals before coloring.
    """
    for lo, hi in intervals:
        if hi <= lo:
            raise ValueError(f"interval must be non-empty: [{lo}, {hi})")

    lanes: List[Optional[int]] = [None] * len(intervals)
    placed: List[int] = []

    for i in visit_order(intervals, key):
        iv = intervals[i]
        used = {lanes[j] for j in placed if overlaps(intervals[j], iv)}
        lane = 0
        while lane in used:
            lane += 1
        lanes[i] = lane
        placed.append(i)

    return [int(x) for x in lanes]  # type: ignore[arg-type]


def overlap_components(intervals: Sequence[Interval]) -> List[int]:
    """Component id per interval; ids are numbered by first left endpoint.

    Two intervals share a component when a chain of pairwise overlaps connects
    them. Touching endpoints ([a, b) and [b, c)) do not connect.
    """
    comp: List[int] = [0] * len(intervals)
    cur = -1
    max_hi: Optional[int] = None

    for i in visit_order(intervals, by_start_end):
        lo, hi = intervals[i]
        if max_hi is None or lo >= max_hi:
            cur += 1
            max_hi = hi
        else:
            max_hi = max(max_hi, hi)
        comp[i] = cur

    return comp


def max_concurrency(intervals: Sequence[Interval]) -> int:
    """Largest number of intervals active at one point (sweep line)."""
    pts: List[Tuple[int, int]] = []
    for lo, hi in intervals:
        pts.append((lo, +1))
        pts.append((hi, -1))
    # Ends sort before starts at the same point: half-open intervals.
    pts.sort(key=lambda x: (x[0], x[1]))

    best = 0
    active = 0
    for _t, delta in pts:
        active += delta
        best = max(best, active)
    return best
