# calgrid/month.py
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from .coloring import by_start, greedy_lanes
from .model import KIND_EVENT, ClassifiedItem, PlacedMonthItem, WindowSpec


def _cells(ci: ClassifiedItem, window: WindowSpec) -> Tuple[int, int] | None:
    first = max(ci.first_day, window.start)
    last = min(ci.last_day, window.end)
    if first > last:
        return None
    start_cell = window.index_of(first)
    if ci.item.kind == KIND_EVENT:
        span = (last - first).days + 1
    else:
        span = 1
    return start_cell, span


def assign_month_lanes(items: Iterable[ClassifiedItem], window: WindowSpec) -> List[PlacedMonthItem]:
    """Give every classified item a row in the month grid.

    Items sharing any day cell never share a row; rows are assigned greedily in
    (start cell, input order) order, so the grid uses the fewest rows possible.
    Output keeps input order. Items entirely outside `window` are skipped.
    """
    kept: List[ClassifiedItem] = []
    spans: List[Tuple[int, int]] = []
    for ci in items:
        cells = _cells(ci, window)
        if cells is None:
            continue
        kept.append(ci)
        spans.append(cells)

    rows = greedy_lanes([(start, start + span) for start, span in spans], key=by_start)

    return [
        PlacedMonthItem(item=ci.item, start_cell=start, span=span, row=row)
        for ci, (start, span), row in zip(kept, spans, rows)
    ]


def month_row_count(placed: Sequence[PlacedMonthItem]) -> int:
    """Rows needed by the busiest stretch of the grid (0 when empty)."""
    if not placed:
        return 0
    return max(p.row for p in placed) + 1


def summarize_overflow(placed: Sequence[PlacedMonthItem], window: WindowSpec, visible_rows: int = 2) -> Dict[str, int]:
    """Per day key, how many items sit in rows hidden behind a "+N more" label."""
    hidden: Dict[str, int] = {}
    for p in placed:
        if p.row < visible_rows:
            continue
        for cell in range(p.start_cell, min(p.end_cell, len(window.days))):
            key = window.days[cell].isoformat()
            hidden[key] = hidden.get(key, 0) + 1
    return {k: hidden[k] for k in sorted(hidden)}
