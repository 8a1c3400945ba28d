# calgrid/grid.py
"""Time-grid (week/day view) column assignment for a single date."""
from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, Iterable, List, Tuple

from .classify import effective_due_ms, effective_start_ms
from .coloring import by_start_end, greedy_lanes, overlap_components, visit_order
from .config import normalize_cfg
from .model import KIND_DEADLINE, KIND_EVENT, ClassifiedItem, LayoutConfig, PlacedGridItem
from .util.tz import is_end_of_day_ms, is_midnight_ms, resolve_tz

logger = logging.getLogger(__name__)

DAY_MIN = 1440


def _wall_min(ms: int, day: dt.date, tz: dt.tzinfo, *, ceil: bool = False) -> int:
    """Wall-clock minute of `ms` on `day`: 0 before the day, 1440 from the next midnight on."""
    local = dt.datetime.fromtimestamp(ms / 1000.0, tz=tz)
    if local.date() < day:
        return 0
    if local.date() > day:
        return DAY_MIN
    m = local.hour * 60 + local.minute
    if ceil and (local.second or local.microsecond):
        m += 1
    return m


def _widen(start_min: int, end_min: int, min_duration: int) -> Tuple[int, int]:
    if end_min > start_min:
        return start_min, end_min
    start_min = min(start_min, DAY_MIN - min_duration)
    return start_min, start_min + min_duration


def grid_interval(ci: ClassifiedItem, day: dt.date, cfg: LayoutConfig | None = None) -> Tuple[int, int]:
    """
    Minute-of-day interval [start_min, end_min) of an item on `day`.

      - holiday, or deadline without a time of day: sentinel [0, marker_min)
      - deadline with a time of day: marker ending at its due minute
      - event without start, or all-day: [0, 1440)
      - event: its own wall-clock minutes in cfg["tz"], clamped to the day
    Degenerate results are widened to min_duration_min.
    """
    c = normalize_cfg(cfg)
    tz = resolve_tz(c["tz"])
    marker = int(c["marker_min"])
    min_duration = int(c["min_duration_min"])
    item = ci.item

    due_ms = effective_due_ms(item, tz)

    if item.kind == KIND_EVENT:
        start_ms = effective_start_ms(item, tz)
        if start_ms is None or item.all_day or due_ms is None:
            return 0, DAY_MIN
        start_min = _wall_min(start_ms, day, tz)
        end_min = _wall_min(due_ms, day, tz, ceil=True)
    elif item.kind == KIND_DEADLINE and due_ms is not None and not (
        item.all_day or is_midnight_ms(due_ms, tz) or is_end_of_day_ms(due_ms, tz)
    ):
        end_min = _wall_min(due_ms, day, tz, ceil=True)
        start_min = max(0, end_min - marker)
    else:
        start_min, end_min = 0, marker

    widened = _widen(start_min, end_min, min_duration)
    if widened != (start_min, end_min):
        logger.debug("item %r: degenerate interval [%d, %d) widened to %r", item.id, start_min, end_min, widened)
    return widened


def assign_grid_lanes(
    items: Iterable[ClassifiedItem],
    day: dt.date,
    cfg: LayoutConfig | None = None,
) -> List[PlacedGridItem]:
    """Columns for every item touching `day`.

    Columns are assigned greedily in (start, end, input order) order. Each item's
    total_columns is one more than the highest column used in its overlap
    component, so every member of a cluster shares the same column width.
    Output is sorted the same way columns are assigned.
    """
    c = normalize_cfg(cfg)
    todays = [ci for ci in items if ci.first_day <= day <= ci.last_day]
    if not todays:
        return []

    intervals = [grid_interval(ci, day, c) for ci in todays]
    columns = greedy_lanes(intervals, key=by_start_end)
    comps = overlap_components(intervals)

    widest: Dict[int, int] = {}
    for comp, col in zip(comps, columns):
        widest[comp] = max(widest.get(comp, 0), col + 1)

    return [
        PlacedGridItem(
            item=todays[i].item,
            day=day,
            start_min=intervals[i][0],
            end_min=intervals[i][1],
            column=columns[i],
            total_columns=widest[comps[i]],
            cluster_id=comps[i],
        )
        for i in visit_order(intervals, by_start_end)
    ]
