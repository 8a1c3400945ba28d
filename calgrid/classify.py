# calgrid/classify.py
"""Item classification and date mapping.

Every item is reduced to a display interval according to its kind, clipped to
the active window, and indexed by the calendar dates the clipped interval
touches. Items that cannot be placed are excluded, never raised.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .config import normalize_cfg
from .model import (
    ITEM_KINDS,
    KIND_EVENT,
    CalendarItem,
    Classification,
    ClassifiedItem,
    Exclusion,
    LayoutConfig,
    WindowSpec,
)
from .util.tz import date_of_ms, end_of_day_ms, normalize_end_of_day_ms, resolve_tz, start_of_day_ms

logger = logging.getLogger(__name__)

REASON_MALFORMED = "malformed"
REASON_OUT_OF_WINDOW = "out_of_window"

# Raised by datetime for instants beyond date.min/date.max or the platform's time_t.
_RANGE_ERRORS = (OverflowError, OSError, ValueError)


def window_bounds_ms(window: WindowSpec, tz: dt.tzinfo) -> Tuple[int, int]:
    """Inclusive [first midnight, last 23:59:59.999] of the window in epoch ms."""
    return start_of_day_ms(window.start, tz), end_of_day_ms(window.end, tz)


def effective_due_ms(item: CalendarItem, tz: dt.tzinfo) -> Optional[int]:
    if item.due_ms is None:
        return None
    if item.all_day:
        return normalize_end_of_day_ms(item.due_ms, tz)
    return int(item.due_ms)


def effective_start_ms(item: CalendarItem, tz: dt.tzinfo) -> Optional[int]:
    """Usable start of a scheduled event, or None when it must fall back to due."""
    due_ms = effective_due_ms(item, tz)
    if due_ms is None or item.start_ms is None:
        return None
    if int(item.start_ms) > due_ms:
        return None
    return int(item.start_ms)


def display_interval(item: CalendarItem, tz: dt.tzinfo) -> Optional[Tuple[int, int]]:
    """
    Day-grid display interval per kind:
      - event: [start (or due), end of due's day]
      - deadline / holiday: [due, due]
    Returns None when the item cannot be placed (no due, unknown kind).
    """
    if item.kind not in ITEM_KINDS:
        return None
    due_ms = effective_due_ms(item, tz)
    if due_ms is None:
        return None

    if item.kind == KIND_EVENT:
        start_ms = effective_start_ms(item, tz)
        if start_ms is None:
            if item.start_ms is not None:
                logger.debug("event %s: start after due, treating as single-day", item.id)
            start_ms = due_ms
        return start_ms, normalize_end_of_day_ms(due_ms, tz)

    return due_ms, due_ms


def _clip(
    item: CalendarItem,
    interval: Tuple[int, int],
    window_start_ms: int,
    window_end_ms: int,
    tz: dt.tzinfo,
) -> Optional[ClassifiedItem]:
    disp_start, disp_end = interval
    if disp_end < window_start_ms or disp_start > window_end_ms:
        return None

    clip_start = max(disp_start, window_start_ms)
    clip_end = min(disp_end, window_end_ms)
    return ClassifiedItem(
        item=item,
        display_start_ms=disp_start,
        display_end_ms=disp_end,
        clip_start_ms=clip_start,
        clip_end_ms=clip_end,
        first_day=date_of_ms(clip_start, tz),
        last_day=date_of_ms(clip_end, tz),
        continues_before=disp_start < window_start_ms,
        continues_after=disp_end > window_end_ms,
    )


def classify_item(item: CalendarItem, window: WindowSpec, cfg: LayoutConfig | None = None) -> Optional[ClassifiedItem]:
    """Classify one item against `window`; None if malformed or outside the window."""
    c = normalize_cfg(cfg)
    tz = resolve_tz(c["tz"])
    ws, we = window_bounds_ms(window, tz)
    try:
        interval = display_interval(item, tz)
        return None if interval is None else _clip(item, interval, ws, we, tz)
    except _RANGE_ERRORS:
        return None


def classify_items(
    items: Iterable[CalendarItem],
    window: WindowSpec,
    cfg: LayoutConfig | None = None,
) -> Classification:
    """Classify items against `window` and build the date -> item ids index.

    Output items keep input order. Malformed and out-of-window items are
    listed in `excluded`; one bad item never blocks the rest.
    """
    c = normalize_cfg(cfg)
    tz = resolve_tz(c["tz"])
    ws, we = window_bounds_ms(window, tz)

    out: List[ClassifiedItem] = []
    excluded: List[Exclusion] = []
    by_day: Dict[str, List[str]] = {}
    seen: set[str] = set()

    for item in items:
        item_id = str(getattr(item, "id", "") or "")
        if not item_id:
            logger.warning("dropping item without id: %r", item)
            excluded.append(Exclusion(id="", reason=REASON_MALFORMED))
            continue
        if item_id in seen:
            logger.warning("dropping duplicate item id %r", item_id)
            excluded.append(Exclusion(id=item_id, reason=REASON_MALFORMED))
            continue
        seen.add(item_id)

        try:
            interval = display_interval(item, tz)
            ci = None if interval is None else _clip(item, interval, ws, we, tz)
        except _RANGE_ERRORS as ex:
            logger.warning("dropping item %r with out-of-range instant (due_ms=%r): %s", item_id, item.due_ms, ex)
            excluded.append(Exclusion(id=item_id, reason=REASON_MALFORMED))
            continue

        if interval is None:
            logger.warning("dropping malformed item %r (kind=%r, due_ms=%r)", item_id, item.kind, item.due_ms)
            excluded.append(Exclusion(id=item_id, reason=REASON_MALFORMED))
            continue
        if ci is None:
            logger.debug("item %r outside window %s..%s", item_id, window.start, window.end)
            excluded.append(Exclusion(id=item_id, reason=REASON_OUT_OF_WINDOW))
            continue

        out.append(ci)
        d = ci.first_day
        while d <= ci.last_day:
            by_day.setdefault(d.isoformat(), []).append(item_id)
            d += dt.timedelta(days=1)

    return Classification(
        items=tuple(out),
        by_day={k: by_day[k] for k in sorted(by_day)},
        excluded=tuple(excluded),
    )
