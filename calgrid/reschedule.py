# calgrid/reschedule.py
"""Drop-date resolution for dragged calendar items.

The caller passes the dragged item and the date it was dropped on; nothing is
read from ambient drag state. Holidays are read-only and come back as a
rejected result so the UI can tell "not draggable" apart from "nothing moved".
"""
from __future__ import annotations

import dataclasses
import datetime as dt
import logging

from .classify import effective_due_ms, effective_start_ms
from .config import normalize_cfg
from .model import (
    ITEM_KINDS,
    KIND_DEADLINE,
    KIND_HOLIDAY,
    CalendarItem,
    LayoutConfig,
    RescheduleResult,
)
from .util.tz import date_of_ms, end_of_day_ms, resolve_tz, start_of_day_ms

logger = logging.getLogger(__name__)

MOVED_START = "start"
MOVED_DUE = "due"
MOVED_BOTH = "both"


def _reject(item: CalendarItem, reason: str) -> RescheduleResult:
    logger.info("reschedule of %r rejected: %s", item.id, reason)
    return RescheduleResult(ok=False, item=item, moved=None, reason=reason)


def reschedule_item(item: CalendarItem, drop_date: dt.date, cfg: LayoutConfig | None = None) -> RescheduleResult:
    """
    Move one endpoint of `item` to `drop_date`.

      - deadline: due -> end of drop_date; start stays absent
      - event without a usable start: due -> end of drop_date, start cleared ("both").
        A start later than due is not usable; it is dropped, not kept.
      - event, drop before start: start -> start of drop_date
      - event, drop after due: due -> end of drop_date
      - event, drop inside: the endpoint fewer days away moves; ties move start
      - holiday: rejected, item unchanged
    """
    if item.kind == KIND_HOLIDAY:
        return _reject(item, "holiday items cannot be rescheduled")
    if item.kind not in ITEM_KINDS:
        return _reject(item, f"unknown item kind: {item.kind!r}")

    c = normalize_cfg(cfg)
    tz = resolve_tz(c["tz"])

    new_due = end_of_day_ms(drop_date, tz)
    new_start = start_of_day_ms(drop_date, tz)

    try:
        due_ms = effective_due_ms(item, tz)
        if due_ms is None:
            return _reject(item, "item has no due date")

        if item.kind == KIND_DEADLINE:
            return RescheduleResult(ok=True, item=dataclasses.replace(item, due_ms=new_due, start_ms=None), moved=MOVED_DUE)

        start_ms = effective_start_ms(item, tz)
        if start_ms is None:
            if item.start_ms is not None:
                logger.debug("reschedule %r: start %r is after due, clearing it", item.id, item.start_ms)
            return RescheduleResult(ok=True, item=dataclasses.replace(item, due_ms=new_due, start_ms=None), moved=MOVED_BOTH)

        start_day = date_of_ms(start_ms, tz)
        due_day = date_of_ms(due_ms, tz)
    except (OverflowError, OSError, ValueError):
        return _reject(item, "item dates are out of range")

    if drop_date < start_day:
        moved = MOVED_START
    elif drop_date > due_day:
        moved = MOVED_DUE
    else:
        to_start = (drop_date - start_day).days
        to_due = (due_day - drop_date).days
        moved = MOVED_START if to_start <= to_due else MOVED_DUE

    logger.debug("reschedule %r to %s: moving %s", item.id, drop_date.isoformat(), moved)
    if moved == MOVED_START:
        updated = dataclasses.replace(item, start_ms=new_start, due_ms=due_ms)
    else:
        updated = dataclasses.replace(item, start_ms=start_ms, due_ms=new_due)
    return RescheduleResult(ok=True, item=updated, moved=moved)
