# calgrid/sources.py
"""Adapters from the application's records to CalendarItem.

Three origins feed the calendar: user-created calendar events, tasks with a
due date, and the public holiday feed. Each adapter returns None (or skips the
entry) when the record has nothing the engine could place.
"""
from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, Iterable, List, Optional

from .model import KIND_DEADLINE, KIND_EVENT, KIND_HOLIDAY, CalendarItem
from .util.timeparse import parse_date_yyyy_mm_dd, parse_instant_ms, parse_locdate
from .util.tz import resolve_tz, start_of_day_ms

logger = logging.getLogger(__name__)


def _id(rec: Dict[str, Any]) -> str:
    v = rec.get("id")
    return "" if v is None else str(v).strip()


def item_from_calendar_record(rec: Dict[str, Any]) -> Optional[CalendarItem]:
    """Calendar event record: id, title, startDate, endDate?, isAllDay?"""
    if not isinstance(rec, dict):
        return None
    item_id = _id(rec)
    if not item_id:
        return None

    start_ms = parse_instant_ms(rec.get("startDate"))
    end_ms = parse_instant_ms(rec.get("endDate"))
    due_ms = end_ms if end_ms is not None else start_ms

    return CalendarItem(
        id=item_id,
        kind=KIND_EVENT,
        due_ms=due_ms,
        start_ms=start_ms,
        all_day=bool(rec.get("isAllDay") or False),
        title=str(rec.get("title") or ""),
    )


def item_from_task_record(rec: Dict[str, Any]) -> Optional[CalendarItem]:
    """Task record: id, title, dueDate?. Tasks without a due date are not calendar items."""
    if not isinstance(rec, dict):
        return None
    item_id = _id(rec)
    if not item_id or rec.get("dueDate") in (None, ""):
        return None

    return CalendarItem(
        id=item_id,
        kind=KIND_DEADLINE,
        due_ms=parse_instant_ms(rec.get("dueDate")),
        start_ms=None,
        title=str(rec.get("title") or ""),
    )


def _holiday_date(entry: Dict[str, Any]) -> Optional[dt.date]:
    raw = entry.get("date")
    if isinstance(raw, str) and raw.strip():
        try:
            return parse_date_yyyy_mm_dd(raw)
        except ValueError:
            return None
    return parse_locdate(entry.get("locdate"))


def items_from_holiday_feed(entries: Iterable[Dict[str, Any]], tz: str | None = "UTC") -> List[CalendarItem]:
    """Holiday feed entries (date "YYYY-MM-DD" or locdate YYYYMMDD) -> holiday items at midnight."""
    tzinfo = resolve_tz(tz)
    out: List[CalendarItem] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        d = _holiday_date(entry)
        if d is None:
            logger.warning("skipping holiday entry without a usable date: %r", entry)
            continue
        item_id = _id(entry) or f"holiday-{d.strftime('%Y%m%d')}"
        out.append(
            CalendarItem(
                id=item_id,
                kind=KIND_HOLIDAY,
                due_ms=start_of_day_ms(d, tzinfo),
                title=str(entry.get("title") or entry.get("dateName") or ""),
            )
        )
    return out


def items_from_records(
    *,
    events: Iterable[Dict[str, Any]] = (),
    tasks: Iterable[Dict[str, Any]] = (),
    holidays: Iterable[Dict[str, Any]] = (),
    tz: str | None = "UTC",
) -> List[CalendarItem]:
    """All three origins merged in (events, tasks, holidays) order."""
    out: List[CalendarItem] = []
    for rec in events:
        it = item_from_calendar_record(rec)
        if it is not None:
            out.append(it)
    for rec in tasks:
        it = item_from_task_record(rec)
        if it is not None:
            out.append(it)
    out.extend(items_from_holiday_feed(holidays, tz=tz))
    return out
