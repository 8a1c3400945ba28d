# calgrid/layout.py
from __future__ import annotations

import datetime as dt
from typing import Iterable, Optional

from .classify import classify_items
from .config import normalize_cfg
from .grid import assign_grid_lanes
from .model import CalendarItem, Classification, DayLayout, LayoutConfig, MonthLayout, WeekLayout, WindowSpec
from .month import assign_month_lanes, month_row_count, summarize_overflow
from .window import build_month_window, build_week_window


def layout_month(
    items: Iterable[CalendarItem],
    focus: dt.date,
    cfg: LayoutConfig | None = None,
    *,
    today: Optional[dt.date] = None,
) -> MonthLayout:
    """Classify, bucket and row-assign `items` for the month grid around `focus`."""
    c = normalize_cfg(cfg)
    window = build_month_window(focus, weeks=int(c["month_weeks"]), today=today)
    classification = classify_items(items, window, c)
    placed = assign_month_lanes(classification.items, window)
    return MonthLayout(
        window=window,
        classification=classification,
        placed=tuple(placed),
        row_count=month_row_count(placed),
        overflow=summarize_overflow(placed, window, int(c["visible_rows"])),
    )


def layout_day(items: Iterable[CalendarItem], day: dt.date, cfg: LayoutConfig | None = None) -> DayLayout:
    c = normalize_cfg(cfg)
    window = WindowSpec(days=(day,), year=day.year, month=day.month)
    classification = classify_items(items, window, c)
    placed = assign_grid_lanes(classification.items, day, c)
    return DayLayout(day=day, classification=classification, placed=tuple(placed))


def layout_week(
    items: Iterable[CalendarItem],
    selected: dt.date,
    cfg: LayoutConfig | None = None,
    *,
    today: Optional[dt.date] = None,
) -> WeekLayout:
    """Time-grid columns for each day of the Sunday..Saturday week containing `selected`."""
    c = normalize_cfg(cfg)
    window = build_week_window(selected, today=today)
    classification = classify_items(items, window, c)

    days = []
    for d in window.days:
        key = d.isoformat()
        placed = assign_grid_lanes(classification.items, d, c)
        ids = classification.by_day.get(key)
        day_cls = Classification(
            items=tuple(classification.for_day(d)),
            by_day={key: list(ids)} if ids else {},
        )
        days.append(DayLayout(day=d, classification=day_cls, placed=tuple(placed)))

    return WeekLayout(window=window, classification=classification, days=tuple(days))
