# calgrid/serialize.py
from __future__ import annotations

from typing import Any, Dict, List

from .model import (
    Classification,
    DayLayout,
    MonthLayout,
    PlacedGridItem,
    PlacedMonthItem,
    WeekLayout,
    WindowSpec,
    item_to_dict,
)


def window_to_dict(window: WindowSpec) -> Dict[str, Any]:
    return {
        "year": window.year,
        "month": window.month,
        "start": window.start.isoformat(),
        "end": window.end.isoformat(),
        "weeks": window.weeks,
        "cells": [
            {"date": c.date.isoformat(), "in_month": c.in_month, "is_today": c.is_today}
            for c in window.cells()
        ],
    }


def classification_to_dict(cls: Classification) -> Dict[str, Any]:
    return {
        "by_day": {k: list(v) for k, v in cls.by_day.items()},
        "excluded": [{"id": e.id, "reason": e.reason} for e in cls.excluded],
        "clipped": {
            ci.item.id: {"continues_before": ci.continues_before, "continues_after": ci.continues_after}
            for ci in cls.items
            if ci.continues_before or ci.continues_after
        },
    }


def _month_item(p: PlacedMonthItem) -> Dict[str, Any]:
    out = item_to_dict(p.item)
    out.update({"start_cell": p.start_cell, "span": p.span, "row": p.row})
    return out


def _grid_item(p: PlacedGridItem) -> Dict[str, Any]:
    out = item_to_dict(p.item)
    out.update(
        {
            "day": p.day.isoformat(),
            "start_min": p.start_min,
            "end_min": p.end_min,
            "column": p.column,
            "total_columns": p.total_columns,
            "cluster_id": p.cluster_id,
        }
    )
    return out


def month_layout_to_dict(layout: MonthLayout) -> Dict[str, Any]:
    return {
        "view": "month",
        "window": window_to_dict(layout.window),
        "row_count": layout.row_count,
        "overflow": dict(layout.overflow),
        "items": [_month_item(p) for p in layout.placed],
        **classification_to_dict(layout.classification),
    }


def day_layout_to_dict(layout: DayLayout) -> Dict[str, Any]:
    return {
        "view": "day",
        "day": layout.day.isoformat(),
        "items": [_grid_item(p) for p in layout.placed],
        **classification_to_dict(layout.classification),
    }


def week_layout_to_dict(layout: WeekLayout) -> Dict[str, Any]:
    days: List[Dict[str, Any]] = []
    for d in layout.days:
        days.append({"day": d.day.isoformat(), "items": [_grid_item(p) for p in d.placed]})
    return {
        "view": "week",
        "window": window_to_dict(layout.window),
        "days": days,
        **classification_to_dict(layout.classification),
    }
