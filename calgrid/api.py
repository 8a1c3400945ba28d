"""calgrid.api

Stable *library* entrypoint for calgrid.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Union

from calgrid.classify import classify_items, display_interval
from calgrid.config import normalize_cfg
from calgrid.grid import assign_grid_lanes, grid_interval
from calgrid.layout import layout_day, layout_month, layout_week
from calgrid.model import (
    KIND_DEADLINE,
    KIND_EVENT,
    KIND_HOLIDAY,
    CalendarItem,
    ItemFormatError,
    RescheduleResult,
    WindowSpec,
    item_from_dict,
    item_to_dict,
)
from calgrid.month import assign_month_lanes, month_row_count, summarize_overflow
from calgrid.reschedule import reschedule_item
from calgrid.sources import items_from_records
from calgrid.validate import LayoutValidationError, validate_grid_layout, validate_month_layout, validate_window
from calgrid.window import build_mini_window, build_month_window, build_week_window

JsonPath = Union[str, Path]


def items_from_json_obj(obj: Any) -> List[CalendarItem]:
    """Items from a decoded JSON document: a list of item objects, or {"items": [...]}."""
    if isinstance(obj, dict):
        obj = obj.get("items")
    if not isinstance(obj, list):
        raise ItemFormatError("items document must be a list or an object with an 'items' list")
    return [item_from_dict(x) for x in obj]


def load_items_from_json(path: JsonPath) -> List[CalendarItem]:
    p = Path(path)
    obj = json.loads(p.read_text(encoding="utf-8", errors="replace"))
    return items_from_json_obj(obj)


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
_PUBLIC_EXPORTS = (
    "CalendarItem",
    "ItemFormatError",
    "KIND_DEADLINE",
    "KIND_EVENT",
    "KIND_HOLIDAY",
    "LayoutValidationError",
    "RescheduleResult",
    "WindowSpec",
    "assign_grid_lanes",
    "assign_month_lanes",
    "build_mini_window",
    "build_month_window",
    "build_week_window",
    "classify_items",
    "display_interval",
    "grid_interval",
    "item_from_dict",
    "item_to_dict",
    "items_from_json_obj",
    "items_from_records",
    "layout_day",
    "layout_month",
    "layout_week",
    "load_items_from_json",
    "month_row_count",
    "normalize_cfg",
    "reschedule_item",
    "summarize_overflow",
    "validate_grid_layout",
    "validate_month_layout",
    "validate_window",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
