# calgrid/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .util.timeparse import parse_instant_ms

KIND_EVENT = "event"
KIND_DEADLINE = "deadline"
KIND_HOLIDAY = "holiday"

ITEM_KINDS = (KIND_EVENT, KIND_DEADLINE, KIND_HOLIDAY)

# Long-form kind names accepted on input (compared lower-cased, "_"/"-" dropped).
_KIND_ALIASES = {
    "scheduledevent": KIND_EVENT,
    "deadline": KIND_DEADLINE,
    "holiday": KIND_HOLIDAY,
}

# Layout-facing types (lightweight)
LayoutConfig = Dict[str, Any]
DayIndex = Dict[str, List[str]]


class ItemFormatError(ValueError):
    """Raised when a JSON object cannot be turned into a CalendarItem."""


@dataclass(frozen=True)
class CalendarItem:
    id: str
    kind: str              # "event" | "deadline" | "holiday"
    due_ms: Optional[int]
    start_ms: Optional[int] = None
    all_day: bool = False
    title: str = ""


@dataclass(frozen=True)
class DayCell:
    date: dt.date
    in_month: bool
    is_today: bool


@dataclass(frozen=True)
class WindowSpec:
    """Ordered run of dates shown by a calendar view (week-aligned for month and week views)."""

    days: Tuple[dt.date, ...]
    year: int
    month: int
    today: Optional[dt.date] = None

    @property
    def start(self) -> dt.date:
        return self.days[0]

    @property
    def end(self) -> dt.date:
        return self.days[-1]

    @property
    def weeks(self) -> int:
        return len(self.days) // 7

    def contains(self, d: dt.date) -> bool:
        return self.start <= d <= self.end

    def index_of(self, d: dt.date) -> int:
        if not self.contains(d):
            raise ValueError(f"{d.isoformat()} is outside window {self.start.isoformat()}..{self.end.isoformat()}")
        return (d - self.start).days

    def in_month(self, d: dt.date) -> bool:
        return d.year == self.year and d.month == self.month

    def cells(self) -> List[DayCell]:
        return [DayCell(date=d, in_month=self.in_month(d), is_today=(d == self.today)) for d in self.days]


@dataclass(frozen=True)
class ClassifiedItem:
    item: CalendarItem
    display_start_ms: int
    display_end_ms: int
    clip_start_ms: int
    clip_end_ms: int
    first_day: dt.date     # date of clip_start_ms
    last_day: dt.date      # date of clip_end_ms
    continues_before: bool = False
    continues_after: bool = False

    @property
    def day_count(self) -> int:
        return (self.last_day - self.first_day).days + 1


@dataclass(frozen=True)
class Exclusion:
    id: str
    reason: str            # "out_of_window" | "malformed"


@dataclass(frozen=True)
class Classification:
    items: Tuple[ClassifiedItem, ...]
    by_day: DayIndex
    excluded: Tuple[Exclusion, ...] = ()

    def for_day(self, d: dt.date) -> List[ClassifiedItem]:
        return [ci for ci in self.items if ci.first_day <= d <= ci.last_day]


@dataclass(frozen=True)
class PlacedMonthItem:
    item: CalendarItem
    start_cell: int
    span: int
    row: int

    @property
    def end_cell(self) -> int:
        return self.start_cell + self.span


@dataclass(frozen=True)
class PlacedGridItem:
    item: CalendarItem
    day: dt.date
    start_min: int
    end_min: int
    column: int
    total_columns: int
    cluster_id: int = 0


@dataclass(frozen=True)
class RescheduleResult:
    ok: bool
    item: CalendarItem
    moved: Optional[str] = None     # "start" | "due" | "both"
    reason: Optional[str] = None


@dataclass(frozen=True)
class MonthLayout:
    window: WindowSpec
    classification: Classification
    placed: Tuple[PlacedMonthItem, ...]
    row_count: int
    overflow: Dict[str, int]


@dataclass(frozen=True)
class DayLayout:
    day: dt.date
    classification: Classification
    placed: Tuple[PlacedGridItem, ...]


@dataclass(frozen=True)
class WeekLayout:
    window: WindowSpec
    classification: Classification
    days: Tuple[DayLayout, ...]


def _kind_from_raw(raw: Any) -> str:
    s = str(raw or KIND_EVENT).strip().lower()
    return _KIND_ALIASES.get(s.replace("_", "").replace("-", ""), s)


def item_from_dict(obj: Any) -> CalendarItem:
    """Build a CalendarItem from a JSON object.

    Instants may be given as epoch ms (`start_ms`/`due_ms`) or as ISO strings
    (`start`/`due`). Unparsable instants become None; the layout engine
    decides what that means for the item.
    """
    if not isinstance(obj, dict):
        raise ItemFormatError(f"item must be an object/dict; got {type(obj).__name__}")
    item_id = obj.get("id")
    if item_id is None or not str(item_id).strip():
        raise ItemFormatError("item.id must be non-empty")

    due = obj.get("due_ms") if "due_ms" in obj else obj.get("due")
    start = obj.get("start_ms") if "start_ms" in obj else obj.get("start")

    return CalendarItem(
        id=str(item_id).strip(),
        kind=_kind_from_raw(obj.get("kind")),
        due_ms=parse_instant_ms(due),
        start_ms=parse_instant_ms(start),
        all_day=bool(obj.get("all_day", False)),
        title=str(obj.get("title") or ""),
    )


def item_to_dict(item: CalendarItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "kind": item.kind,
        "title": item.title,
        "start_ms": item.start_ms,
        "due_ms": item.due_ms,
        "all_day": bool(item.all_day),
    }


__all__ = [
    "KIND_EVENT",
    "KIND_DEADLINE",
    "KIND_HOLIDAY",
    "ITEM_KINDS",
    "LayoutConfig",
    "ItemFormatError",
    "CalendarItem",
    "DayCell",
    "WindowSpec",
    "ClassifiedItem",
    "Exclusion",
    "Classification",
    "PlacedMonthItem",
    "PlacedGridItem",
    "RescheduleResult",
    "MonthLayout",
    "DayLayout",
    "WeekLayout",
    "item_from_dict",
    "item_to_dict",
]
