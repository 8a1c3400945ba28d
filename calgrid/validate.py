"""Layout invariant checks (library-facing)."""

from __future__ import annotations

import datetime as dt
from typing import Dict, List, Sequence

from .coloring import max_concurrency, overlap_components
from .model import PlacedGridItem, PlacedMonthItem, WindowSpec


class LayoutValidationError(ValueError):
    """Raised when a computed layout breaks a lane invariant."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def validate_window(window: WindowSpec, *, label: str = "window") -> List[str]:
    errs: List[str] = []
    days = window.days
    _require(len(days) > 0, f"{label}: days must be non-empty", errs)
    if not days:
        return errs

    _require(len(days) % 7 == 0, f"{label}: length {len(days)} is not a multiple of 7", errs)
    _require(days[0].weekday() == 6, f"{label}: first day {days[0].isoformat()} is not a Sunday", errs)
    _require(days[-1].weekday() == 5, f"{label}: last day {days[-1].isoformat()} is not a Saturday", errs)
    for i in range(1, len(days)):
        if days[i] - days[i - 1] != dt.timedelta(days=1):
            errs.append(f"{label}: days[{i}] does not follow days[{i - 1}]")
            break
    return errs


def validate_month_layout(placed: Sequence[PlacedMonthItem], *, label: str = "month") -> List[str]:
    errs: List[str] = []
    for p in placed:
        _require(p.span >= 1, f"{label}: {p.item.id}: span must be >= 1", errs)
        _require(p.row >= 0, f"{label}: {p.item.id}: row must be >= 0", errs)
        _require(p.start_cell >= 0, f"{label}: {p.item.id}: start_cell must be >= 0", errs)

    for i in range(len(placed)):
        a = placed[i]
        for j in range(i + 1, len(placed)):
            b = placed[j]
            if a.start_cell < b.end_cell and b.start_cell < a.end_cell and a.row == b.row:
                errs.append(f"{label}: {a.item.id} and {b.item.id} share row {a.row} on overlapping cells")

    if placed:
        intervals = [(p.start_cell, p.end_cell) for p in placed]
        errs.extend(_minimality_errors(intervals, [p.row for p in placed], label=label))
    return errs


def validate_grid_layout(placed: Sequence[PlacedGridItem], *, label: str = "grid") -> List[str]:
    errs: List[str] = []
    for p in placed:
        _require(0 <= p.start_min < p.end_min <= 1440, f"{label}: {p.item.id}: bad minutes [{p.start_min}, {p.end_min})", errs)
        _require(0 <= p.column < p.total_columns, f"{label}: {p.item.id}: column {p.column} not < {p.total_columns}", errs)

    for i in range(len(placed)):
        a = placed[i]
        for j in range(i + 1, len(placed)):
            b = placed[j]
            if a.day != b.day:
                continue
            if a.start_min < b.end_min and a.end_min > b.start_min:
                if a.column == b.column:
                    errs.append(f"{label}: {a.item.id} and {b.item.id} share column {a.column} while overlapping")
                if a.total_columns != b.total_columns:
                    errs.append(f"{label}: {a.item.id} and {b.item.id} overlap with different total_columns")

    by_day: Dict[dt.date, List[PlacedGridItem]] = {}
    for p in placed:
        by_day.setdefault(p.day, []).append(p)
    for day, group in sorted(by_day.items()):
        intervals = [(p.start_min, p.end_min) for p in group]
        errs.extend(_minimality_errors(intervals, [p.column for p in group], label=f"{label}[{day.isoformat()}]"))
        comps = overlap_components(intervals)
        widest: Dict[int, int] = {}
        for comp, p in zip(comps, group):
            widest[comp] = max(widest.get(comp, 0), p.column + 1)
        for comp, p in zip(comps, group):
            if p.total_columns != widest[comp]:
                errs.append(f"{label}: {p.item.id}: total_columns {p.total_columns} != cluster width {widest[comp]}")
    return errs


def _minimality_errors(intervals: List[tuple], lanes: List[int], *, label: str) -> List[str]:
    """Lanes used per overlap component must equal the component's peak concurrency."""
    errs: List[str] = []
    comps = overlap_components(intervals)
    members: Dict[int, List[int]] = {}
    for i, comp in enumerate(comps):
        members.setdefault(comp, []).append(i)
    for comp, idxs in sorted(members.items()):
        used = len({lanes[i] for i in idxs})
        peak = max_concurrency([intervals[i] for i in idxs])
        if used != peak:
            errs.append(f"{label}: component {comp} uses {used} lanes for peak concurrency {peak}")
    return errs


def assert_valid_month_layout(placed: Sequence[PlacedMonthItem]) -> None:
    errs = validate_month_layout(placed)
    if errs:
        raise LayoutValidationError("Invalid month layout:\n" + "\n".join(f"- {e}" for e in errs))


def assert_valid_grid_layout(placed: Sequence[PlacedGridItem]) -> None:
    errs = validate_grid_layout(placed)
    if errs:
        raise LayoutValidationError("Invalid grid layout:\n" + "\n".join(f"- {e}" for e in errs))


__all__ = [
    "LayoutValidationError",
    "validate_window",
    "validate_month_layout",
    "validate_grid_layout",
    "assert_valid_month_layout",
    "assert_valid_grid_layout",
]
