# calgrid/window.py
from __future__ import annotations

import calendar
import datetime as dt
from typing import List, Optional, Tuple

from .model import WindowSpec

MONTH_WEEKS = 6


def _dow_sunday0(d: dt.date) -> int:
    # date.weekday(): Monday=0 .. Sunday=6
    return (d.weekday() + 1) % 7


def month_bounds(focus: dt.date) -> Tuple[dt.date, dt.date]:
    """First and last calendar date of the month containing `focus`."""
    last = calendar.monthrange(focus.year, focus.month)[1]
    return dt.date(focus.year, focus.month, 1), dt.date(focus.year, focus.month, last)


def _date_run(start: dt.date, count: int) -> List[dt.date]:
    return [start + dt.timedelta(days=i) for i in range(count)]


def build_mini_window(focus: dt.date, *, today: Optional[dt.date] = None) -> WindowSpec:
    """Minimal week-aligned window around the month of `focus` (28..42 days).

    Leading days run back to the most recent Sunday on or before the first of
    the month; trailing days run forward to the nearest Saturday on or after
    the last of the month.
    """
    month_start, month_end = month_bounds(focus)
    leading = _dow_sunday0(month_start)
    trailing = 6 - _dow_sunday0(month_end)

    first = month_start - dt.timedelta(days=leading)
    count = leading + (month_end - month_start).days + 1 + trailing
    return WindowSpec(days=tuple(_date_run(first, count)), year=focus.year, month=focus.month, today=today)


def build_month_window(
    focus: dt.date,
    *,
    weeks: int = MONTH_WEEKS,
    today: Optional[dt.date] = None,
) -> WindowSpec:
    """Month-view window: the minimal window padded with trailing days to `weeks` full weeks.

    The month grid is always 6x7 by default. A month whose natural window already
    needs more weeks than requested keeps its natural length.
    """
    mini = build_mini_window(focus, today=today)
    want = max(int(weeks), mini.weeks) * 7
    if len(mini.days) >= want:
        return mini
    return WindowSpec(days=tuple(_date_run(mini.start, want)), year=mini.year, month=mini.month, today=today)


def build_week_window(selected: dt.date, *, today: Optional[dt.date] = None) -> WindowSpec:
    """Sunday..Saturday week containing `selected`."""
    first = selected - dt.timedelta(days=_dow_sunday0(selected))
    return WindowSpec(days=tuple(_date_run(first, 7)), year=selected.year, month=selected.month, today=today)
