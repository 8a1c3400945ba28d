#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

from calgrid.api import (
    layout_day,
    layout_month,
    layout_week,
    load_items_from_json,
    validate_grid_layout,
    validate_month_layout,
    validate_window,
)
from calgrid.config import normalize_cfg
from calgrid.serialize import day_layout_to_dict, month_layout_to_dict, week_layout_to_dict
from calgrid.util.timeparse import parse_date_yyyy_mm_dd

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("calgrid.tools.layout_view")


def _die(msg: str, rc: int = 2) -> int:
    print(f"[calgrid-layout] ERROR: {msg}", file=sys.stderr)
    return rc


def _build(view: str, items: list, date_arg, cfg: Dict[str, Any], today) -> tuple[Dict[str, Any], list[str]]:
    if view == "month":
        m = layout_month(items, date_arg, cfg, today=today)
        errs = validate_window(m.window) + validate_month_layout(m.placed)
        return month_layout_to_dict(m), errs
    if view == "week":
        w = layout_week(items, date_arg, cfg, today=today)
        errs = validate_window(w.window)
        for d in w.days:
            errs += validate_grid_layout(d.placed, label=f"grid[{d.day.isoformat()}]")
        return week_layout_to_dict(w), errs
    d = layout_day(items, date_arg, cfg)
    return day_layout_to_dict(d), validate_grid_layout(d.placed)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="calgrid-layout", description="Compute month/week/day calendar layout for a list of items.")
    ap.add_argument("--in", dest="in_json", required=True, help="Items JSON path (list, or object with 'items')")
    ap.add_argument("--view", choices=("month", "week", "day"), default="month", help="Layout granularity (default: month)")
    ap.add_argument("--date", required=True, help="Focus date YYYY-MM-DD (any day of the month/week, or the day)")
    ap.add_argument(
        "--tz",
        default=os.getenv("CALGRID_TZ", "UTC"),
        help="Timezone for date boundaries (default: env CALGRID_TZ or 'UTC')",
    )
    ap.add_argument("--today", default=None, help="Reference date YYYY-MM-DD used to flag today's cell")
    ap.add_argument("--marker-min", type=int, default=30, help="Minutes of the deadline/holiday marker in time grids (default: 30)")
    ap.add_argument("--check", action="store_true", help="Validate lane invariants; exit 3 on violation")
    ap.add_argument("--out", default=None, help="Output JSON path (default: stdout)")
    ap.add_argument("--pretty", action="store_true", help="Pretty JSON output")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    ns = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.WARNING, format=LOG_FORMAT)

    try:
        focus = parse_date_yyyy_mm_dd(ns.date)
        today = parse_date_yyyy_mm_dd(ns.today) if ns.today else None
    except ValueError as e:
        return _die(f"Invalid date: {e}")

    try:
        cfg = normalize_cfg({"tz": ns.tz, "marker_min": ns.marker_min})
    except ValueError as e:
        return _die(f"Invalid config: {e}")

    p = Path(ns.in_json)
    if not p.exists():
        return _die(f"Missing JSON file: {p}")
    try:
        items = load_items_from_json(p)
    except (ValueError, OSError) as e:
        return _die(f"Failed to read items: {p} ({e})")

    out, errs = _build(ns.view, items, focus, cfg, today)
    logger.debug("%s layout for %s: %d items", ns.view, focus.isoformat(), len(items))

    if ns.check and errs:
        for e in errs:
            print(f"[calgrid-layout] {e}", file=sys.stderr)
        return _die(f"{len(errs)} layout invariant violation(s)", rc=3)

    txt = json.dumps(out, ensure_ascii=False, indent=2 if ns.pretty else None)
    if ns.out:
        out_path = Path(ns.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(txt + "\n", encoding="utf-8", newline="\n")
        print(f"[calgrid-layout] OK: wrote {out_path}")
    else:
        print(txt)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
