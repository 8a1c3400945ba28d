#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from calgrid.api import item_from_dict, item_to_dict, normalize_cfg, reschedule_item
from calgrid.util.timeparse import parse_date_yyyy_mm_dd

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _die(msg: str, rc: int = 2) -> int:
    print(f"[calgrid-drop] ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="calgrid-drop", description="Resolve dropping a calendar item onto a date.")
    ap.add_argument("--in", dest="in_json", required=True, help="Item JSON path (single item object)")
    ap.add_argument("--date", required=True, help="Drop date YYYY-MM-DD")
    ap.add_argument(
        "--tz",
        default=os.getenv("CALGRID_TZ", "UTC"),
        help="Timezone for day boundaries (default: env CALGRID_TZ or 'UTC')",
    )
    ap.add_argument("--out", default=None, help="Output JSON path (default: stdout)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    ns = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.WARNING, format=LOG_FORMAT)

    try:
        drop = parse_date_yyyy_mm_dd(ns.date)
        cfg = normalize_cfg({"tz": ns.tz})
    except ValueError as e:
        return _die(str(e))

    p = Path(ns.in_json)
    if not p.exists():
        return _die(f"Missing JSON file: {p}")
    try:
        item = item_from_dict(json.loads(p.read_text(encoding="utf-8", errors="replace")))
    except (ValueError, OSError) as e:
        return _die(f"Failed to read item: {p} ({e})")

    res = reschedule_item(item, drop, cfg)
    if not res.ok:
        return _die(f"drop rejected: {res.reason}", rc=4)

    out = {"moved": res.moved, "item": item_to_dict(res.item)}
    txt = json.dumps(out, ensure_ascii=False)
    if ns.out:
        out_path = Path(ns.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(txt + "\n", encoding="utf-8", newline="\n")
        print(f"[calgrid-drop] OK: wrote {out_path}")
    else:
        print(txt)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
