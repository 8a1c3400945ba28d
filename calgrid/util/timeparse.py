# calgrid/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Any, Optional

_LOCDATE_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s.strip(), "%Y-%m-%d").date()


def parse_locdate(value: Any) -> Optional[dt.date]:
    """Parse a holiday-feed locdate (20240301 or "20240301")."""
    if value is None or isinstance(value, bool):
        return None
    m = _LOCDATE_RE.match(str(value).strip())
    if not m:
        return None
    try:
        return dt.date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return None


def parse_instant_ms(value: Any) -> Optional[int]:
    """Parse an instant into epoch ms.

    Accepts epoch ms integers and ISO-8601 strings ("2024-03-10T09:00:00.000Z",
    "2024-03-10T09:00:00+09:00", "2024-03-10"). Naive values are read as UTC.
    Returns None for anything unparsable.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)

    s = str(value).strip()
    if not s:
        return None

    try:
        d = dt.datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return None
    if d.tzinfo is None:
        d = d.replace(tzinfo=dt.timezone.utc)
    return int(round(d.timestamp() * 1000))
