# calgrid/util/tz.py
from __future__ import annotations

import datetime as dt
import re
from typing import Optional

from zoneinfo import ZoneInfo

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")


def normalize_tz_name(name: Optional[str]) -> str:
    """Normalize a timezone identifier.

    Supported forms:
      - None/"" -> "UTC" (layout must not depend on the machine it runs on)
      - "local" / "system" -> "local" (resolve to the machine's local timezone)
      - "UTC" / "Z" / "GMT" -> "UTC"
      - IANA names, e.g. "Asia/Seoul"
      - Fixed offsets: "+09:00", "+0900", "-05:00"
    """
    if name is None:
        return "UTC"
    s = str(name).strip()
    if not s:
        return "UTC"

    low = s.lower()
    if low in {"local", "system", "native"}:
        return "local"
    if low in {"utc", "z", "gmt", "utc0", "utc+0"}:
        return "UTC"

    return s


def resolve_tz(name: Optional[str]) -> dt.tzinfo:
    """Resolve a timezone name into a tzinfo.

    Raises ValueError for invalid timezone identifiers.
    """
    tz_name = normalize_tz_name(name)

    if tz_name == "UTC":
        return dt.timezone.utc

    if tz_name == "local":
        tz = dt.datetime.now().astimezone().tzinfo
        return tz or dt.timezone.utc

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh = int(hh_s)
        mm = int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        sign = 1 if sign_s == "+" else -1
        return dt.timezone(dt.timedelta(minutes=sign * (hh * 60 + mm)))

    try:
        return ZoneInfo(tz_name)
    except Exception as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
_ONE_MS = dt.timedelta(milliseconds=1)


def _aware_to_ms(aware: dt.datetime) -> int:
    return (aware - _EPOCH) // _ONE_MS


def start_of_day_ms(d: dt.date, tz: dt.tzinfo) -> int:
    return _aware_to_ms(dt.datetime(d.year, d.month, d.day, tzinfo=tz))


def end_of_day_ms(d: dt.date, tz: dt.tzinfo) -> int:
    """Epoch ms of 23:59:59.999 on `d` (one ms before the next midnight)."""
    if d == dt.date.max:
        return _aware_to_ms(dt.datetime(d.year, d.month, d.day, 23, 59, 59, 999000, tzinfo=tz))
    return start_of_day_ms(d + dt.timedelta(days=1), tz) - 1


def date_of_ms(ms: int, tz: dt.tzinfo) -> dt.date:
    return dt.datetime.fromtimestamp(int(ms) / 1000.0, tz=tz).date()


def day_key_from_ms(ms: Optional[int], tz: dt.tzinfo) -> Optional[str]:
    if ms is None:
        return None
    try:
        return date_of_ms(ms, tz).isoformat()
    except (OverflowError, OSError, ValueError):
        return None


def is_end_of_day_ms(ms: int, tz: dt.tzinfo) -> bool:
    return int(ms) == end_of_day_ms(date_of_ms(ms, tz), tz)


def is_midnight_ms(ms: Optional[int], tz: dt.tzinfo) -> bool:
    if ms is None:
        return False
    return int(ms) == start_of_day_ms(date_of_ms(ms, tz), tz)


def normalize_end_of_day_ms(ms: int, tz: dt.tzinfo) -> int:
    """Clamp an instant forward to the end of its calendar day (idempotent)."""
    return end_of_day_ms(date_of_ms(ms, tz), tz)
