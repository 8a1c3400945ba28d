# calgrid/config.py
from __future__ import annotations

from typing import Any, Dict

from .model import LayoutConfig
from .util.tz import normalize_tz_name, resolve_tz

DEFAULT_CFG: Dict[str, Any] = {
    "tz": "UTC",
    "marker_min": 30,
    "min_duration_min": 1,
    "month_weeks": 6,
    "visible_rows": 2,
    "week_start": 0,
}


def _int_in(cfg: LayoutConfig, key: str, lo: int, hi: int) -> int:
    raw = cfg.get(key)
    if raw is None:
        raw = DEFAULT_CFG[key]
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValueError(f"cfg.{key} must be an integer; got {raw!r}")
    try:
        v = int(raw)
    except ValueError as ex:
        raise ValueError(f"cfg.{key} must be an integer; got {raw!r}") from ex
    return max(lo, min(hi, v))


def normalize_cfg(cfg: LayoutConfig | None = None) -> LayoutConfig:
    """Return a complete layout config with defaults filled in and values clamped.

    Unknown keys are preserved. Raises ValueError for an invalid timezone or
    a week start other than Sunday.
    """
    src = dict(cfg or {})
    out: Dict[str, Any] = dict(src)

    tz_name = normalize_tz_name(src.get("tz", DEFAULT_CFG["tz"]))
    resolve_tz(tz_name)
    out["tz"] = tz_name

    out["marker_min"] = _int_in(src, "marker_min", 1, 1440)
    out["min_duration_min"] = _int_in(src, "min_duration_min", 1, 1440)
    out["month_weeks"] = _int_in(src, "month_weeks", 4, 6)
    out["visible_rows"] = _int_in(src, "visible_rows", 0, 1000)

    if src.get("week_start") not in (None, 0):
        raise ValueError("cfg.week_start: only Sunday-first weeks (0) are supported")
    out["week_start"] = 0

    return out
