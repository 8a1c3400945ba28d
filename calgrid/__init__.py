"""calgrid Python package.

Calendar event-layout engine: month/week/day windows, per-kind date mapping,
lane assignment and drag rescheduling.

Public API:
  - import from `calgrid.api` (preferred) or `import calgrid` (re-export)
"""

from __future__ import annotations

from .api import *  # noqa: F401,F403
from . import api as _api

__all__ = list(_api.__all__)
