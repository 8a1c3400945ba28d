import datetime as dt
import unittest

from calgrid.api import layout_day, layout_month, layout_week
from calgrid.model import CalendarItem
from calgrid.validate import validate_grid_layout, validate_month_layout, validate_window

UTC = dt.timezone.utc


def _ms(y: int, mo: int, d: int, hh: int = 0, mi: int = 0) -> int:
    return int(dt.datetime(y, mo, d, hh, mi, tzinfo=UTC).timestamp() * 1000)


ITEMS = [
    CalendarItem(id="kickoff", kind="event", start_ms=_ms(2024, 3, 11, 9), due_ms=_ms(2024, 3, 13, 18)),
    CalendarItem(id="review", kind="event", start_ms=_ms(2024, 3, 12, 10), due_ms=_ms(2024, 3, 12, 11)),
    CalendarItem(id="sync", kind="event", start_ms=_ms(2024, 3, 12, 10, 30), due_ms=_ms(2024, 3, 12, 12)),
    CalendarItem(id="report", kind="deadline", due_ms=_ms(2024, 3, 12, 17)),
    CalendarItem(id="holiday-20240301", kind="holiday", due_ms=_ms(2024, 3, 1)),
    CalendarItem(id="offsite", kind="event", start_ms=_ms(2024, 3, 29), due_ms=_ms(2024, 4, 2)),
    CalendarItem(id="old", kind="deadline", due_ms=_ms(2023, 12, 1)),
    CalendarItem(id="broken", kind="deadline", due_ms=None),
]


class TestLayoutPipelineContract(unittest.TestCase):
    def test_month_layout(self) -> None:
        m = layout_month(ITEMS, dt.date(2024, 3, 20), today=dt.date(2024, 3, 12))
        self.assertEqual(validate_window(m.window), [])
        self.assertEqual(len(m.window.days), 42)
        self.assertEqual(validate_month_layout(m.placed), [])

        ids = [p.item.id for p in m.placed]
        self.assertEqual(ids, ["kickoff", "review", "sync", "report", "holiday-20240301", "offsite"])
        rows = {p.item.id: p.row for p in m.placed}
        self.assertEqual(rows["kickoff"], 0)
        self.assertEqual(sorted([rows["review"], rows["sync"], rows["report"]]), [1, 2, 3])
        self.assertEqual(m.row_count, 4)
        self.assertEqual(m.overflow, {"2024-03-12": 2})

        self.assertEqual(m.classification.by_day["2024-03-12"], ["kickoff", "review", "sync", "report"])
        self.assertEqual(
            {(e.id, e.reason) for e in m.classification.excluded},
            {("old", "out_of_window"), ("broken", "malformed")},
        )
        self.assertTrue([c for c in m.window.cells() if c.is_today][0].in_month)

    def test_week_layout(self) -> None:
        w = layout_week(ITEMS, dt.date(2024, 3, 12))
        self.assertEqual([d.day for d in w.days], [dt.date(2024, 3, 10) + dt.timedelta(days=i) for i in range(7)])
        by_day = {d.day.isoformat(): d for d in w.days}

        tue = {p.item.id: p for p in by_day["2024-03-12"].placed}
        self.assertEqual(sorted(tue), ["kickoff", "report", "review", "sync"])
        self.assertEqual((tue["kickoff"].start_min, tue["kickoff"].end_min), (0, 1440))
        self.assertEqual(tue["kickoff"].total_columns, 3)
        self.assertEqual((tue["report"].start_min, tue["report"].end_min), (990, 1020))

        mon = {p.item.id: p for p in by_day["2024-03-11"].placed}
        self.assertEqual((mon["kickoff"].start_min, mon["kickoff"].end_min), (540, 1440))
        self.assertEqual(by_day["2024-03-10"].placed, ())
        self.assertEqual(by_day["2024-03-12"].classification.by_day, {"2024-03-12": ["kickoff", "review", "sync", "report"]})
        for d in w.days:
            self.assertEqual(validate_grid_layout(d.placed), [])

    def test_day_layout(self) -> None:
        d = layout_day(ITEMS, dt.date(2024, 3, 12))
        self.assertEqual([p.item.id for p in d.placed], ["kickoff", "review", "sync", "report"])
        cols = {p.item.id: (p.column, p.total_columns) for p in d.placed}
        self.assertEqual(cols["kickoff"], (0, 3))
        self.assertEqual(cols["review"], (1, 3))
        self.assertEqual(cols["sync"], (2, 3))
        self.assertEqual(cols["report"], (1, 3))
        self.assertIn(("offsite", "out_of_window"), {(e.id, e.reason) for e in d.classification.excluded})

    def test_recomputation_is_identical(self) -> None:
        a = layout_month(ITEMS, dt.date(2024, 3, 1))
        b = layout_month(list(ITEMS), dt.date(2024, 3, 31))
        self.assertEqual(a, b)
        self.assertEqual(layout_week(ITEMS, dt.date(2024, 3, 12)), layout_week(ITEMS, dt.date(2024, 3, 16)))


if __name__ == "__main__":
    unittest.main(verbosity=2)
