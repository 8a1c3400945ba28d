from __future__ import annotations

import unittest

from calgrid.api import ItemFormatError, item_from_dict, item_to_dict, items_from_json_obj


class TestItemFromDictContract(unittest.TestCase):
    def test_iso_and_epoch_instants(self):
        a = item_from_dict({"id": " e1 ", "start": "2024-03-01T00:00:00Z", "due": "2024-03-01T01:00:00.000Z"})
        self.assertEqual(a.id, "e1")
        self.assertEqual(a.kind, "event")
        self.assertEqual(a.start_ms, 1709251200000)
        self.assertEqual(a.due_ms, 1709251200000 + 3_600_000)

        b = item_from_dict({"id": "t1", "kind": "DEADLINE", "due_ms": 1709251200000, "all_day": True})
        self.assertEqual(b.kind, "deadline")
        self.assertIsNone(b.start_ms)
        self.assertTrue(b.all_day)

    def test_long_form_kind_names_are_accepted(self):
        kinds = {
            raw: item_from_dict({"id": "x", "kind": raw, "due_ms": 1}).kind
            for raw in ("ScheduledEvent", "scheduled_event", "Deadline", "HOLIDAY", "event")
        }
        self.assertEqual(
            kinds,
            {
                "ScheduledEvent": "event",
                "scheduled_event": "event",
                "Deadline": "deadline",
                "HOLIDAY": "holiday",
                "event": "event",
            },
        )
        self.assertEqual(item_from_dict({"id": "x", "kind": "Meeting"}).kind, "meeting")

    def test_unparsable_instant_becomes_none(self):
        it = item_from_dict({"id": "x", "due": "next tuesday"})
        self.assertIsNone(it.due_ms)

    def test_rejects_non_object_and_missing_id(self):
        with self.assertRaises(ItemFormatError):
            item_from_dict(["id", "x"])
        with self.assertRaises(ItemFormatError):
            item_from_dict({"id": "   "})
        with self.assertRaises(ItemFormatError):
            item_from_dict({"due_ms": 1})

    def test_to_dict_keys(self):
        d = item_to_dict(item_from_dict({"id": "e1", "title": "Standup", "due_ms": 5}))
        self.assertEqual(d, {"id": "e1", "kind": "event", "title": "Standup", "start_ms": None, "due_ms": 5, "all_day": False})

    def test_items_document_shapes(self):
        self.assertEqual([i.id for i in items_from_json_obj([{"id": "a"}, {"id": "b"}])], ["a", "b"])
        self.assertEqual([i.id for i in items_from_json_obj({"items": [{"id": "c"}]})], ["c"])
        with self.assertRaises(ItemFormatError):
            items_from_json_obj({"events": []})
        with self.assertRaises(ItemFormatError):
            items_from_json_obj("nope")


if __name__ == "__main__":
    unittest.main(verbosity=2)
