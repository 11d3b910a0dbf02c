import tempfile
import unittest
from pathlib import Path

import pendulum

from travellog.repository.entry import EntryRepository, PersistenceError
from travellog.service.entry import create_flight, create_stay
from travellog.service.overlap import OverlapError, find_overlap
from travellog.service.timeline import Timeline, year_range


class FailingRepository(EntryRepository):
    def commit(self, upserts, deletes) -> None:
        raise PersistenceError("disk full")


def _d(month: int, day: int) -> pendulum.Date:
    return pendulum.date(2025, month, day)


class TestTimeline(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.entries_dir = Path(self._tmp.name) / "entries"

    def test_writes_are_persisted_before_they_are_visible(self) -> None:
        timeline = Timeline(EntryRepository(self.entries_dir))
        timeline.set_location(
            {"start": _d(1, 1), "end": _d(3, 11)}, {"city": "Chiang Rai", "country": "Thailand"}
        )
        timeline.set_location(
            {"start": _d(2, 10), "end": _d(2, 12)}, {"city": "Sofia", "country": "Bulgaria"}
        )

        reloaded = Timeline(EntryRepository(self.entries_dir))
        self.assertEqual(
            [(e["start_date"], e["city"]) for e in reloaded.entries],
            [(_d(2, 10), "Sofia")],
        )
        self.assertEqual(reloaded.entries, timeline.entries)

    def test_clip_policy_is_persisted_too(self) -> None:
        timeline = Timeline(EntryRepository(self.entries_dir), policy="clip")
        timeline.set_location(
            {"start": _d(1, 1), "end": _d(3, 11)}, {"city": "Chiang Rai", "country": "Thailand"}
        )
        timeline.delete_range({"start": _d(2, 10), "end": _d(2, 12)})

        reloaded = Timeline(EntryRepository(self.entries_dir))
        self.assertEqual(
            [(e["start_date"], e["end_date"]) for e in reloaded.entries],
            [(_d(1, 1), _d(2, 9)), (_d(2, 13), _d(3, 11))],
        )

    def test_failed_commit_leaves_the_timeline_unchanged(self) -> None:
        stay = create_stay(_d(1, 1), _d(1, 31), "Lisbon", "Portugal")
        timeline = Timeline(FailingRepository(self.entries_dir), entries=[stay])
        before = timeline.get_entries()

        with self.assertRaises(PersistenceError):
            timeline.set_location(
                {"start": _d(1, 10), "end": _d(1, 12)}, {"city": "Porto", "country": "Portugal"}
            )
        with self.assertRaises(PersistenceError):
            timeline.add_flight(create_flight(_d(1, 5), "Madrid", "Spain"))
        with self.assertRaises(PersistenceError):
            timeline.delete_entry(stay["id"])
        with self.assertRaises(PersistenceError):
            timeline.add_entries([create_stay(_d(2, 1), None, "Faro", "Portugal")])

        self.assertEqual(timeline.get_entries(), before)

    def test_add_entries_resolves_stays_in_order(self) -> None:
        timeline = Timeline(EntryRepository(self.entries_dir))
        timeline.add_entries(
            [
                create_stay(_d(5, 1), _d(5, 20), "Hanoi", "Vietnam"),
                create_flight(_d(5, 10), "Hue", "Vietnam"),
                create_stay(_d(5, 10), _d(5, 15), "Hue", "Vietnam"),
            ]
        )

        self.assertIsNone(find_overlap(timeline.entries))
        self.assertEqual(
            [(e["kind"], e["city"]) for e in timeline.entries], [("stay", "Hue"), ("flight", "Hue")]
        )
        self.assertEqual(
            len(EntryRepository(self.entries_dir).list_entries()), len(timeline.entries)
        )

    def test_fill_gaps_and_year_range(self) -> None:
        timeline = Timeline(EntryRepository(self.entries_dir))
        timeline.add_stay(create_stay(_d(6, 1), _d(6, 30), "Oslo", "Norway"))

        created = timeline.fill_gaps(year_range(2025), {"city": "Berlin", "country": "Germany"})

        self.assertEqual(len(created), 2)
        self.assertEqual(sum(s["days"] for s in timeline.entries), 365)
        self.assertEqual(timeline.fill_gaps(year_range(2025), {"city": "Berlin", "country": "Germany"}), [])

    def test_stored_overlaps_are_resolved_by_the_next_write(self) -> None:
        a = create_stay(_d(1, 1), _d(1, 20), "Bangkok", "Thailand")
        b = create_stay(_d(1, 10), _d(1, 31), "Hanoi", "Vietnam")
        repository = EntryRepository(self.entries_dir)
        repository.commit([a, b], [])

        timeline = Timeline(repository)
        self.assertIsNotNone(find_overlap(timeline.entries))
        timeline.set_location({"start": _d(1, 1), "end": _d(1, 31)}, {"city": "Sofia", "country": "Bulgaria"})

        self.assertIsNone(find_overlap(timeline.entries))
        self.assertEqual(len(timeline.entries), 1)

    def test_delete_entries_is_all_or_nothing(self) -> None:
        a = create_stay(_d(1, 1), _d(1, 5), "Lisbon", "Portugal")
        b = create_stay(_d(1, 6), _d(1, 9), "Porto", "Portugal")
        repository = EntryRepository(self.entries_dir)
        repository.commit([a, b], [])
        timeline = Timeline(repository)

        with self.assertRaises(KeyError):
            timeline.delete_entries([a["id"], "missing"])
        self.assertEqual(len(timeline.entries), 2)
        self.assertEqual(len(EntryRepository(self.entries_dir).list_entries()), 2)

        deleted = timeline.delete_entries([a["id"], b["id"]])
        self.assertEqual([e["city"] for e in deleted], ["Lisbon", "Porto"])
        self.assertEqual(timeline.entries, [])
        self.assertEqual(EntryRepository(self.entries_dir).list_entries(), [])

    def test_failed_batch_delete_removes_nothing(self) -> None:
        a = create_stay(_d(1, 1), _d(1, 5), "Lisbon", "Portugal")
        b = create_stay(_d(1, 6), _d(1, 9), "Porto", "Portugal")
        timeline = Timeline(FailingRepository(self.entries_dir), entries=[a, b])

        with self.assertRaises(PersistenceError):
            timeline.delete_entries([a["id"], b["id"]])
        self.assertEqual([e["id"] for e in timeline.entries], [a["id"], b["id"]])

    def test_get_and_delete_missing_entries(self) -> None:
        timeline = Timeline(EntryRepository(self.entries_dir))

        with self.assertRaises(KeyError):
            timeline.get_entry("missing")
        with self.assertRaises(KeyError):
            timeline.delete_entry("missing")

    def test_overlap_error_is_a_distinct_failure(self) -> None:
        self.assertTrue(issubclass(OverlapError, Exception))
        self.assertFalse(issubclass(OverlapError, PersistenceError))


if __name__ == "__main__":
    unittest.main()
