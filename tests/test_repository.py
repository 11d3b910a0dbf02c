import tempfile
import unittest
from pathlib import Path
from unittest import mock

import pendulum

from travellog.repository.entry import EntryRepository, PersistenceError
from travellog.repository.id_map import IdMapRepository
from travellog.service.entry import create_flight, create_stay
from travellog.service.timeline import Timeline


class TestEntryRepository(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.entries_dir = Path(self._tmp.name) / "entries"
        self.repository = EntryRepository(self.entries_dir)

    def test_entries_survive_a_reload(self) -> None:
        flight = create_flight(pendulum.date(2025, 3, 1), "Lima", "Peru", flight_number="LA 2001")
        stay = create_stay(pendulum.date(2025, 3, 1), pendulum.date(2025, 3, 9), "Lima", "Peru", "hotel")
        self.repository.upsert(flight)
        self.repository.upsert(stay)

        loaded = EntryRepository(self.entries_dir).list_entries()

        self.assertEqual([e["id"] for e in loaded], [stay["id"], flight["id"]])
        self.assertEqual(loaded[0]["start_date"], pendulum.date(2025, 3, 1))
        self.assertEqual(loaded[0]["end_date"], pendulum.date(2025, 3, 9))
        self.assertEqual(loaded[0]["days"], 9)
        self.assertEqual(loaded[0]["accommodation_type"], "hotel")
        self.assertEqual(loaded[1]["flight_number"], "LA 2001")
        self.assertEqual(loaded[1]["created"], flight["created"])
        self.assertTrue((self.entries_dir / f"{stay['id']}.yaml").is_file())

    def test_delete_removes_the_file(self) -> None:
        stay = create_stay(pendulum.date(2025, 3, 1), None, "Lima", "Peru")
        self.repository.upsert(stay)
        self.repository.delete(stay["id"])

        self.assertEqual(self.repository.list_entries(), [])

    def test_commit_writes_and_deletes_together(self) -> None:
        old = create_stay(pendulum.date(2025, 3, 1), None, "Lima", "Peru")
        new = create_stay(pendulum.date(2025, 3, 2), None, "Cusco", "Peru")
        self.repository.upsert(old)

        self.repository.commit([new], [old["id"]])

        self.assertEqual([e["id"] for e in self.repository.list_entries()], [new["id"]])
        self.assertEqual(list(self.entries_dir.glob("*.tmp")), [])

    def test_unwritable_store_raises_persistence_error(self) -> None:
        blocked = Path(self._tmp.name) / "blocked"
        blocked.write_text("not a directory")
        repository = EntryRepository(blocked)

        with self.assertRaises(PersistenceError):
            repository.upsert(create_stay(pendulum.date(2025, 3, 1), None, "Lima", "Peru"))

    def test_corrupt_entry_raises_persistence_error(self) -> None:
        self.entries_dir.mkdir(parents=True)
        (self.entries_dir / "broken.yaml").write_text("kind: stay\ncity: Lima\n")

        with self.assertRaises(PersistenceError):
            self.repository.list_entries()


class TestIdMapRepository(unittest.TestCase):
    def test_synthetic_ids_are_stable_and_persisted(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "id_map.yaml"
            repository = IdMapRepository()
            repository.bind(path)

            self.assertEqual(repository.associate_id("a"), 1)
            self.assertEqual(repository.associate_id("b"), 2)
            self.assertEqual(repository.associate_id("a"), 1)
            repository.flush()

            reloaded = IdMapRepository()
            reloaded.bind(path)
            self.assertEqual(reloaded.get_real_id(2), "b")
            with self.assertRaises(KeyError):
                reloaded.get_real_id(3)

            reloaded.clear_ids()
            self.assertEqual(reloaded.associate_id("b"), 1)


class TestCommitRollback(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.entries_dir = Path(self._tmp.name) / "entries"
        self.repository = EntryRepository(self.entries_dir)
        self.stay = create_stay(
            pendulum.date(2025, 1, 1), pendulum.date(2025, 3, 11), "Chiang Rai", "Thailand"
        )
        self.repository.upsert(self.stay)

    def assert_store_untouched(self) -> None:
        loaded = EntryRepository(self.entries_dir).list_entries()
        self.assertEqual(
            [(e["id"], e["start_date"], e["end_date"]) for e in loaded],
            [(self.stay["id"], self.stay["start_date"], self.stay["end_date"])],
        )
        self.assertEqual(list(self.entries_dir.glob("*.tmp")), [])
        self.assertEqual(list(self.entries_dir.glob("*.bak")), [])

    def test_replaced_stay_is_gone_even_when_yaml_files_cannot_be_unlinked(self) -> None:
        original_unlink = Path.unlink

        def unlink(path, missing_ok=False):
            if path.suffix == ".yaml":
                raise OSError("read-only")
            return original_unlink(path, missing_ok=missing_ok)

        timeline = Timeline(self.repository)
        with mock.patch.object(Path, "unlink", unlink):
            timeline.set_location(
                {"start": pendulum.date(2025, 2, 10), "end": pendulum.date(2025, 2, 12)},
                {"city": "Sofia", "country": "Bulgaria"},
            )

        loaded = EntryRepository(self.entries_dir).list_entries()
        self.assertEqual([e["city"] for e in loaded], ["Sofia"])
        self.assertEqual(list(self.entries_dir.glob("*.bak")), [])

    def test_failure_while_moving_files_restores_the_store(self) -> None:
        original_replace = Path.replace

        def replace(path, target):
            if path.name.endswith(".tmp"):
                raise OSError("disk full")
            return original_replace(path, target)

        timeline = Timeline(self.repository)
        with mock.patch.object(Path, "replace", replace):
            with self.assertRaises(PersistenceError):
                timeline.set_location(
                    {"start": pendulum.date(2025, 2, 10), "end": pendulum.date(2025, 2, 12)},
                    {"city": "Sofia", "country": "Bulgaria"},
                )

        self.assertEqual(timeline.entries[0]["id"], self.stay["id"])
        self.assert_store_untouched()

    def test_partly_applied_split_is_undone(self) -> None:
        original_replace = Path.replace
        moved = []

        def replace(path, target):
            if path.name.endswith(".tmp"):
                moved.append(path)
                if len(moved) == 2:
                    raise OSError("disk full")
            return original_replace(path, target)

        timeline = Timeline(self.repository, policy="clip")
        with mock.patch.object(Path, "replace", replace):
            with self.assertRaises(PersistenceError):
                timeline.set_location(
                    {"start": pendulum.date(2025, 2, 10), "end": pendulum.date(2025, 2, 12)},
                    {"city": "Sofia", "country": "Bulgaria"},
                )

        self.assert_store_untouched()

    def test_failed_delete_keeps_the_file(self) -> None:
        original_replace = Path.replace

        def replace(path, target):
            if str(target).endswith(".bak"):
                raise OSError("permission denied")
            return original_replace(path, target)

        with mock.patch.object(Path, "replace", replace):
            with self.assertRaises(PersistenceError):
                self.repository.delete(self.stay["id"])

        self.assert_store_untouched()


if __name__ == "__main__":
    unittest.main()
