import random
import unittest

import pendulum

from travellog.service.entry import EntryValidationError, create_flight, create_stay
from travellog.service.overlap import (
    OverlapError,
    apply_reconciliation,
    assert_no_overlap,
    delete_range,
    find_overlap,
    plan_fill_gaps,
    set_location,
    stay_covering,
    stays,
)

SOFIA = {"city": "Sofia", "country": "Bulgaria"}
CHIANG_RAI = {"city": "Chiang Rai", "country": "Thailand"}


def _d(month: int, day: int, year: int = 2025) -> pendulum.Date:
    return pendulum.date(year, month, day)


def _shape(entries):
    return [
        (s["start_date"], s["end_date"], s["city"], s["country"], s["accommodation_type"])
        for s in stays(entries)
    ]


class TestSetLocation(unittest.TestCase):
    def setUp(self) -> None:
        self.base = create_stay(_d(1, 1), _d(3, 11), "Chiang Rai", "Thailand")

    def test_replace_drops_the_whole_intersecting_stay(self) -> None:
        result = set_location([self.base], {"start": _d(2, 10), "end": _d(2, 12)}, SOFIA)

        self.assertEqual(len(result), 1)
        self.assertEqual(result[0]["city"], "Sofia")
        self.assertEqual(result[0]["days"], 3)
        self.assertNotIn(self.base["id"], [e["id"] for e in result])

    def test_clip_splits_the_stay_around_the_new_range(self) -> None:
        result = set_location(
            [self.base], {"start": _d(2, 10), "end": _d(2, 12)}, SOFIA, policy="clip"
        )

        self.assertEqual(
            [(s["start_date"], s["end_date"], s["city"]) for s in result],
            [
                (_d(1, 1), _d(2, 9), "Chiang Rai"),
                (_d(2, 10), _d(2, 12), "Sofia"),
                (_d(2, 13), _d(3, 11), "Chiang Rai"),
            ],
        )
        self.assertEqual(result[0]["id"], self.base["id"])
        self.assertNotEqual(result[2]["id"], self.base["id"])
        self.assertEqual(result[0]["days"], 40)
        self.assertEqual(result[2]["days"], 27)

    def test_clip_trims_a_stay_sticking_out_on_one_side(self) -> None:
        result = set_location(
            [self.base], {"start": _d(3, 1), "end": _d(3, 20)}, SOFIA, policy="clip"
        )

        self.assertEqual(
            [(s["start_date"], s["end_date"]) for s in result],
            [(_d(1, 1), _d(2, 28)), (_d(3, 1), _d(3, 20))],
        )
        self.assertEqual(result[0]["id"], self.base["id"])

    def test_clip_removes_a_stay_inside_the_range(self) -> None:
        inner = create_stay(_d(2, 1), _d(2, 3), "Sofia", "Bulgaria")
        result = set_location(
            [inner], {"start": _d(1, 1), "end": _d(2, 28)}, CHIANG_RAI, policy="clip"
        )

        self.assertEqual(len(result), 1)
        self.assertEqual(result[0]["city"], "Chiang Rai")

    def test_single_day_range(self) -> None:
        result = set_location([], {"start": _d(5, 5), "end": _d(5, 5)}, SOFIA)

        self.assertEqual(result[0]["days"], 1)
        self.assertEqual(result[0]["accommodation_type"], "other")

    def test_inverted_range_is_rejected(self) -> None:
        with self.assertRaises(EntryValidationError):
            set_location([], {"start": _d(5, 6), "end": _d(5, 5)}, SOFIA)

    def test_repeating_a_write_is_idempotent(self) -> None:
        for policy in ("replace", "clip"):
            once = set_location(
                [self.base], {"start": _d(2, 10), "end": _d(2, 12)}, SOFIA, policy=policy
            )
            twice = set_location(
                once, {"start": _d(2, 10), "end": _d(2, 12)}, SOFIA, policy=policy
            )
            self.assertEqual(_shape(once), _shape(twice))

    def test_flights_are_kept(self) -> None:
        flight = create_flight(_d(2, 10), "Sofia", "Bulgaria", flight_number="FB 442")
        result = set_location(
            [self.base, flight], {"start": _d(2, 10), "end": _d(2, 12)}, SOFIA
        )

        self.assertIn(flight["id"], [e["id"] for e in result])
        # Stay sorts before a flight on the same day
        self.assertEqual([e["kind"] for e in result], ["stay", "flight"])

    def test_explicit_write_wins_over_overlapping_records(self) -> None:
        a = create_stay(_d(1, 1), _d(1, 20), "Bangkok", "Thailand")
        b = create_stay(_d(1, 10), _d(1, 31), "Hanoi", "Vietnam")
        self.assertIsNotNone(find_overlap([a, b]))

        result = set_location([a, b], {"start": _d(1, 5), "end": _d(1, 25)}, SOFIA, policy="clip")

        assert_no_overlap(result)
        self.assertEqual(stay_covering(result, _d(1, 15))["city"], "Sofia")
        self.assertEqual(stay_covering(result, _d(1, 3))["city"], "Bangkok")
        self.assertEqual(stay_covering(result, _d(1, 28))["city"], "Hanoi")


class TestDeleteRange(unittest.TestCase):
    def test_nothing_intersecting_is_a_no_op(self) -> None:
        stay = create_stay(_d(1, 1), _d(1, 5), "Lisbon", "Portugal")
        result = delete_range([stay], {"start": _d(2, 1), "end": _d(2, 5)})

        self.assertEqual(result, [stay])

    def test_replace_removes_and_clip_trims(self) -> None:
        stay = create_stay(_d(1, 1), _d(1, 10), "Lisbon", "Portugal")

        self.assertEqual(delete_range([stay], {"start": _d(1, 4), "end": _d(1, 5)}), [])

        clipped = delete_range(
            [stay], {"start": _d(1, 4), "end": _d(1, 5)}, policy="clip"
        )
        self.assertEqual(
            [(s["start_date"], s["end_date"]) for s in clipped],
            [(_d(1, 1), _d(1, 3)), (_d(1, 6), _d(1, 10))],
        )


class TestFillGaps(unittest.TestCase):
    def test_fills_each_uncovered_run(self) -> None:
        existing = create_stay(_d(1, 5), _d(1, 10), "Lisbon", "Portugal")
        plan = plan_fill_gaps([existing], {"start": _d(1, 1), "end": _d(1, 15)}, SOFIA)

        self.assertEqual(plan["removed"], [])
        self.assertEqual(
            [(s["start_date"], s["end_date"]) for s in plan["upserted"]],
            [(_d(1, 1), _d(1, 4)), (_d(1, 11), _d(1, 15))],
        )
        result = apply_reconciliation([existing], plan)
        assert_no_overlap(result)
        self.assertIn(existing, result)

    def test_fully_covered_range_yields_nothing(self) -> None:
        existing = create_stay(_d(1, 1), _d(1, 31), "Lisbon", "Portugal")
        plan = plan_fill_gaps([existing], {"start": _d(1, 5), "end": _d(1, 9)}, SOFIA)

        self.assertEqual(plan["upserted"], [])


class TestNoOverlapInvariant(unittest.TestCase):
    def test_assert_no_overlap_names_both_stays(self) -> None:
        a = create_stay(_d(1, 1), _d(1, 5), "Lisbon", "Portugal")
        b = create_stay(_d(1, 5), _d(1, 9), "Porto", "Portugal")

        with self.assertRaises(OverlapError) as ctx:
            assert_no_overlap([a, b])
        self.assertIn("Lisbon", str(ctx.exception))
        self.assertIn("Porto", str(ctx.exception))

    def test_adjacent_stays_do_not_overlap(self) -> None:
        a = create_stay(_d(1, 1), _d(1, 4), "Lisbon", "Portugal")
        b = create_stay(_d(1, 5), _d(1, 9), "Porto", "Portugal")

        assert_no_overlap([a, b])

    def test_random_edit_sequences_never_overlap(self) -> None:
        cities = [("Lisbon", "Portugal"), ("Sofia", "Bulgaria"), ("Hanoi", "Vietnam")]
        for policy in ("replace", "clip"):
            rng = random.Random(20250101)
            entries = []
            for _ in range(200):
                start = _d(1, 1).add(days=rng.randint(0, 120))
                end = start.add(days=rng.randint(0, 20))
                date_range = {"start": start, "end": end}
                if rng.random() < 0.75:
                    city, country = rng.choice(cities)
                    entries = set_location(
                        entries, date_range, {"city": city, "country": country}, policy=policy
                    )
                else:
                    entries = delete_range(entries, date_range, policy=policy)

                self.assertIsNone(find_overlap(entries))
                self.assertEqual(
                    entries,
                    sorted(entries, key=lambda s: s["start_date"]),
                )
                for stay in stays(entries):
                    self.assertEqual(
                        stay["days"],
                        stay["end_date"].toordinal() - stay["start_date"].toordinal() + 1,
                    )


if __name__ == "__main__":
    unittest.main()
