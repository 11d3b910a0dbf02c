import unittest

import pendulum

from travellog.service.entry import (
    EntryValidationError,
    compute_days,
    create_flight,
    create_stay,
    known_locations,
    normalize_stay,
)


class TestCreateStay(unittest.TestCase):
    def test_missing_end_date_makes_a_single_day_stay(self) -> None:
        stay = create_stay(pendulum.date(2025, 8, 1), None, "Split", "Croatia")

        self.assertEqual(stay["end_date"], stay["start_date"])
        self.assertEqual(stay["days"], 1)
        self.assertEqual(stay["kind"], "stay")

    def test_location_is_stripped_and_required(self) -> None:
        stay = create_stay(pendulum.date(2025, 8, 1), None, "  Split ", " Croatia")
        self.assertEqual((stay["city"], stay["country"]), ("Split", "Croatia"))

        with self.assertRaises(EntryValidationError):
            create_stay(pendulum.date(2025, 8, 1), None, "   ", "Croatia")
        with self.assertRaises(EntryValidationError):
            create_stay(pendulum.date(2025, 8, 1), None, "Split", None)

    def test_start_after_end_is_rejected(self) -> None:
        with self.assertRaises(EntryValidationError):
            create_stay(pendulum.date(2025, 8, 2), pendulum.date(2025, 8, 1), "Split", "Croatia")

    def test_accommodation_type_is_checked(self) -> None:
        stay = create_stay(pendulum.date(2025, 8, 1), None, "Split", "Croatia", "airbnb")
        self.assertEqual(stay["accommodation_type"], "airbnb")

        with self.assertRaises(EntryValidationError):
            create_stay(pendulum.date(2025, 8, 1), None, "Split", "Croatia", "tent")

    def test_every_stay_gets_its_own_id(self) -> None:
        a = create_stay(pendulum.date(2025, 8, 1), None, "Split", "Croatia")
        b = create_stay(pendulum.date(2025, 8, 1), None, "Split", "Croatia")

        self.assertNotEqual(a["id"], b["id"])


class TestDays(unittest.TestCase):
    def test_compute_days_is_inclusive(self) -> None:
        self.assertEqual(compute_days(pendulum.date(2024, 2, 28), pendulum.date(2024, 3, 1)), 3)
        self.assertEqual(compute_days(pendulum.date(2024, 12, 31), pendulum.date(2025, 1, 1)), 2)

    def test_normalize_stay_recomputes_days(self) -> None:
        stay = create_stay(pendulum.date(2025, 1, 1), pendulum.date(2025, 1, 10), "Rome", "Italy")
        stay["days"] = 99

        self.assertEqual(normalize_stay(stay)["days"], 10)


class TestCreateFlight(unittest.TestCase):
    def test_flight_has_no_stay_fields(self) -> None:
        flight = create_flight(pendulum.date(2025, 8, 1), "Zagreb", "Croatia", departure="")

        self.assertNotIn("days", flight)
        self.assertNotIn("end_date", flight)
        self.assertIsNone(flight["departure"])

    def test_destination_is_required(self) -> None:
        with self.assertRaises(EntryValidationError):
            create_flight(pendulum.date(2025, 8, 1), "Zagreb", "")


class TestKnownLocations(unittest.TestCase):
    def test_distinct_sorted_pairs(self) -> None:
        entries = [
            create_stay(pendulum.date(2025, 1, 1), None, "Porto", "Portugal"),
            create_flight(pendulum.date(2025, 1, 2), "Lisbon", "Portugal"),
            create_stay(pendulum.date(2025, 1, 3), None, "Porto", "Portugal"),
        ]

        self.assertEqual(
            known_locations(entries),
            [
                {"city": "Lisbon", "country": "Portugal"},
                {"city": "Porto", "country": "Portugal"},
            ],
        )
        self.assertEqual(known_locations([]), [])


if __name__ == "__main__":
    unittest.main()
