import unittest

import pendulum
import typer

from travellog.terminal.parse import parse_id_list, parse_required_date, resolve_day


class TestParse(unittest.TestCase):
    def test_required_date(self) -> None:
        self.assertEqual(parse_required_date("2025-02-10"), pendulum.date(2025, 2, 10))
        with self.assertRaises(typer.BadParameter):
            parse_required_date(None)
        with self.assertRaises(typer.BadParameter):
            parse_required_date("10.02.2025")

    def test_resolve_day_from_a_calendar_cell(self) -> None:
        self.assertEqual(resolve_day(None, 2024, 2, 29), pendulum.date(2024, 2, 29))
        self.assertEqual(resolve_day("2025-03-01", None, None, None), pendulum.date(2025, 3, 1))
        with self.assertRaises(typer.BadParameter):
            resolve_day(None, 2025, 2, 29)
        with self.assertRaises(typer.BadParameter):
            resolve_day(None, None, None, None)

    def test_id_list(self) -> None:
        self.assertEqual(parse_id_list("3,1-2,3"), [1, 2, 3])
        with self.assertRaises(typer.BadParameter):
            parse_id_list("2-1")


if __name__ == "__main__":
    unittest.main()
