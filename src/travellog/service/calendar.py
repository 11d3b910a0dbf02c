# SPDX-License-Identifier: MIT

import pendulum

from travellog.model.calendar import DayCell, MonthProjection
from travellog.model.entry import TimelineEntry
from travellog.model.location import Location
from travellog.service.overlap import stays


def _validate_month_index(month_index: int) -> None:
    if not 0 <= month_index <= 11:
        raise ValueError(f"Month index must be between 0 and 11, got {month_index}")


def days_in_month(year: int, month_index: int) -> int:
    """Gregorian length of a month; ``month_index`` is 0-based."""
    _validate_month_index(month_index)
    return pendulum.date(year, month_index + 1, 1).days_in_month


def leading_offset(year: int, month_index: int) -> int:
    """Empty cells before day 1 in a Monday-first week."""
    _validate_month_index(month_index)
    # Pendulum's day_of_week: Monday = 0, ..., Sunday = 6
    return int(pendulum.date(year, month_index + 1, 1).day_of_week)


def date_for_cell(year: int, month_index: int, day: int) -> pendulum.Date:
    """
    Resolve "day N of month M" into a calendar date.

    Raises:
        ValueError: If the month index or the day is out of range
    """
    if not 1 <= day <= days_in_month(year, month_index):
        raise ValueError(
            f"Day must be between 1 and {days_in_month(year, month_index)}, got {day}"
        )
    return pendulum.date(year, month_index + 1, day)


def project_month(
    entries: list[TimelineEntry], year: int, month_index: int
) -> MonthProjection:
    """
    Map every day of a month to the stay covering it.

    If more than one stay covers a day, which can only happen when stored data
    breaks the no-overlap invariant, the first one in collection order wins.

    Args:
        entries: The reconciled entry collection, sorted by start date
        year: Calendar year
        month_index: 0 (January) to 11 (December)

    Returns:
        A MonthProjection with exactly days_in_month cells in ascending order

    Raises:
        ValueError: If month_index is outside 0-11
    """
    month_length = days_in_month(year, month_index)
    month_start = pendulum.date(year, month_index + 1, 1)
    month_end = pendulum.date(year, month_index + 1, month_length)

    month_stays = [
        stay
        for stay in stays(entries)
        if stay["start_date"] <= month_end and stay["end_date"] >= month_start
    ]

    cells: list[DayCell] = []
    legend: list[Location] = []
    for day in range(1, month_length + 1):
        date = pendulum.date(year, month_index + 1, day)
        cell: DayCell = {"day": day, "date": date, "location": None, "entry_id": None}
        for stay in month_stays:
            if stay["start_date"] <= date <= stay["end_date"]:
                location: Location = {"city": stay["city"], "country": stay["country"]}
                cell["location"] = location
                cell["entry_id"] = stay["id"]
                if location not in legend:
                    legend.append(location)
                break
        cells.append(cell)

    return {
        "year": year,
        "month_index": month_index,
        "leading_offset": leading_offset(year, month_index),
        "days": cells,
        "legend": legend,
    }


def project_year(entries: list[TimelineEntry], year: int) -> list[MonthProjection]:
    return [project_month(entries, year, month_index) for month_index in range(12)]
