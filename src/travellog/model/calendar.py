# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from travellog.model.entry import EntryId
from travellog.model.location import Location


class DayCell(TypedDict):
    day: int  # 1..days_in_month
    date: pendulum.Date
    location: Optional[Location]
    entry_id: Optional[EntryId]


class MonthProjection(TypedDict):
    year: int
    month_index: int  # 0..11
    leading_offset: int  # Empty cells before day 1, Monday-first
    days: list[DayCell]
    legend: list[Location]
