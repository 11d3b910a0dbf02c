# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum


class Location(TypedDict):
    city: str
    country: str


class DateRange(TypedDict):
    start: pendulum.Date
    end: pendulum.Date  # Inclusive
