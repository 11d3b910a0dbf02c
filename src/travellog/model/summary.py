# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

YearScope = Literal["start", "clip"]


class Summary(TypedDict):
    year: int
    threshold_days: int
    total_days: int
    per_country: dict[str, int]  # Ordered by days descending, then name
    over_threshold: set[str]
    stay_count: int
    days_in_year: int
