# SPDX-License-Identifier: MIT

import pendulum

from travellog.configuration import DEFAULT_RESIDENCY_THRESHOLD_DAYS
from travellog.model.entry import TimelineEntry
from travellog.model.summary import Summary, YearScope
from travellog.service.overlap import stays
from travellog.time import days_in_year, inclusive_day_count


def summarize(
    entries: list[TimelineEntry],
    year: int,
    threshold_days: int = DEFAULT_RESIDENCY_THRESHOLD_DAYS,
    year_scope: YearScope = "start",
) -> Summary:
    """
    Total resident days per country for one calendar year.

    Only stays count; flights are transit. How a stay that crosses a year
    boundary is attributed depends on ``year_scope``:

    - ``start``: the whole stay counts in the year of its start date
    - ``clip``: only the days falling inside ``year`` count

    Args:
        entries: The reconciled entry collection
        year: Calendar year to report on
        threshold_days: Countries at or above this many days are flagged
        year_scope: "start" or "clip"

    Returns:
        A Summary; empty input yields zero totals
    """
    year_start = pendulum.date(year, 1, 1)
    year_end = pendulum.date(year, 12, 31)

    per_country: dict[str, int] = {}
    stay_count = 0

    for stay in stays(entries):
        if year_scope == "clip":
            first_day = max(stay["start_date"], year_start)
            last_day = min(stay["end_date"], year_end)
            if first_day > last_day:
                continue
            days = inclusive_day_count(first_day, last_day)
        else:
            if stay["start_date"].year != year:
                continue
            days = inclusive_day_count(stay["start_date"], stay["end_date"])

        stay_count += 1
        per_country[stay["country"]] = per_country.get(stay["country"], 0) + days

    ordered = dict(
        sorted(per_country.items(), key=lambda item: (-item[1], item[0]))
    )

    return {
        "year": year,
        "threshold_days": threshold_days,
        "total_days": sum(ordered.values()),
        "per_country": ordered,
        "over_threshold": {
            country for country, days in ordered.items() if days >= threshold_days
        },
        "stay_count": stay_count,
        "days_in_year": days_in_year(year),
    }


def share_of_year(days: int, year_days: int = 365) -> float:
    """Percentage of the year covered by ``days``."""
    if year_days <= 0:
        return 0.0
    return days / year_days * 100


def days_until_threshold(summary: Summary, country: str) -> int:
    """Days left before ``country`` reaches the threshold (0 once reached)."""
    return max(summary["threshold_days"] - summary["per_country"].get(country, 0), 0)
