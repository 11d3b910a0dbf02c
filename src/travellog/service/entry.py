# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from travellog.model.entry import (
    ACCOMMODATION_TYPES,
    AccommodationType,
    EntryKind,
    Flight,
    Stay,
    TimelineEntry,
)
from travellog.model.location import DateRange, Location
from travellog.template.entry import get_flight_template, get_stay_template
from travellog.time import inclusive_day_count, now_utc


class EntryValidationError(Exception):
    """Raised when entry validation fails."""

    pass


def compute_days(start: pendulum.Date, end: pendulum.Date) -> int:
    """Inclusive number of calendar days from ``start`` to ``end``."""
    return inclusive_day_count(start, end)


def validate_location(city: Optional[str], country: Optional[str]) -> Location:
    """
    Strip and check a city/country pair.

    Raises:
        EntryValidationError: If either part is missing or blank
    """
    city = (city or "").strip()
    country = (country or "").strip()
    if not city:
        raise EntryValidationError("A city is required.")
    if not country:
        raise EntryValidationError("A country is required.")
    return {"city": city, "country": country}


def validate_date_range(start: pendulum.Date, end: pendulum.Date) -> DateRange:
    if start > end:
        raise EntryValidationError(
            f"Start date {start.to_date_string()} is after end date {end.to_date_string()}."
        )
    return {"start": start, "end": end}


def validate_accommodation_type(value: Optional[str]) -> AccommodationType:
    if value is None:
        return "other"
    if value not in ACCOMMODATION_TYPES:
        raise EntryValidationError(
            f"Unknown accommodation type: {value}. "
            f"Valid options: {', '.join(ACCOMMODATION_TYPES)}"
        )
    return value  # type: ignore[return-value]


def create_stay(
    start_date: pendulum.Date,
    end_date: Optional[pendulum.Date],
    city: Optional[str],
    country: Optional[str],
    accommodation_type: Optional[str] = None,
    comments: Optional[str] = None,
) -> Stay:
    """
    Build a validated Stay. A missing end date makes it a single-day stay.

    Raises:
        EntryValidationError: On a missing location, an unknown accommodation
            type or a start date after the end date
    """
    if end_date is None:
        end_date = start_date
    date_range = validate_date_range(start_date, end_date)
    location = validate_location(city, country)

    stay = get_stay_template()
    stay["start_date"] = date_range["start"]
    stay["end_date"] = date_range["end"]
    stay["city"] = location["city"]
    stay["country"] = location["country"]
    stay["accommodation_type"] = validate_accommodation_type(accommodation_type)
    stay["comments"] = comments or None
    stay["days"] = compute_days(stay["start_date"], stay["end_date"])
    return stay


def create_flight(
    date: pendulum.Date,
    city: Optional[str],
    country: Optional[str],
    flight_number: Optional[str] = None,
    departure: Optional[str] = None,
    arrival: Optional[str] = None,
    comments: Optional[str] = None,
) -> Flight:
    """
    Build a validated Flight. City and country name the destination.

    Raises:
        EntryValidationError: On a missing location
    """
    location = validate_location(city, country)

    flight = get_flight_template()
    flight["date"] = date
    flight["city"] = location["city"]
    flight["country"] = location["country"]
    flight["flight_number"] = flight_number or None
    flight["departure"] = departure or None
    flight["arrival"] = arrival or None
    flight["comments"] = comments or None
    return flight


def copy_stay_with_range(
    stay: Stay, start: pendulum.Date, end: pendulum.Date, id: Optional[str] = None
) -> Stay:
    """Copy ``stay`` onto a new range, recomputing ``days`` and ``updated``."""
    copied: Stay = {
        **stay,
        "start_date": start,
        "end_date": end,
        "days": compute_days(start, end),
        "updated": now_utc(),
    }
    if id is not None:
        copied["id"] = id
    return copied


def is_stay(entry: TimelineEntry) -> bool:
    return entry["kind"] == EntryKind.STAY


def entry_start(entry: TimelineEntry) -> pendulum.Date:
    if entry["kind"] == EntryKind.STAY:
        return entry["start_date"]  # type: ignore[typeddict-item]
    return entry["date"]  # type: ignore[typeddict-item]


def entry_end(entry: TimelineEntry) -> pendulum.Date:
    if entry["kind"] == EntryKind.STAY:
        return entry["end_date"]  # type: ignore[typeddict-item]
    return entry["date"]  # type: ignore[typeddict-item]


def normalize_stay(stay: Stay) -> Stay:
    """Default a missing end date to the start date and recompute ``days``."""
    if stay.get("end_date") is None:
        stay["end_date"] = stay["start_date"]
    stay["days"] = compute_days(stay["start_date"], stay["end_date"])
    return stay


def known_locations(entries: list[TimelineEntry]) -> list[Location]:
    """Distinct city/country pairs already used, sorted by city then country."""
    pairs = {(entry["city"], entry["country"]) for entry in entries}
    return [{"city": city, "country": country} for city, country in sorted(pairs)]
