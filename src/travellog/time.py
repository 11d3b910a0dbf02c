# SPDX-License-Identifier: MIT

import datetime
from typing import cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today() -> pendulum.Date:
    return pendulum.today("local").date()


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def date_to_iso_str(date: pendulum.Date) -> str:
    return date.to_date_string()


def date_from_str(date: str) -> pendulum.Date:
    """
    Parse a 'YYYY-MM-DD' string (a full ISO timestamp is accepted too) into a
    pendulum.Date. Any time-of-day component is discarded.

    Raises:
        ValueError: If the string is not a valid date
    """
    try:
        parsed = pendulum.parse(date.strip(), exact=True)
    except ValueError as e:
        raise ValueError(f"Invalid date '{date}': {e}") from e
    if isinstance(parsed, pendulum.DateTime):
        return parsed.date()
    if isinstance(parsed, pendulum.Date):
        return parsed
    raise ValueError(f"Invalid date '{date}': not a calendar date")


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def inclusive_day_count(start: datetime.date, end: datetime.date) -> int:
    return end.toordinal() - start.toordinal() + 1


def days_in_year(year: int) -> int:
    return 366 if pendulum.date(year, 1, 1).is_leap_year() else 365
