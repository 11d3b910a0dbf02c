# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from travellog.service.calendar import date_for_cell
from travellog.time import date_from_str, today


def parse_date(date_param: Optional[str]) -> Optional[pendulum.Date]:
    """
    Parse a calendar date given on the command line.

    Accepts YYYY-MM-DD, a signed day offset from today (e.g. "1", "-3"),
    "today"/"t", "yesterday"/"y" and "tomorrow"/"o".

    Raises:
        typer.BadParameter: If the value matches none of these forms
    """
    if date_param is None:
        return None

    date = str(date_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}", date):
        try:
            return date_from_str(date)
        except ValueError as e:
            raise typer.BadParameter(str(e))

    # Relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        return today().add(days=int(date))

    if date == "today" or date == "t":
        return today()
    if date == "yesterday" or date == "y":
        return today().subtract(days=1)
    if date == "tomorrow" or date == "o":
        return today().add(days=1)
    raise typer.BadParameter(f"Incorrect date format: '{date}' (expected YYYY-MM-DD)")


def parse_required_date(date_param: Optional[str]) -> pendulum.Date:
    """
    Like parse_date, but a missing value is an error too.

    Raises:
        typer.BadParameter: If the value is missing or not a date
    """
    parsed = parse_date(date_param)
    if parsed is None:
        raise typer.BadParameter("A date is required")
    return parsed


def resolve_day(
    date_param: Optional[str],
    year: Optional[int],
    month: Optional[int],
    day: Optional[int],
) -> pendulum.Date:
    """
    Resolve either a date argument or a calendar cell (--month/--day, with an
    optional --year) into a date. Months are 1-based on the command line.

    Raises:
        typer.BadParameter: If neither form is given or the cell does not exist
    """
    if date_param is not None:
        return parse_required_date(date_param)

    if month is None or day is None:
        raise typer.BadParameter("Give a DATE or both --month and --day")
    if year is None:
        year = today().year
    try:
        return date_for_cell(year, month - 1, day)
    except ValueError as e:
        raise typer.BadParameter(str(e))


def parse_id_list(id_param: str) -> list[int]:
    """
    Parse a single ID, comma-separated list of IDs, or ranges of IDs.

    Args:
        id_param: A single ID (e.g., "1"), comma-separated list (e.g., "1,2,3"),
                  range (e.g., "1-5"), or mixed (e.g., "1,3-5,8")

    Returns:
        List of integer IDs (sorted and deduplicated)

    Raises:
        typer.BadParameter: If any ID is not a valid integer or range format is invalid
    """
    id_strings = [s.strip() for s in id_param.split(",")]

    ids: list[int] = []
    for id_str in id_strings:
        if not id_str:
            continue

        if "-" in id_str:
            range_parts = id_str.split("-")
            if len(range_parts) != 2:
                raise typer.BadParameter(
                    f"Invalid range format: '{id_str}' (expected format: 'start-end')"
                )

            try:
                start = int(range_parts[0].strip())
                end = int(range_parts[1].strip())
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid range: '{id_str}' contains non-integer values"
                )

            if start > end:
                raise typer.BadParameter(
                    f"Invalid range: '{id_str}' (start must be <= end)"
                )

            ids.extend(range(start, end + 1))
        else:
            try:
                ids.append(int(id_str))
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid ID: '{id_str}' is not a valid integer"
                )

    if len(ids) == 0:
        raise typer.BadParameter("No valid IDs provided")

    return sorted(set(ids))
