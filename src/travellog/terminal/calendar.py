# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from travellog.service.calendar import project_month, project_year
from travellog.terminal.session import require_timeline
from travellog.terminal.validate import validate_month
from travellog.time import today
from travellog.view.views.calendar import calendar_month_view, calendar_year_view


def calendar(
    year: Annotated[
        Optional[int], typer.Option("--year", "-y", help="Defaults to this year")
    ] = None,
    month: Annotated[
        Optional[int],
        typer.Option(
            "--month",
            "-mo",
            help="Show a single month (1-12) with city names",
            callback=validate_month,
        ),
    ] = None,
) -> None:
    """Show the year, or one month, colored by where you stayed."""
    user, timeline = require_timeline()
    if year is None:
        year = today().year

    if month is None:
        calendar_year_view(user, project_year(timeline.entries, year))
    else:
        calendar_month_view(user, project_month(timeline.entries, year, month - 1))
