# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from travellog.service.entry import create_stay
from travellog.terminal.custom_typer import AliasedTyperGroup
from travellog.terminal.parse import parse_date, parse_required_date
from travellog.terminal.session import require_timeline, user_action
from travellog.terminal.validate import validate_accommodation_type
from travellog.view.views import timeline as timeline_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    start: Annotated[str, typer.Argument(help="Arrival date, YYYY-MM-DD")],
    city: Annotated[str, typer.Option("--city", "-c")],
    country: Annotated[str, typer.Option("--country", "-co")],
    end: Annotated[
        Optional[str],
        typer.Option("--to", "-t", help="Departure date; omit for a single day"),
    ] = None,
    accommodation: Annotated[
        Optional[str],
        typer.Option(
            "--accommodation",
            "-a",
            help="airbnb, hotel, friend, other",
            callback=validate_accommodation_type,
        ),
    ] = None,
    comments: Annotated[Optional[str], typer.Option("--comment", "-m")] = None,
) -> None:
    """Record a stay. Stays it overlaps are replaced (or clipped, per config)."""
    user, timeline = require_timeline()

    with user_action():
        stay = create_stay(
            parse_required_date(start),
            parse_date(end),
            city,
            country,
            accommodation_type=accommodation,
            comments=comments,
        )
        new_stay = timeline.add_stay(stay)

    timeline_report.single_entry_view(user, new_stay)
