# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from travellog.service.entry import create_flight
from travellog.terminal.custom_typer import AliasedTyperGroup
from travellog.terminal.parse import parse_required_date
from travellog.terminal.session import require_timeline, user_action
from travellog.view.views import timeline as timeline_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    date: Annotated[str, typer.Argument(help="Flight date, YYYY-MM-DD")],
    city: Annotated[str, typer.Option("--city", "-c", help="Destination city")],
    country: Annotated[
        str, typer.Option("--country", "-co", help="Destination country")
    ],
    flight_number: Annotated[Optional[str], typer.Option("--number", "-n")] = None,
    departure: Annotated[
        Optional[str], typer.Option("--departure", "-d", help="e.g. FRA 14:50")
    ] = None,
    arrival: Annotated[
        Optional[str], typer.Option("--arrival", "-r", help="e.g. BER 15:55")
    ] = None,
    comments: Annotated[Optional[str], typer.Option("--comment", "-m")] = None,
) -> None:
    """Record a flight. Flights never count toward residency days."""
    user, timeline = require_timeline()

    with user_action():
        flight = create_flight(
            parse_required_date(date),
            city,
            country,
            flight_number=flight_number,
            departure=departure,
            arrival=arrival,
            comments=comments,
        )
        new_flight = timeline.add_flight(flight)

    timeline_report.single_entry_view(user, new_flight)
