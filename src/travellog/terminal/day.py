# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from travellog.color import color_for_country
from travellog.model.location import DateRange, Location
from travellog.repository.configuration import CONFIGURATION_REPO
from travellog.service.entry import entry_start, is_stay, known_locations
from travellog.service.overlap import stay_covering
from travellog.service.timeline import Timeline, year_range
from travellog.terminal.custom_typer import AliasedTyperGroup
from travellog.terminal.parse import parse_required_date, resolve_day
from travellog.terminal.session import fail, require_timeline, user_action
from travellog.terminal.validate import validate_accommodation_type, validate_month
from travellog.time import date_to_display_str, today
from travellog.view.views import timeline as timeline_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DateArgument = Annotated[
    Optional[str], typer.Argument(help="YYYY-MM-DD, today, t, y, o or an offset")
]
YearOption = Annotated[
    Optional[int], typer.Option("--year", "-y", help="Defaults to this year")
]
MonthOption = Annotated[
    Optional[int],
    typer.Option("--month", "-mo", help="1-12", callback=validate_month),
]
DayOption = Annotated[Optional[int], typer.Option("--day", "-d", help="Day of month")]
ToOption = Annotated[
    Optional[str], typer.Option("--to", "-t", help="Last day of the range, inclusive")
]


def _range(
    date: Optional[str],
    year: Optional[int],
    month: Optional[int],
    day: Optional[int],
    to: Optional[str],
) -> DateRange:
    start = resolve_day(date, year, month, day)
    end = parse_required_date(to) if to is not None else start
    return {"start": start, "end": end}


def _describe(date_range: DateRange) -> str:
    if date_range["start"] == date_range["end"]:
        return date_range["start"].to_date_string()
    return f"{date_range['start'].to_date_string()}..{date_range['end'].to_date_string()}"


def _pick_location(
    timeline: Timeline,
    city: Optional[str],
    country: Optional[str],
    place: Optional[int],
) -> Location:
    if place is None:
        if not city or not country:
            raise typer.BadParameter(
                "Give --city and --country, or --place N from `travellog day places`"
            )
        return {"city": city, "country": country}

    locations = known_locations(timeline.entries)
    if not 1 <= place <= len(locations):
        raise typer.BadParameter(
            f"No place {place}; `travellog day places` lists {len(locations)}"
        )
    return locations[place - 1]


@app.command("set, s")
def set(
    date: DateArgument = None,
    city: Annotated[Optional[str], typer.Option("--city", "-c")] = None,
    country: Annotated[Optional[str], typer.Option("--country", "-co")] = None,
    place: Annotated[
        Optional[int],
        typer.Option("--place", "-p", help="Number from `travellog day places`"),
    ] = None,
    year: YearOption = None,
    month: MonthOption = None,
    day: DayOption = None,
    to: ToOption = None,
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
    """
    Put a day, or a range of days, in one city.

    Address the day as DATE or as a calendar cell with --month and --day. Name
    the city with --city and --country, or reuse a known one with --place.
    """
    user, timeline = require_timeline()
    date_range = _range(date, year, month, day, to)
    location = _pick_location(timeline, city, country, place)

    with user_action():
        stay = timeline.set_location(
            date_range,
            location,
            accommodation_type=accommodation,
            comments=comments,
        )

    timeline_report.single_entry_view(user, stay)


@app.command("places, p")
def places() -> None:
    """List the cities already in your entries, numbered for `day set --place`."""
    _, timeline = require_timeline()

    locations = known_locations(timeline.entries)
    if not locations:
        typer.echo("No places yet")
        return

    table = Table(box=box.SIMPLE)
    table.add_column("place", justify="right")
    table.add_column("city")
    table.add_column("country")
    for number, location in enumerate(locations, start=1):
        color = color_for_country(location["country"])
        table.add_row(
            str(number), location["city"], f"[{color}]{location['country']}[/{color}]"
        )
    Console().print(table)


@app.command("clear, c")
def clear(
    date: DateArgument = None,
    year: YearOption = None,
    month: MonthOption = None,
    day: DayOption = None,
    to: ToOption = None,
) -> None:
    """Remove stays from a day or a range of days. Flights are kept."""
    _, timeline = require_timeline()
    date_range = _range(date, year, month, day, to)

    with user_action():
        reconciliation = timeline.delete_range(date_range)

    if not reconciliation["removed"] and not reconciliation["upserted"]:
        typer.echo(f"Nothing recorded on {_describe(date_range)}")
        return
    typer.echo(
        f"Cleared {_describe(date_range)}: removed {len(reconciliation['removed'])}, "
        f"trimmed {len(reconciliation['upserted'])}"
    )


@app.command("show, sh")
def show(
    date: DateArgument = None,
    year: YearOption = None,
    month: MonthOption = None,
    day: DayOption = None,
) -> None:
    """Show where you were on a day."""
    user, timeline = require_timeline()
    if date is None and month is None and day is None:
        date = "today"
    the_day = resolve_day(date, year, month, day)

    stay = stay_covering(timeline.entries, the_day)
    flights = [
        entry
        for entry in timeline.get_entries()
        if not is_stay(entry) and entry_start(entry) == the_day
    ]

    console = Console()
    if stay is None:
        console.print(f"[dim]{date_to_display_str(the_day)}: no stay recorded[/dim]")
    else:
        console.print(
            f"{date_to_display_str(the_day)}: [bold]{stay['city']}, {stay['country']}[/bold]"
        )
    if stay is not None or flights:
        matched = ([timeline.get_entry(stay["id"])] if stay is not None else []) + flights
        timeline_report.timeline_view(user, matched)


@app.command("fill, f")
def fill(
    year: YearOption = None,
    start: Annotated[
        Optional[str], typer.Option("--from", "-fr", help="First day to fill")
    ] = None,
    end: Annotated[Optional[str], typer.Option("--to", "-t", help="Last day to fill")] = None,
    city: Annotated[
        Optional[str], typer.Option("--city", "-c", help="Defaults to default_city")
    ] = None,
    country: Annotated[
        Optional[str],
        typer.Option("--country", "-co", help="Defaults to default_country"),
    ] = None,
) -> None:
    """Cover every day without a stay with a location, leaving stays alone."""
    user, timeline = require_timeline()
    config = CONFIGURATION_REPO.get_config()

    location: Location = {
        "city": city or config["default_city"] or "",
        "country": country or config["default_country"] or "",
    }
    if not location["city"] or not location["country"]:
        fail(
            "No location given; pass --city and --country or set "
            "default_city and default_country with `travellog config set`"
        )

    if start is not None or end is not None:
        if start is None or end is None:
            raise typer.BadParameter("Give both --from and --to")
        date_range: DateRange = {
            "start": parse_required_date(start),
            "end": parse_required_date(end),
        }
    else:
        date_range = year_range(year if year is not None else today().year)

    with user_action():
        created = timeline.fill_gaps(date_range, location)

    if not created:
        typer.echo(f"No gaps in {_describe(date_range)}")
        return
    timeline_report.timeline_view(user, created)  # type: ignore[arg-type]
