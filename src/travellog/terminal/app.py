# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from travellog.logger import configure_logging
from travellog.terminal import auth, configuration, day, entry, flight, stay
from travellog.terminal.calendar import calendar
from travellog.terminal.custom_typer import UserAwareTyperGroup
from travellog.terminal.stats import stats
from travellog.terminal.transfer import export_entries, import_entries
from travellog.view import state as view_state

app = typer.Typer(
    cls=UserAwareTyperGroup,
    help="Travellog - Where you stayed, day by day, in the CLI",
    no_args_is_help=True,
)
app.add_typer(auth.app, name="auth, a", help="Sign in and out")
app.add_typer(stay.app, name="stay, st", help="Record stays")
app.add_typer(flight.app, name="flight, f", help="Record flights")
app.add_typer(entry.app, name="entry, e", help="List, show and delete entries")
app.add_typer(day.app, name="day, d", help="Edit the calendar day by day")
app.add_typer(configuration.app, name="config, c", help="View and change settings")
app.command(name="calendar, cal")(calendar)
app.command(name="stats, s")(stats)
app.command(name="import, im")(import_entries)
app.command(name="export, ex")(export_entries)


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-vb",
            help="Log debug output to stderr",
        ),
    ] = False,
) -> None:
    """
    Travellog - Where you stayed, day by day, in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if verbose:
        configure_logging("DEBUG")


def run() -> None:
    app()
