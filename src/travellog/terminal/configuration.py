# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from travellog import configuration
from travellog.repository.configuration import CONFIGURATION_REPO
from travellog.terminal.custom_typer import AliasedTyperGroup
from travellog.terminal.validate import (
    validate_log_level,
    validate_overlap_policy,
    validate_threshold,
    validate_year_scope,
)

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _configuration_table(config: configuration.Configuration, title: str = "") -> Table:
    table = Table(title=title or None)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "show_header", "✓ Enabled" if config["show_header"] else "✗ Disabled"
    )
    table.add_row("residency_threshold_days", str(config["residency_threshold_days"]))
    table.add_row("overlap_policy", config["overlap_policy"])
    table.add_row("year_scope", config["year_scope"])
    table.add_row("default_city", config["default_city"] or "None")
    table.add_row("default_country", config["default_country"] or "None")
    table.add_row("log_level", config["log_level"])
    table.add_row("data_path", str(configuration.DATA_PATH))
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print(_configuration_table(config))

    yaml_library_type = "untested"
    try:
        from yaml import CDumper as Dumper  # noqa: F401
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set, s")
def set(
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above reports",
        ),
    ] = None,
    residency_threshold_days: Annotated[
        Optional[int],
        typer.Option(
            "--threshold",
            help="Days in a country that trigger the residency warning",
            callback=validate_threshold,
        ),
    ] = None,
    overlap_policy: Annotated[
        Optional[str],
        typer.Option(
            "--overlap-policy",
            help="replace: drop overlapped stays; clip: keep the parts outside the new range",
            callback=validate_overlap_policy,
        ),
    ] = None,
    year_scope: Annotated[
        Optional[str],
        typer.Option(
            "--year-scope",
            help="start: a stay counts in its start year; clip: split at year end",
            callback=validate_year_scope,
        ),
    ] = None,
    default_city: Annotated[
        Optional[str],
        typer.Option("--default-city", help="City used by `day fill`"),
    ] = None,
    default_country: Annotated[
        Optional[str],
        typer.Option("--default-country", help="Country used by `day fill`"),
    ] = None,
    remove_default_location: Annotated[
        bool,
        typer.Option(
            "--remove-default-location", help="Forget the default city and country"
        ),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="DEBUG, INFO, WARNING or ERROR",
            callback=validate_log_level,
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory for user data (None = platform data directory)",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to None (use the platform data directory)",
        ),
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    CONFIGURATION_REPO.update_config(
        show_header=show_header,
        residency_threshold_days=residency_threshold_days,
        overlap_policy=overlap_policy,  # type: ignore[arg-type]
        year_scope=year_scope,  # type: ignore[arg-type]
        default_city=default_city,
        default_country=default_country,
        remove_default_location=remove_default_location,
        log_level=log_level,
        data_path=data_path,
        remove_data_path=remove_data_path,
    )
    CONFIGURATION_REPO.flush()

    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_configuration_table(config, title="Updated Configuration"))
