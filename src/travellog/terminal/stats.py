# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from travellog.model.summary import YearScope
from travellog.repository.configuration import CONFIGURATION_REPO
from travellog.service.aggregate import summarize
from travellog.terminal.session import require_timeline
from travellog.terminal.validate import validate_threshold, validate_year_scope
from travellog.time import today
from travellog.view.views.statistics import statistics_view


def stats(
    year: Annotated[
        Optional[int], typer.Option("--year", "-y", help="Defaults to this year")
    ] = None,
    threshold: Annotated[
        Optional[int],
        typer.Option(
            "--threshold",
            "-th",
            help="Residency limit in days (defaults to residency_threshold_days)",
            callback=validate_threshold,
        ),
    ] = None,
    scope: Annotated[
        Optional[str],
        typer.Option(
            "--scope",
            "-sc",
            help="start: a stay counts in its start year; clip: only days inside the year",
            callback=validate_year_scope,
        ),
    ] = None,
    top: Annotated[
        int, typer.Option("--top", "-n", help="Only list the N busiest countries")
    ] = 0,
) -> None:
    """Show days per country for a year and flag the residency threshold."""
    user, timeline = require_timeline()
    config = CONFIGURATION_REPO.get_config()

    year_scope: YearScope = scope if scope is not None else config["year_scope"]  # type: ignore[assignment]
    summary = summarize(
        timeline.entries,
        year if year is not None else today().year,
        threshold_days=(
            threshold if threshold is not None else config["residency_threshold_days"]
        ),
        year_scope=year_scope,
    )
    statistics_view(user, summary, top=top)
