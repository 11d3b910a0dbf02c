# SPDX-License-Identifier: MIT

import pendulum
from rich import box
from rich.columns import Columns
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from travellog.color import EMPTY_DAY_COLOR, color_for_country
from travellog.model.calendar import MonthProjection
from travellog.time import today
from travellog.view.util import truncate
from travellog.view.views.header import header

WEEKDAY_NAMES = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]


def calendar_year_view(user: str, projections: list[MonthProjection]) -> None:
    """
    Display twelve compact month grids, each day colored by its country.

    Args:
        user: The signed-in user's name
        projections: Output of project_year()
    """
    year = projections[0]["year"] if projections else today().year
    header(user, f"calendar {year}")

    console = Console()
    console.print(f"\n[bold]{year}[/bold]\n")

    month_panels: list[RenderableType] = []
    for projection in projections:
        month_panels.append(_render_month_panel(projection, cell_width=2))

    console.print(Columns(month_panels, equal=False, expand=False, padding=(0, 1)))
    console.print()


def calendar_month_view(
    user: str, projection: MonthProjection, cell_width: int = 12
) -> None:
    """
    Display one month with the city written into each covered day.

    Args:
        user: The signed-in user's name
        projection: Output of project_month()
        cell_width: Width of each day cell in characters (defaults to 12)
    """
    month_start = pendulum.date(projection["year"], projection["month_index"] + 1, 1)
    header(user, f"calendar {month_start.format('MMMM YYYY')}")

    console = Console()
    console.print(f"\n[bold]{month_start.format('MMMM YYYY')}[/bold]\n")
    console.print(_render_month_grid(projection, cell_width, show_city=True))
    console.print(_render_legend(projection))
    console.print()


def _render_month_panel(projection: MonthProjection, cell_width: int) -> Panel:
    month_name = pendulum.date(
        projection["year"], projection["month_index"] + 1, 1
    ).format("MMMM")
    grid = _render_month_grid(projection, cell_width, show_city=False)
    body: RenderableType = grid
    if projection["legend"]:
        body = Group(grid, _render_legend(projection))
    return Panel(
        body,
        title=month_name,
        border_style="bright_black",
        padding=(0, 1),
    )


def _render_month_grid(
    projection: MonthProjection, cell_width: int, show_city: bool
) -> Table:
    """
    Render a month as a Monday-first grid.

    Args:
        projection: The month to render
        cell_width: Width of each day cell in characters
        show_city: Whether to print the city under each day number

    Returns:
        A Table containing the month's calendar grid
    """
    table = Table(
        box=box.SIMPLE if show_city else None,
        show_header=True,
        padding=(0, 1) if show_city else (0, 0, 0, 1),
    )

    for day_name in WEEKDAY_NAMES:
        table.add_column(
            day_name, style="bold", width=cell_width, no_wrap=not show_city
        )

    current_day = today()

    week_cells: list[Text] = [Text(" ") for _ in range(projection["leading_offset"])]
    for cell in projection["days"]:
        cell_content = Text()
        location = cell["location"]
        if location is not None:
            style = f"bold white on {color_for_country(location['country'])}"
        else:
            style = EMPTY_DAY_COLOR
        if cell["date"] == current_day:
            style = f"{style} underline"

        cell_content.append(f"{cell['day']:2d}", style=style)
        if show_city:
            cell_content.append("\n")
            if location is not None:
                cell_content.append(
                    truncate(location["city"], cell_width),
                    style=color_for_country(location["country"]),
                )

        week_cells.append(cell_content)
        if len(week_cells) == 7:
            table.add_row(*week_cells)
            week_cells = []

    if week_cells:
        week_cells.extend(Text(" ") for _ in range(7 - len(week_cells)))
        table.add_row(*week_cells)

    return table


def _render_legend(projection: MonthProjection) -> Text:
    legend = Text()
    for location in projection["legend"]:
        legend.append("● ", style=color_for_country(location["country"]))
        legend.append(f"{location['city']}, {location['country']}\n", style="dim")
    legend.rstrip()
    return legend
