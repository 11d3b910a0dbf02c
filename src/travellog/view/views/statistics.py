# SPDX-License-Identifier: MIT

from rich import box
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from travellog.color import OK_COLOR, WARNING_COLOR, color_for_country
from travellog.model.summary import Summary
from travellog.service.aggregate import days_until_threshold, share_of_year
from travellog.view.util import format_days
from travellog.view.views.header import header

BAR_WIDTH = 30


def _bar(days: int, year_days: int, color: str) -> Text:
    filled = min(round(days / year_days * BAR_WIDTH), BAR_WIDTH) if year_days else 0
    bar = Text()
    bar.append("█" * filled, style=color)
    bar.append("░" * (BAR_WIDTH - filled), style="bright_black")
    return bar


def statistics_view(user: str, summary: Summary, top: int = 0) -> None:
    """
    Display day totals for a year with the residency threshold warning.

    Args:
        user: The signed-in user's name
        summary: Output of summarize()
        top: Only list this many countries (0 lists all)
    """
    header(user, f"statistics {summary['year']}")

    console = Console()
    year_days = summary["days_in_year"]
    over = summary["over_threshold"]

    total_panel = Panel(
        Text.assemble(
            (str(summary["total_days"]), "bold"),
            f"\nof {year_days} days ({share_of_year(summary['total_days'], year_days):.1f}%)",
        ),
        title=f"Total days {summary['year']}",
        width=28,
    )
    countries_panel = Panel(
        Text.assemble(
            (str(len(summary["per_country"])), "bold"), "\ncountries visited"
        ),
        title="Countries",
        width=28,
    )
    stays_panel = Panel(
        Text.assemble((str(summary["stay_count"]), "bold"), "\nstays recorded"),
        title="Stays",
        width=28,
    )
    if over:
        threshold_text = Text.assemble(
            (str(len(over)), f"bold {WARNING_COLOR}"),
            (" countries at or over the limit", WARNING_COLOR),
        )
    else:
        threshold_text = Text.assemble(
            ("✓", f"bold {OK_COLOR}"),
            f" all countries under {summary['threshold_days']} days",
        )
    threshold_panel = Panel(
        threshold_text,
        title=f"{summary['threshold_days']}-day rule",
        border_style=WARNING_COLOR if over else "",
        width=28,
    )
    console.print(Columns([total_panel, countries_panel, stays_panel, threshold_panel]))

    if not summary["per_country"]:
        console.print("[dim]No stays recorded for this year.[/dim]")
        return

    country_table = Table(box=box.SIMPLE)
    country_table.add_column("country")
    country_table.add_column("days", justify="right")
    country_table.add_column("share", justify="right")
    country_table.add_column("")
    country_table.add_column("status")

    countries = list(summary["per_country"].items())
    if top > 0:
        countries = countries[:top]

    for country, days in countries:
        color = color_for_country(country)
        if country in over:
            status = f"[bold {WARNING_COLOR}]over threshold[/bold {WARNING_COLOR}]"
        else:
            status = (
                f"[dim]{format_days(days_until_threshold(summary, country))} left[/dim]"
            )
        country_table.add_row(
            f"[{color}]{country}[/{color}]",
            str(days),
            f"{share_of_year(days, year_days):.1f}%",
            _bar(days, year_days, color),
            status,
        )

    console.print(country_table)
