# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from travellog.color import FLIGHT_COLOR, color_for_country
from travellog.model.entry import EntryKind, Flight, Stay, TimelineEntry
from travellog.repository.id_map import ID_MAP_REPO
from travellog.time import date_to_display_str
from travellog.view.util import accommodation_label, format_days
from travellog.view.views.header import header


def _details(entry: TimelineEntry) -> str:
    if entry["kind"] == EntryKind.STAY:
        stay: Stay = entry  # type: ignore[assignment]
        return accommodation_label(stay["accommodation_type"])
    flight: Flight = entry  # type: ignore[assignment]
    route = " → ".join(p for p in (flight["departure"], flight["arrival"]) if p)
    return " ".join(p for p in (flight["flight_number"], route) if p)


def timeline_view(
    user: str,
    entries: list[TimelineEntry],
    columns: list[str] = [
        "id",
        "kind",
        "start",
        "end",
        "city",
        "country",
        "details",
        "days",
        "comments",
    ],
    use_color: bool = True,
) -> None:
    """Display entries in chronological order as a table."""
    header(user, f"timeline ({len(entries)})")

    timeline_table = Table(box=box.SIMPLE)
    for column in columns:
        timeline_table.add_column(column)

    for entry in entries:
        is_stay = entry["kind"] == EntryKind.STAY
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = str(ID_MAP_REPO.associate_id(entry["id"]))
            elif column == "kind":
                column_value = "✈ flight" if not is_stay else "⌂ stay"
            elif column == "start":
                column_value = date_to_display_str(
                    entry["start_date"] if is_stay else entry["date"]  # type: ignore[typeddict-item]
                )
            elif column == "end":
                if is_stay:
                    column_value = date_to_display_str(entry["end_date"])  # type: ignore[typeddict-item]
            elif column == "details":
                column_value = _details(entry)
            elif column == "days":
                if is_stay:
                    column_value = format_days(entry["days"])  # type: ignore[typeddict-item]
            elif entry.get(column) is not None:
                column_value = str(entry[column])  # type: ignore[literal-required]

            if use_color and column in ("kind", "country"):
                color = color_for_country(entry["country"]) if is_stay else FLIGHT_COLOR
                column_value = f"[{color}]{column_value}[/{color}]"

            row.append(column_value)
        timeline_table.add_row(*row)

    console = Console()
    if not entries:
        console.print("[dim]No entries yet.[/dim]")
        return
    console.print(timeline_table)


def single_entry_view(user: str, entry: TimelineEntry) -> None:
    """Display every property of a single entry."""
    header(user, entry["kind"])

    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("id", str(ID_MAP_REPO.associate_id(entry["id"])))
    entry_table.add_row("kind", entry["kind"])
    if entry["kind"] == EntryKind.STAY:
        stay: Stay = entry  # type: ignore[assignment]
        entry_table.add_row("start", date_to_display_str(stay["start_date"]))
        entry_table.add_row("end", date_to_display_str(stay["end_date"]))
        entry_table.add_row("days", format_days(stay["days"]))
        entry_table.add_row(
            "accommodation", accommodation_label(stay["accommodation_type"])
        )
    else:
        flight: Flight = entry  # type: ignore[assignment]
        entry_table.add_row("date", date_to_display_str(flight["date"]))
        entry_table.add_row("flight_number", flight["flight_number"] or "")
        entry_table.add_row("departure", flight["departure"] or "")
        entry_table.add_row("arrival", flight["arrival"] or "")
    entry_table.add_row("city", entry["city"])
    entry_table.add_row("country", entry["country"])
    entry_table.add_row("comments", entry["comments"] or "")
    entry_table.add_row("updated", entry["updated"].in_tz("local").format("YYYY-MM-DD HH:mm"))

    console = Console()
    console.print(entry_table)
