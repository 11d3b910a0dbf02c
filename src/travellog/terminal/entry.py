# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from travellog.model.entry import EntryId, EntryKind
from travellog.repository.id_map import ID_MAP_REPO
from travellog.service.entry import entry_end, entry_start
from travellog.terminal.custom_typer import AliasedTyperGroup
from travellog.terminal.parse import parse_id_list
from travellog.terminal.session import fail, require_timeline, user_action
from travellog.view.views import timeline as timeline_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _real_id(synthetic_id: int) -> EntryId:
    try:
        return ID_MAP_REPO.get_real_id(synthetic_id)
    except KeyError:
        fail(f"No entry with id {synthetic_id}; run `travellog entry list` first")


@app.command("list, ls")
def list_entries(
    year: Annotated[
        Optional[int], typer.Option("--year", "-y", help="Only entries touching this year")
    ] = None,
    kind: Annotated[
        Optional[str], typer.Option("--kind", "-k", help="stay or flight")
    ] = None,
) -> None:
    """Show the timeline in chronological order."""
    user, timeline = require_timeline()
    if kind is not None and kind not in (EntryKind.STAY, EntryKind.FLIGHT):
        raise typer.BadParameter("Kind must be 'stay' or 'flight'")

    entries = timeline.get_entries()
    if year is not None:
        entries = [
            e for e in entries if entry_start(e).year <= year <= entry_end(e).year
        ]
    if kind is not None:
        entries = [e for e in entries if e["kind"] == kind]

    ID_MAP_REPO.clear_ids()
    timeline_report.timeline_view(user, entries)


@app.command("show, sh", no_args_is_help=True)
def show(id: int) -> None:
    """Show one entry by the id printed in the last listing."""
    user, timeline = require_timeline()
    try:
        entry = timeline.get_entry(_real_id(id))
    except KeyError:
        fail(f"Entry {id} no longer exists")
    timeline_report.single_entry_view(user, entry)


@app.command("delete, del", no_args_is_help=True)
def delete(
    ids: Annotated[str, typer.Argument(help="e.g. 3, 1,4 or 2-5")],
) -> None:
    """Delete entries by the ids printed in the last listing."""
    _, timeline = require_timeline()

    real_ids = [_real_id(synthetic_id) for synthetic_id in parse_id_list(ids)]
    with user_action():
        try:
            deleted = timeline.delete_entries(real_ids)
        except KeyError:
            fail("Entry no longer exists; run `travellog entry list` again")

    for entry in deleted:
        typer.echo(
            f"Deleted {entry['kind']} {entry['city']}, {entry['country']} "
            f"({entry_start(entry).to_date_string()})"
        )
