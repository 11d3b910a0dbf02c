# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer

from travellog.service.transfer import export_to_directory, parse_import_payload
from travellog.terminal.session import fail, require_timeline, user_action


def import_entries(
    file: Annotated[
        Path,
        typer.Argument(
            help="A JSON array as written by `travellog export`",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
) -> None:
    """
    Add entries from a JSON file.

    Items missing date, type, country or city are skipped. Imported stays
    overwrite whatever they overlap, in file order.
    """
    _, timeline = require_timeline()

    try:
        payload = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        fail(f"Could not read {file}: {e}")

    with user_action():
        result = parse_import_payload(payload)
        timeline.add_entries(result["entries"])

    typer.echo(
        f"Imported {len(result['entries'])} entries, skipped {result['skipped']}"
    )


def export_entries(
    out: Annotated[
        Optional[Path],
        typer.Option(
            "--out",
            "-o",
            help="Directory to write into (defaults to the current directory)",
            file_okay=False,
        ),
    ] = None,
) -> None:
    """Write every entry to travel-entries-YYYY-MM-DD.json."""
    _, timeline = require_timeline()

    try:
        path = export_to_directory(
            timeline.get_entries(), out if out is not None else Path.cwd()
        )
    except OSError as e:
        fail(f"Could not export: {e}")

    typer.echo(f"Exported {len(timeline.entries)} entries to {path}")
