# SPDX-License-Identifier: MIT

from contextlib import contextmanager
from typing import Iterator, NoReturn

import typer
from rich.console import Console

from travellog.repository.auth import AUTH_REPO
from travellog.repository.entry import PersistenceError
from travellog.service.entry import EntryValidationError
from travellog.service.overlap import OverlapError
from travellog.service.session import open_timeline
from travellog.service.timeline import Timeline
from travellog.service.transfer import MalformedImportError

error_console = Console(stderr=True)


def fail(message: str) -> NoReturn:
    error_console.print(f"[bold red]{message}[/bold red]")
    raise typer.Exit(1)


def require_timeline() -> tuple[str, Timeline]:
    """
    Open the signed-in user's timeline.

    With nobody signed in there is no data to show: a hint is printed and the
    command exits successfully.
    """
    try:
        timeline = open_timeline()
    except PersistenceError as e:
        fail(f"Could not load entries: {e}")
    user = AUTH_REPO.current_user()
    if timeline is None or user is None:
        typer.echo("No data available. Sign in with `travellog auth login NAME`.")
        raise typer.Exit(0)
    return user, timeline


@contextmanager
def user_action() -> Iterator[None]:
    """Turn domain errors raised by one user action into a notification."""
    try:
        yield
    except EntryValidationError as e:
        fail(f"Invalid entry: {e}")
    except OverlapError as e:
        fail(f"Rejected, stays would overlap: {e}")
    except MalformedImportError as e:
        fail(f"Import aborted: {e}")
    except PersistenceError as e:
        fail(f"Nothing was changed, saving failed: {e}")
