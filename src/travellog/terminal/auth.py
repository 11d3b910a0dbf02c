# SPDX-License-Identifier: MIT

import typer

from travellog import configuration
from travellog.repository.auth import AUTH_REPO
from travellog.service.session import sign_in, sign_out
from travellog.terminal.custom_typer import AliasedTyperGroup
from travellog.terminal.session import fail

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("login, li", no_args_is_help=True)
def login(name: str) -> None:
    """Sign in; entries are kept separately per user."""
    try:
        sign_in(name)
    except ValueError as e:
        fail(str(e))
    typer.echo(f"Signed in as {name.strip()}")


@app.command("logout, lo")
def logout() -> None:
    """Sign out and drop the loaded entries."""
    user = AUTH_REPO.current_user()
    sign_out()
    if user is None:
        typer.echo("Not signed in")
    else:
        typer.echo(f"Signed out {user}")


@app.command("whoami, w")
def whoami() -> None:
    """Show the signed-in user and where their entries are stored."""
    user = AUTH_REPO.current_user()
    if user is None:
        typer.echo("Not signed in")
        return
    typer.echo(user)
    typer.echo(str(configuration.user_entries_dir(user)))
