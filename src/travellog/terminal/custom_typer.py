# SPDX-License-Identifier: MIT

import re
from typing import Optional

import click
import typer
import typer.core
from rich.console import Console
from rich.padding import Padding

from travellog.repository.auth import AUTH_REPO

console = Console()


def _show_signed_in_user(ctx: click.Context) -> None:
    """Show the signed-in user above help text, once per invocation chain"""
    if getattr(ctx, "_user_shown", False):
        return

    current: Optional[click.Context] = ctx
    while current is not None:
        current._user_shown = True  # type: ignore[attr-defined]
        current = current.parent

    try:
        user = AUTH_REPO.current_user()
    except OSError:
        # Config directory may not exist yet
        return

    console.print()
    if user is None:
        console.print(Padding("[dim]Not signed in[/dim]", (0, 0, 0, 1)))
    else:
        console.print(
            Padding(f"[bold plum1]Signed in as: {user}[/bold plum1]", (0, 0, 0, 1))
        )


class AliasedTyperGroup(typer.core.TyperGroup):
    """Custom TyperGroup that supports comma-separated command aliases"""

    _CMD_SPLIT_P = re.compile(r" ?, ?")

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        """Override to resolve aliases to the full command name"""
        cmd_name = self._group_cmd_name(cmd_name)
        return super().get_command(ctx, cmd_name)

    def _group_cmd_name(self, default_name: str) -> str:
        """Find the full command name if default_name is an alias"""
        for cmd in self.commands.values():
            name = cmd.name
            if name and default_name in self._CMD_SPLIT_P.split(name):
                return name
        return default_name


class UserAwareTyperGroup(AliasedTyperGroup):
    """Aliased group that prints the signed-in user above its help text"""

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return commands in a fixed order instead of registration order"""
        desired_order = [
            "auth, a",
            "stay, st",
            "flight, f",
            "entry, e",
            "day, d",
            "calendar, cal",
            "stats, s",
            "import, im",
            "export, ex",
            "config, c",
        ]

        result = [name for name in desired_order if name in self.commands]
        result.extend(name for name in self.commands if name not in result)
        return result

    def format_help(
        self, ctx: click.Context, formatter: click.formatting.HelpFormatter
    ) -> None:
        _show_signed_in_user(ctx)
        super().format_help(ctx, formatter)
