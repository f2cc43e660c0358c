"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from taskagent.cli_commands.serve import serve
    from taskagent.cli_commands.tasks import card, get, send

    cli.add_command(serve)
    cli.add_command(card)
    cli.add_command(send)
    cli.add_command(get)
