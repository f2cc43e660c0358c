"""taskagent CLI entrypoint."""

from __future__ import annotations

import click

from taskagent import __version__


@click.group()
@click.version_option(version=__version__, prog_name="taskagent")
def main() -> None:
    """taskagent — A2A task server and client."""


# Register subcommands
from taskagent.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
