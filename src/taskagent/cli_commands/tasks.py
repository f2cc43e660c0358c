"""``taskagent card|send|get`` — talk to a running A2A server."""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING, TypeVar

import click

from taskagent.cli_commands._output import (
    console,
    print_agent_card,
    print_artifacts,
    print_json,
    print_state,
    print_task,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from taskagent.client.client import A2AClient

DEFAULT_URL = "http://localhost:3000"

_T = TypeVar("_T")

url_option = click.option("--url", default=DEFAULT_URL, show_default=True, help="Agent base URL.")
json_option = click.option("--json", "as_json", is_flag=True, help="Print raw JSON.")


def _run(url: str, action: Callable[[A2AClient], Awaitable[_T]]) -> _T:
    """Run *action* against a connected client; exit 1 on client errors."""
    from taskagent.client import A2AClient, A2AClientError, A2AResponseError

    async def _go() -> _T:
        async with A2AClient(url) as client:
            return await action(client)

    try:
        return asyncio.run(_go())
    except A2AResponseError as exc:
        console.print(f"[red]Error {exc.code}:[/red] {exc.message}")
        sys.exit(1)
    except A2AClientError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)


@click.command()
@url_option
@json_option
def card(url: str, as_json: bool) -> None:
    """Show the agent card of the server at URL."""
    agent_card = _run(url, lambda client: client.fetch_agent_card())
    if as_json:
        print_json(agent_card)
    else:
        print_agent_card(agent_card)


@click.command()
@click.argument("text")
@url_option
@click.option("--task-id", default=None, help="Continue an existing task instead of starting one.")
@json_option
def send(text: str, url: str, task_id: str | None, as_json: bool) -> None:
    """Send TEXT to the agent as a tasks/send request."""
    result = _run(url, lambda client: client.send_text(text, task_id=task_id))
    if as_json:
        print_json(result)
        return
    print_state(result.id, result.status.value)
    console.print(f"  Session: {result.session_id}")
    print_artifacts(result.artifacts)


@click.command()
@click.argument("task_id")
@url_option
@click.option(
    "--history-length",
    default=None,
    type=click.IntRange(min=0),
    help="Include the last N history messages.",
)
@json_option
def get(task_id: str, url: str, history_length: int | None, as_json: bool) -> None:
    """Show the status and artifacts of TASK_ID."""
    task = _run(url, lambda client: client.get_task(task_id, history_length=history_length))
    if as_json:
        print_json(task)
    else:
        print_task(task)
