"""Shared CLI output formatters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from taskagent.server.models import DataPart, FilePart, TextPart, dump

if TYPE_CHECKING:
    from pydantic import BaseModel

    from taskagent.server.models import AgentCard, Artifact, GetTaskResult, Message, Part

console = Console()

_STATE_STYLES = {
    "completed": "green",
    "failed": "red",
    "canceled": "yellow",
    "working": "cyan",
    "submitted": "cyan",
    "input-required": "magenta",
}


def print_json(model: BaseModel) -> None:
    import json

    console.print_json(json.dumps(dump(model)))


def print_agent_card(card: AgentCard) -> None:
    """Pretty-print an agent card with a skills table."""
    console.print(f"\n[bold]{card.name}[/bold] v{card.version}")
    if card.description:
        console.print(f"  {card.description}")
    console.print(f"  URL: {card.url}")
    console.print(f"  Input modes: {', '.join(card.default_input_modes)}")
    console.print(f"  Output modes: {', '.join(card.default_output_modes)}")

    if not card.skills:
        console.print("[yellow]No skills advertised.[/yellow]")
        return

    table = Table(title="Skills")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("Tags")
    for skill in card.skills:
        table.add_row(skill.id, skill.name, _truncate(skill.description), ", ".join(skill.tags))
    console.print(table)


def print_state(task_id: str, state: str) -> None:
    style = _STATE_STYLES.get(state, "white")
    console.print(f"Task [bold]{task_id}[/bold]: [{style}]{state}[/{style}]")


def print_artifacts(artifacts: list[Artifact]) -> None:
    for artifact in artifacts:
        title = artifact.name or f"artifact {artifact.index}"
        console.print(f"\n[bold]{title}[/bold]")
        for part in artifact.parts:
            console.print(f"  {_render_part(part)}")


def print_task(task: GetTaskResult) -> None:
    """Pretty-print a ``tasks/get`` result."""
    print_state(task.id, task.status.state.value)
    console.print(f"  Session: {task.session_id}")
    console.print(f"  Updated: {task.status.timestamp}")
    if task.status.message is not None:
        console.print(f"  Status message: {escape(_truncate(task.status.message.text))}")
    print_artifacts(task.artifacts)
    if task.history:
        console.print("\n[bold]History:[/bold]")
        for message in task.history:
            console.print(f"  {escape(f'[{message.role}]')} {_render_message(message)}")


def _render_message(message: Message) -> str:
    return " ".join(_render_part(p) for p in message.parts)


def _render_part(part: Part) -> str:
    if isinstance(part, TextPart):
        return escape(_truncate(part.text))
    if isinstance(part, FilePart):
        return f"<file {part.file.name or part.file.uri or 'inline'}>"
    if isinstance(part, DataPart):
        return f"<data {', '.join(part.data)}>"
    return ""


def _truncate(text: str, limit: int = 80) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
