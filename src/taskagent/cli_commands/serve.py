"""``taskagent serve`` — run the A2A task server."""

from __future__ import annotations

import logging
import sys

import click

from taskagent.cli_commands._output import console


@click.command()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Settings YAML file.",
)
@click.option("--host", default=None, help="Interface to bind (overrides config).")
@click.option("--port", default=None, type=int, help="Port to listen on (overrides config).")
@click.option("--model", default=None, help="LiteLLM model name, e.g. gemini/gemini-2.0-flash.")
@click.option("--max-steps", default=None, type=click.IntRange(min=1), help="Tool-calling step budget.")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="info",
    help="Logging level.",
)
@click.option("--telemetry", is_flag=True, help="Export OpenTelemetry spans to the console.")
@click.option(
    "--otlp-endpoint",
    default=None,
    help="Also export OpenTelemetry spans to this OTLP/gRPC collector.",
)
def serve(
    config_path: str | None,
    host: str | None,
    port: int | None,
    model: str | None,
    max_steps: int | None,
    log_level: str,
    telemetry: bool,
    otlp_endpoint: str | None,
) -> None:
    """Serve the agent card and the JSON-RPC task endpoint."""
    import uvicorn

    from taskagent.config import ConfigError, load_settings
    from taskagent.server.app import create_app

    try:
        settings = load_settings(config_path)
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if model is not None:
        settings.model.model = model
    if max_steps is not None:
        settings.max_steps = max_steps

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if telemetry:
        settings.telemetry.enabled = True
    if otlp_endpoint is not None:
        settings.telemetry.enabled = True
        settings.telemetry.otlp_endpoint = otlp_endpoint

    if settings.telemetry.enabled:
        from taskagent.utils.telemetry import configure_telemetry

        tracing = settings.telemetry
        try:
            configure_telemetry(
                service_name=tracing.service_name,
                console=tracing.console,
                otlp_endpoint=tracing.otlp_endpoint,
            )
        except ImportError as exc:
            console.print(f"[red]Telemetry error:[/red] {exc}")
            sys.exit(1)

    console.print(f"Serving [bold]{settings.agent.name}[/bold] on {settings.public_url}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=log_level)
