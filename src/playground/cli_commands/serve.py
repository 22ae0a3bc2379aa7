"""``playground serve``: run the HTTP API."""

from __future__ import annotations

import logging
import sys

import click

from playground.cli_commands._output import console


@click.command()
@click.option("--host", default=None, help="Bind address (default: PLAYGROUND_HOST).")
@click.option("--port", type=int, default=None, help="Bind port (default: PLAYGROUND_PORT).")
@click.option("--telemetry", is_flag=True, help="Export OpenTelemetry spans to the console.")
def serve(host: str | None, port: int | None, telemetry: bool) -> None:
    """Serve the playground API (and static client, if present)."""
    import uvicorn

    from playground.api.app import create_app
    from playground.config import Settings
    from playground.runtime.errors import ConfigError
    from playground.utils.telemetry import configure_telemetry

    settings = Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if telemetry or settings.telemetry:
        # --telemetry forces console export even when an OTLP endpoint is configured.
        configure_telemetry(otlp_endpoint=None if telemetry else settings.otlp_endpoint)

    try:
        app = create_app(settings)
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    uvicorn.run(app, host=host or settings.host, port=port or settings.port)
