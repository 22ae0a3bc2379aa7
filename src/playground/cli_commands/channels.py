"""``playground channels``: list the configured toolchain channels."""

from __future__ import annotations

import sys

import click

from playground.cli_commands._output import console, print_channels_table


@click.command()
def channels() -> None:
    """List configured channels and their images."""
    from playground.config import Settings
    from playground.runtime.errors import ConfigError

    try:
        registry = Settings().load_channels()
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)

    print_channels_table(registry)
