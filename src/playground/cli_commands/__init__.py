"""CLI subcommand registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all subcommands on the CLI group."""
    from playground.cli_commands.channels import channels
    from playground.cli_commands.run import run, toolchain_version
    from playground.cli_commands.serve import serve

    cli.add_command(serve)
    cli.add_command(run)
    cli.add_command(toolchain_version)
    cli.add_command(channels)
