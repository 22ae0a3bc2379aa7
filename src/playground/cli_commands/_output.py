"""Shared CLI output formatters."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from playground.runtime.channels import ChannelRegistry  # noqa: TC001
from playground.runtime.service import EvalResponse  # noqa: TC001

console = Console()


def print_eval(response: EvalResponse) -> None:
    """Print toolchain output: stdout as-is, stderr in a red panel."""
    if response.compiler:
        console.print(f"[dim]{response.compiler.strip()}[/dim]")
    if response.stdout:
        console.print(response.stdout, end="", markup=False, highlight=False)
    if response.stderr:
        console.print(Panel(response.stderr.rstrip(), title="stderr", border_style="red"))


def print_channels_table(registry: ChannelRegistry) -> None:
    table = Table(title="Channels")
    table.add_column("Name", style="cyan")
    table.add_column("Image")

    for channel in registry:
        table.add_row(channel.name, channel.image)

    console.print(table)
