"""``playground run``: run one toolchain command locally in the sandbox."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from playground.cli_commands._output import console, print_eval


@click.command()
@click.argument("command", type=click.Choice(["check", "compile", "execute", "fmt"]))
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--input", "-i", "aux",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Prover.toml to mount alongside the source.",
)
@click.option("--channel", "-c", default="master", show_default=True, help="Toolchain channel.")
@click.option("--show-ssa", is_flag=True, help="Pass --show-ssa.")
@click.option("--deny-warnings", is_flag=True, help="Pass --deny-warnings.")
@click.option("--silence-warnings", is_flag=True, help="Pass --silence-warnings.")
@click.option("--print-acir", is_flag=True, help="Pass --print-acir.")
def run(
    command: str,
    source: Path,
    aux: Path | None,
    channel: str,
    show_ssa: bool,
    deny_warnings: bool,
    silence_warnings: bool,
    print_acir: bool,
) -> None:
    """Run COMMAND on the SOURCE file inside the sandbox."""
    from playground.api.app import build_service
    from playground.config import Settings
    from playground.runtime.commands import Command, Options
    from playground.runtime.errors import PlaygroundError
    from playground.runtime.service import Files

    files = Files(
        code=source.read_text(encoding="utf-8"),
        input=aux.read_text(encoding="utf-8") if aux else "",
    )
    options = Options(
        show_ssa=show_ssa,
        deny_warnings=deny_warnings,
        silence_warnings=silence_warnings,
        print_acir=print_acir,
    )

    try:
        service = build_service(Settings())
        if command == Command.FMT.value:
            formatted = asyncio.run(service.format_source(channel, files))
            console.print(formatted.code, end="", markup=False, highlight=False)
            return
        response = asyncio.run(service.evaluate(channel, command, files, options))
    except PlaygroundError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    print_eval(response)
    if response.stderr:
        sys.exit(1)


@click.command("toolchain-version")
@click.option("--channel", "-c", default="master", show_default=True, help="Toolchain channel.")
def toolchain_version(channel: str) -> None:
    """Print ``nargo --version`` for CHANNEL."""
    from playground.api.app import build_service
    from playground.config import Settings
    from playground.runtime.errors import PlaygroundError

    try:
        service = build_service(Settings())
        response = asyncio.run(service.version(channel))
    except PlaygroundError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    console.print(response.version.strip(), markup=False, highlight=False)
