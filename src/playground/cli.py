"""Playground CLI entrypoint."""

from __future__ import annotations

import click

from playground import __version__


@click.group()
@click.version_option(version=__version__, prog_name="playground")
def main() -> None:
    """Noir playground: sandboxed toolchain runner and HTTP API."""


# Register subcommands
from playground.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
