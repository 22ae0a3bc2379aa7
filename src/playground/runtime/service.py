"""PlaygroundService: the request pipeline, independent of any web framework.

Every call follows the same shape: resolve the channel (no side effects
yet), allocate a :class:`Workspace`, write the submitted files, launch the
sandbox, and destroy the workspace on every exit path.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from playground.runtime.channels import ChannelRegistry
from playground.runtime.commands import Command, Options, to_argv
from playground.runtime.errors import ToolchainVersionError
from playground.runtime.sandbox.executor import SandboxLauncher
from playground.runtime.workspace import Workspace

logger = logging.getLogger(__name__)


class Files(BaseModel):
    """Submitted project: the source file and the aux (``Prover.toml``) file."""

    code: str
    input: str = ""


class EvalResponse(BaseModel):
    compiler: str = Field(default="", description="Output of ``nargo --version``.")
    stdout: str = ""
    stderr: str = ""


class FormatResponse(BaseModel):
    code: str


class VersionResponse(BaseModel):
    version: str


class PlaygroundService:
    """Drives channel validation, workspace lifetime and sandbox launches."""

    def __init__(self, channels: ChannelRegistry, launcher: SandboxLauncher) -> None:
        self.channels = channels
        self.launcher = launcher

    async def evaluate(
        self,
        channel_name: str,
        command: Command | str,
        files: Files,
        options: Options | None = None,
    ) -> EvalResponse:
        """Run ``check``, ``compile`` or ``execute`` and report the toolchain version."""
        command = Command(command)
        if command not in (Command.CHECK, Command.COMPILE, Command.EXECUTE):
            msg = f"{command.value} is not an evaluation command"
            raise ValueError(msg)

        channel = self.channels.resolve(channel_name)
        logger.info("%s on channel %s", command.value, channel.name)

        with Workspace.create() as workspace:
            workspace.write_source(files.code)
            workspace.write_aux(files.input)

            result = await self.launcher.run(channel, workspace, to_argv(command, options or Options()))
            compiler = await self.launcher.run(channel, workspace, to_argv(Command.VERSION))

        return EvalResponse(compiler=compiler.stdout, stdout=result.stdout, stderr=result.stderr)

    async def format_source(self, channel_name: str, files: Files) -> FormatResponse:
        """Run ``nargo fmt`` in place and return the rewritten source."""
        channel = self.channels.resolve(channel_name)
        logger.info("fmt on channel %s", channel.name)

        with Workspace.create() as workspace:
            workspace.write_source(files.code)
            workspace.write_aux(files.input)

            # Output is irrelevant; the result is whatever fmt left in the file.
            await self.launcher.run(channel, workspace, to_argv(Command.FMT))
            code = workspace.read_source()

        return FormatResponse(code=code)

    async def version(self, channel_name: str) -> VersionResponse:
        """Return ``nargo --version``; any stderr output is treated as failure."""
        channel = self.channels.resolve(channel_name)

        with Workspace.create() as workspace:
            result = await self.launcher.run(channel, workspace, to_argv(Command.VERSION))

        if not result.succeeded:
            logger.warning("nargo --version on %s wrote to stderr: %s", channel.name, result.stderr)
            raise ToolchainVersionError(result.stderr)

        return VersionResponse(version=result.stdout)
