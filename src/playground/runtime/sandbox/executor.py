"""SandboxLauncher protocol: the common interface for sandbox implementations."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from playground.runtime.channels import Channel
    from playground.runtime.sandbox.models import SandboxResult
    from playground.runtime.workspace import Workspace


@runtime_checkable
class SandboxLauncher(Protocol):
    """Runs the toolchain against a workspace in an isolated environment.

    A non-zero toolchain exit is ordinary output; only a failure to start
    the runtime raises :class:`~playground.runtime.errors.LaunchError`.
    """

    async def run(
        self,
        channel: Channel,
        workspace: Workspace,
        argv: Sequence[str],
    ) -> SandboxResult:
        """Run the toolchain with *argv* and return its captured output."""
        ...
