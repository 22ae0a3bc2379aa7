"""Shared fixtures: a recording in-memory launcher and a service built on it."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import pytest

from playground.runtime.channels import Channel, ChannelRegistry
from playground.runtime.sandbox.models import SandboxResult
from playground.runtime.service import PlaygroundService
from playground.runtime.workspace import Workspace


class RecordingLauncher:
    """Stands in for ``DockerLauncher``; records every call.

    *handler* receives ``(channel, workspace, argv)`` and returns a
    :class:`SandboxResult`; by default ``--version`` answers with a banner
    and everything else with empty output.
    """

    def __init__(
        self,
        handler: Callable[[Channel, Workspace, list[str]], SandboxResult] | None = None,
    ) -> None:
        self.calls: list[dict[str, Any]] = []
        self._handler = handler or _default_handler

    async def run(self, channel: Channel, workspace: Workspace, argv: Sequence[str]) -> SandboxResult:
        self.calls.append({
            "channel": channel.name,
            "argv": list(argv),
            "source": workspace.source_file.read_text(),
            "aux": workspace.aux_file.read_text(),
            "workspace": workspace,
        })
        return self._handler(channel, workspace, list(argv))


def _default_handler(_: Channel, __: Workspace, argv: list[str]) -> SandboxResult:
    if argv == ["--version"]:
        return SandboxResult(stdout="nargo version = 0.0.0\n", exit_code=0)
    return SandboxResult(exit_code=0)


@pytest.fixture
def launcher() -> RecordingLauncher:
    return RecordingLauncher()


@pytest.fixture
def make_launcher() -> type[RecordingLauncher]:
    return RecordingLauncher


@pytest.fixture
def channels() -> ChannelRegistry:
    return ChannelRegistry({"master": "noir-master", "nightly": "noir-nightly"})


@pytest.fixture
def service(channels: ChannelRegistry, launcher: RecordingLauncher) -> PlaygroundService:
    return PlaygroundService(channels, launcher)
