"""Playground runtime: workspaces, channels, command mapping and the sandbox."""

from playground.runtime.channels import Channel, ChannelRegistry
from playground.runtime.commands import Command, Options, to_argv
from playground.runtime.errors import (
    ConfigError,
    GistError,
    LaunchError,
    PlaygroundError,
    RequestValidationError,
    SandboxTimeoutError,
    ToolchainVersionError,
    UnknownChannelError,
    WorkspaceError,
)
from playground.runtime.service import PlaygroundService
from playground.runtime.workspace import Workspace

__all__ = [
    "Channel",
    "ChannelRegistry",
    "Command",
    "ConfigError",
    "GistError",
    "LaunchError",
    "Options",
    "PlaygroundError",
    "PlaygroundService",
    "RequestValidationError",
    "SandboxTimeoutError",
    "ToolchainVersionError",
    "UnknownChannelError",
    "Workspace",
    "WorkspaceError",
]
