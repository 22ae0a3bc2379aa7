"""Shared error types for the playground runtime."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from playground.runtime.sandbox.models import SandboxResult

WorkspaceOp = Literal["create", "write", "read"]


class PlaygroundError(Exception):
    """Base error for every failure surfaced to a caller."""


class RequestValidationError(PlaygroundError):
    """The request was rejected before any workspace or sandbox work."""


class UnknownChannelError(RequestValidationError):
    """The requested channel is not registered."""

    def __init__(self, channel: str) -> None:
        self.channel = channel
        super().__init__(f"unknown channel: {channel}")


class WorkspaceError(PlaygroundError):
    """A workspace could not be allocated, written or read."""

    def __init__(self, kind: WorkspaceOp, detail: str) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(detail)


class LaunchError(PlaygroundError):
    """The container runtime itself could not be started."""

    def __init__(self, detail: str = "failed to start docker container") -> None:
        self.detail = detail
        super().__init__(detail)


class SandboxTimeoutError(LaunchError):
    """The sandboxed process exceeded the configured wall-clock timeout."""

    def __init__(self, timeout: float, result: SandboxResult | None = None) -> None:
        self.timeout = timeout
        self.result = result
        super().__init__(f"execution timed out after {timeout}s")


class ToolchainVersionError(PlaygroundError):
    """``nargo --version`` wrote to stderr."""

    def __init__(self, stderr: str = "") -> None:
        self.stderr = stderr
        super().__init__("unknown error")


class GistError(PlaygroundError):
    """The gist store rejected or failed a request."""


class ConfigError(PlaygroundError):
    """Startup configuration is missing or invalid."""
