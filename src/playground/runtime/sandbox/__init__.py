"""Sandbox subsystem: isolated toolchain execution."""

from playground.runtime.sandbox.docker_launcher import DockerLauncher
from playground.runtime.sandbox.executor import SandboxLauncher
from playground.runtime.sandbox.models import SandboxPolicy, SandboxResult

__all__ = [
    "DockerLauncher",
    "SandboxLauncher",
    "SandboxPolicy",
    "SandboxResult",
]
