"""DockerLauncher: runs ``nargo`` in a locked-down, throwaway container.

Uses the ``docker`` CLI via subprocess (no docker-py dependency).  Each
``run()`` is a single ``docker run --rm`` with every capability dropped,
networking disabled, memory/pids capped, and only the workspace's two
files bind-mounted.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Sequence
from typing import TYPE_CHECKING

from playground.runtime.errors import LaunchError, SandboxTimeoutError
from playground.runtime.sandbox.models import SandboxPolicy, SandboxResult
from playground.utils.telemetry import (
    ATTR_CHANNEL,
    ATTR_COMMAND,
    ATTR_EXIT_CODE,
    ATTR_TIMED_OUT,
    get_tracer,
)

if TYPE_CHECKING:
    from playground.runtime.channels import Channel
    from playground.runtime.workspace import Workspace

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

# Exit status the docker client uses when it could not run the container at all.
_DOCKER_RUN_FAILED = 125


class DockerLauncher:
    """Ephemeral Docker container launcher.

    Satisfies the :class:`~playground.runtime.sandbox.executor.SandboxLauncher`
    protocol.

    If the awaiting task is cancelled, or the optional timeout expires, the
    docker client is killed and the container force-removed before the
    exception propagates.
    """

    def __init__(
        self,
        policy: SandboxPolicy | None = None,
        *,
        docker_binary: str = "docker",
    ) -> None:
        self._policy = policy or SandboxPolicy()
        self._docker = docker_binary
        self._semaphore = (
            asyncio.Semaphore(self._policy.max_concurrency)
            if self._policy.max_concurrency
            else None
        )

    @property
    def policy(self) -> SandboxPolicy:
        return self._policy

    async def run(
        self,
        channel: Channel,
        workspace: Workspace,
        argv: Sequence[str],
    ) -> SandboxResult:
        """Run the toolchain with *argv* against *workspace* in *channel*'s image."""
        container_name = f"playground-{uuid.uuid4().hex[:12]}"
        cmd = self._build_run_command(container_name, channel, workspace, argv)

        with _tracer.start_as_current_span("playground.sandbox.run") as span:
            span.set_attribute(ATTR_CHANNEL, channel.name)
            span.set_attribute(ATTR_COMMAND, " ".join(argv))
            try:
                if self._semaphore is None:
                    result = await self._launch(container_name, cmd)
                else:
                    async with self._semaphore:
                        result = await self._launch(container_name, cmd)
            except SandboxTimeoutError:
                span.set_attribute(ATTR_TIMED_OUT, True)
                raise
            if result.exit_code is not None:
                span.set_attribute(ATTR_EXIT_CODE, result.exit_code)

        return result

    def _build_run_command(
        self,
        container_name: str,
        channel: Channel,
        workspace: Workspace,
        argv: Sequence[str],
    ) -> list[str]:
        """Build the ``docker run`` command line with the isolation policy."""
        p = self._policy
        cmd: list[str] = [
            self._docker, "run",
            "--name", container_name,
            "--cap-drop=ALL", "-i", "--rm",
            "--platform", p.platform,
            "--net", "none",
            "--memory", p.memory_limit,
            "--memory-swap", p.memory_swap_limit,
            "--pids-limit", str(p.pids_limit),
            "--oom-score-adj", str(p.oom_score_adj),
            "-a", "stdin", "-a", "stdout", "-a", "stderr",
            "--volume", f"{workspace.source_file}:{p.source_mount}",
            "--volume", f"{workspace.aux_file}:{p.aux_mount}",
            channel.image,
            p.toolchain,
        ]
        cmd.extend(argv)
        return cmd

    async def _launch(self, container_name: str, cmd: list[str]) -> SandboxResult:
        logger.debug("docker argv: %s", cmd)
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            logger.warning("Could not invoke %s: %s", self._docker, exc)
            raise LaunchError() from exc

        timeout = self._policy.timeout
        try:
            # Nothing is fed on stdin; communicate() closes it straight away.
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except TimeoutError:
            logger.warning("Sandbox %s timed out after %ss", container_name, timeout)
            await self._terminate(proc, container_name)
            result = SandboxResult(exit_code=proc.returncode, timed_out=True)
            raise SandboxTimeoutError(timeout or 0.0, result) from None
        except asyncio.CancelledError:
            logger.info("Sandbox %s cancelled; tearing down", container_name)
            await self._terminate(proc, container_name)
            raise

        if proc.returncode == _DOCKER_RUN_FAILED:
            detail = _decode(stderr).strip()
            logger.warning("docker run failed for %s: %s", container_name, detail)
            raise LaunchError()

        return SandboxResult(
            stdout=_decode(stdout),
            stderr=_decode(stderr),
            exit_code=proc.returncode,
        )

    async def _terminate(self, proc: asyncio.subprocess.Process, container_name: str) -> None:
        """Kill the docker client and force-remove the container."""
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()
        await self._remove_container(container_name)

    async def _remove_container(self, name: str) -> None:
        """``docker rm -f``; failures are logged, never raised."""
        try:
            proc = await asyncio.create_subprocess_exec(
                self._docker, "rm", "-f", name,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
            await proc.wait()
        except OSError as exc:
            logger.warning("Could not remove container %s: %s", name, exc)


def _decode(data: bytes | None) -> str:
    """Decode UTF-8 output; undecodable output becomes an empty string."""
    if not data:
        return ""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return ""
