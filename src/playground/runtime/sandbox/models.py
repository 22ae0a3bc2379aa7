"""Data models for the sandbox subsystem."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SandboxPolicy(BaseModel):
    """Isolation policy applied to every sandboxed run.

    Requests never see or change this; only the operator-facing bounds
    (``timeout``, ``max_concurrency``) come from configuration.
    """

    model_config = ConfigDict(frozen=True)

    platform: str = Field(default="linux/amd64", description="Pinned image platform.")
    memory_limit: str = Field(default="512m", description="Hard RAM ceiling (Docker format).")
    memory_swap_limit: str = Field(default="640m", description="Combined RAM+swap ceiling.")
    pids_limit: int = Field(default=512, description="Max processes/threads in the container.")
    oom_score_adj: int = Field(default=1000, description="OOM-killer bias; 1000 is killed first.")
    toolchain: str = Field(default="nargo", description="Binary executed inside the image.")
    source_mount: str = Field(default="/playground/src/main.nr")
    aux_mount: str = Field(default="/playground/Prover.toml")
    timeout: float | None = Field(default=None, description="Wall-clock limit in seconds.")
    max_concurrency: int | None = Field(default=None, ge=1, description="Concurrent sandbox cap.")


class SandboxResult(BaseModel):
    """Captured output of one sandboxed toolchain run."""

    stdout: str = Field(default="", description="Captured stdout.")
    stderr: str = Field(default="", description="Captured stderr.")
    exit_code: int | None = Field(default=None, description="Exit status of the docker client.")
    timed_out: bool = Field(default=False, description="Killed after exceeding the policy timeout.")

    @property
    def succeeded(self) -> bool:
        """Lenient success signal used by callers: nothing on stderr."""
        return not self.stderr
