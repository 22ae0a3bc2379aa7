"""Application settings loaded once from the environment."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from playground.runtime.channels import ChannelRegistry
from playground.runtime.sandbox.models import SandboxPolicy

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Process-wide configuration (``PLAYGROUND_*`` environment variables)."""

    model_config = SettingsConfigDict(
        env_prefix="PLAYGROUND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    api_prefix: str = "/api"
    static_dir: Path | None = Path("static")
    log_level: str = "INFO"

    # Toolchain
    channels_file: Path | None = None
    docker_binary: str = "docker"
    sandbox_timeout: float | None = Field(default=None, gt=0)
    max_concurrent_sandboxes: int | None = Field(default=None, ge=1)

    # Gist storage
    github_token: SecretStr | None = None
    github_api_url: str = "https://api.github.com"

    # Telemetry
    telemetry: bool = False
    otlp_endpoint: str | None = None

    def load_channels(self) -> ChannelRegistry:
        """Channel table from :attr:`channels_file`, or the built-in default."""
        if self.channels_file is None:
            return ChannelRegistry()
        return ChannelRegistry.from_yaml(self.channels_file)

    def sandbox_policy(self) -> SandboxPolicy:
        if self.sandbox_timeout is None:
            logger.warning("PLAYGROUND_SANDBOX_TIMEOUT is unset; sandbox runs have no time limit")
        if self.max_concurrent_sandboxes is None:
            logger.warning(
                "PLAYGROUND_MAX_CONCURRENT_SANDBOXES is unset; concurrent sandboxes are unbounded"
            )
        return SandboxPolicy(
            timeout=self.sandbox_timeout,
            max_concurrency=self.max_concurrent_sandboxes,
        )
