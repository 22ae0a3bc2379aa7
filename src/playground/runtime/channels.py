"""Channels: named toolchain variants, each mapped to a container image."""

from __future__ import annotations

import os
import re
from pathlib import Path
from collections.abc import Iterator
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from playground.runtime.errors import ConfigError, UnknownChannelError

_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9._-]*$")

# Path segments the API routes claim for themselves.
RESERVED_NAMES = frozenset({"gist"})

DEFAULT_CHANNELS: dict[str, str] = {"master": "noir-master"}


class Channel(BaseModel):
    """A registered toolchain variant."""

    model_config = ConfigDict(frozen=True)

    name: str
    image: str = Field(..., min_length=1, description="Container image identifier.")


class ChannelTable(BaseModel):
    """Schema of the channels YAML file."""

    channels: dict[str, str]

    @field_validator("channels")
    @classmethod
    def _validate_channels(cls, value: dict[str, str]) -> dict[str, str]:
        if not value:
            msg = "at least one channel must be declared"
            raise ValueError(msg)
        for name, image in value.items():
            if not _NAME_RE.match(name):
                msg = f"invalid channel name '{name}'"
                raise ValueError(msg)
            if name in RESERVED_NAMES:
                msg = f"channel name '{name}' is reserved"
                raise ValueError(msg)
            if not image or not image.strip():
                msg = f"channel '{name}' has an empty image"
                raise ValueError(msg)
        return value


class ChannelRegistry:
    """Immutable lookup table from channel name to :class:`Channel`.

    Adding a variant is a configuration change: the launcher only ever sees
    the resolved :class:`Channel`.
    """

    def __init__(self, channels: dict[str, str] | None = None) -> None:
        try:
            table = ChannelTable(channels=dict(DEFAULT_CHANNELS if channels is None else channels))
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
        self._channels = {
            name: Channel(name=name, image=image.strip()) for name, image in table.channels.items()
        }

    @classmethod
    def from_yaml(cls, path: Path) -> ChannelRegistry:
        """Load ``channels: {name: image}`` from *path*.

        ``${VAR}`` references are expanded before parsing.
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {path}: {exc}") from exc

        try:
            data: Any = yaml.safe_load(os.path.expandvars(raw))
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if not isinstance(data, dict) or not isinstance(data.get("channels"), dict):
            raise ConfigError("Channels file must contain a 'channels' mapping")

        return cls({str(k): str(v) for k, v in data["channels"].items()})

    def resolve(self, name: str) -> Channel:
        """Return the channel called *name* or raise :class:`UnknownChannelError`."""
        try:
            return self._channels[name]
        except KeyError:
            raise UnknownChannelError(name) from None

    def names(self) -> list[str]:
        return sorted(self._channels)

    def __iter__(self) -> Iterator[Channel]:
        return iter(self._channels[name] for name in self.names())

    def __len__(self) -> int:
        return len(self._channels)

    def __contains__(self, name: object) -> bool:
        return name in self._channels
