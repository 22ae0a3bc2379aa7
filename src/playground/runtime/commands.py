"""Mapping from logical playground commands to ``nargo`` argument vectors."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Command(str, Enum):
    """Logical operations exposed by the playground."""

    CHECK = "check"
    COMPILE = "compile"
    EXECUTE = "execute"
    FMT = "fmt"
    VERSION = "version"


VERSION_FLAG = "--version"


class Options(BaseModel):
    """Independent boolean toggles, each adding at most one flag.

    Field order is the flag order.  Wire names are kebab-case
    (``show-ssa``); Python names are accepted too.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    show_ssa: bool = Field(default=False, alias="show-ssa")
    deny_warnings: bool = Field(default=False, alias="deny-warnings")
    silence_warnings: bool = Field(default=False, alias="silence-warnings")
    print_acir: bool = Field(default=False, alias="print-acir")

    @classmethod
    def from_query(cls, params: dict[str, Any]) -> Options:
        return cls.model_validate(params)

    def args(self) -> list[str]:
        """Flags for every enabled toggle, in declaration order."""
        flags: list[str] = []
        for name, field in type(self).model_fields.items():
            if getattr(self, name):
                flags.append(f"--{field.alias}")
        return flags


def to_argv(command: Command | str, options: Options | None = None) -> list[str]:
    """Build the ``nargo`` argument vector for *command*.

    ``fmt`` ignores *options*; ``version`` maps straight to ``--version``.
    """
    command = Command(command)
    if command is Command.VERSION:
        return [VERSION_FLAG]
    if command is Command.FMT or options is None:
        return [command.value]
    return [command.value, *options.args()]
