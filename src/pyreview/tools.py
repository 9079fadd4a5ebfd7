# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tool definitions and assembly of runnable command strings."""

from __future__ import annotations

import shlex
from collections.abc import Iterator, Mapping
from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .shell.executor import find_control_operator
from .strategies import Strategy

FlagValue = str | int | float | bool

_SHORT_FLAG_LENGTH: Final[int] = 1


class ToolCommandError(LookupError):
    """Raised when a tool is asked for a command it does not define."""

    def __init__(self, tool_key: str, command_type: CommandType) -> None:
        super().__init__(f"Tool '{tool_key}' does not define a '{command_type.value}' command")
        self.tool_key = tool_key
        self.command_type = command_type


class CommandType(str, Enum):
    """Enumerate the commands a tool definition may provide."""

    PREPARE = "prepare"
    REVIEW = "review"
    FORMAT = "format"


class ToolCommands(BaseModel):
    """Command templates configured for a tool."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    prepare: str | None = None
    review: str | None = None
    format: str | None = None

    @field_validator("prepare", "review", "format")
    @classmethod
    def _validate_template(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if not value.strip():
            raise ValueError("command template must not be blank")
        operator = find_control_operator(value)
        if operator is not None:
            raise ValueError(f"command template uses shell operator {operator!r}; wrap it in a script instead")
        return value


class Tool(BaseModel):
    """One checkable unit of work, immutable once configured.

    Attributes:
        key: Identifier used on the command line and as the history key.
        name: Display name, defaults to ``key``.
        description: One-line summary shown before the tool runs.
        enabled: Whether the tool runs when no tools are named explicitly.
        tags: Labels used to select groups of tools.
        commands: Preparation, review and format command templates.
        env: Environment variables prefixed to review and format commands.
        flags: Command-line flags appended to review and format commands.
        quiet_option: Tool option appended when running quietly.
        links: Named reference URLs, e.g. ``home`` or ``usage``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    name: str = ""
    description: str = ""
    enabled: bool = True
    tags: tuple[str, ...] = ()
    commands: ToolCommands = Field(default_factory=ToolCommands)
    env: dict[str, str] = Field(default_factory=dict)
    flags: dict[str, FlagValue] = Field(default_factory=dict)
    quiet_option: str = ""
    links: dict[str, str] = Field(default_factory=dict)

    @field_validator("key")
    @classmethod
    def _validate_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tool key must not be blank")
        return value

    @field_validator("quiet_option")
    @classmethod
    def _validate_quiet_option(cls, value: str) -> str:
        operator = find_control_operator(value)
        if operator is not None:
            raise ValueError(f"quiet option uses shell operator {operator!r}")
        return value

    @property
    def display_name(self) -> str:
        return self.name or self.key

    @property
    def prepares(self) -> bool:
        """Return ``True`` when the tool defines a preparation command."""

        return bool(self.commands.prepare)

    def command_for(self, command_type: CommandType) -> str | None:
        """Return the configured template for ``command_type`` or ``None``."""

        template = getattr(self.commands, command_type.value)
        return template or None

    def supports(self, command_type: CommandType) -> bool:
        return self.command_for(command_type) is not None


def render_env(env: Mapping[str, str]) -> Iterator[str]:
    """Yield ``NAME=value`` assignments with shell-safe quoting."""

    for key, value in env.items():
        yield f"{key.upper()}={shlex.quote(str(value))}"


def render_flags(flags: Mapping[str, FlagValue]) -> Iterator[str]:
    """Yield command-line fragments for ``flags``.

    Single-letter keys render as ``-k``, longer ones as ``--key``. ``True``
    renders the bare switch and ``False`` omits it entirely.

    Args:
        flags: Mapping of flag names to values.

    Yields:
        str: One fragment per enabled flag.
    """

    for key, value in flags.items():
        if value is False:
            continue
        dash = "-" if len(key) == _SHORT_FLAG_LENGTH else "--"
        if value is True:
            yield f"{dash}{key}"
        else:
            yield f"{dash}{key} {shlex.quote(str(value))}"


def assemble_command(tool: Tool, command_type: CommandType, strategy: Strategy) -> str:
    """Return the literal command string to run ``command_type`` for ``tool``.

    Args:
        tool: Tool whose templates are rendered.
        command_type: Which of the tool's commands to assemble.
        strategy: Active verbosity policy; quiet runs append ``quiet_option``.

    Returns:
        str: Command string ready for the shell executor.

    Raises:
        ToolCommandError: If ``tool`` does not define ``command_type``.
    """

    body = tool.command_for(command_type)
    if body is None:
        raise ToolCommandError(tool.key, command_type)
    parts = [*render_env(tool.env), body.strip()]
    if command_type is not CommandType.PREPARE:
        parts.extend(render_flags(tool.flags))
        if strategy is Strategy.QUIET and tool.quiet_option:
            parts.append(tool.quiet_option)
    return " ".join(parts)


__all__ = [
    "CommandType",
    "FlagValue",
    "Tool",
    "ToolCommandError",
    "ToolCommands",
    "assemble_command",
    "render_env",
    "render_flags",
]
