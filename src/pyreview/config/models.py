# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Configuration models for the pyreview tool runner."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..strategies import Strategy
from ..tools import Tool


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class Settings(BaseModel):
    """Run-wide settings shared by every tool.

    Attributes:
        default_strategy: Verbosity each runner starts with.
        jobs: Number of tools allowed to run at the same time.
        prep_max_age: Seconds a successful preparation stays valid, ``None``
            to keep it until the history is reset.
        color: Whether console output may use colour.
        emoji: Whether console output may use emoji glyphs.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    default_strategy: Strategy = Strategy.QUIET
    jobs: int = Field(default=1, ge=1)
    prep_max_age: float | None = Field(default=None, ge=0)
    color: bool = True
    emoji: bool = True


class Config(BaseModel):
    """Top-level configuration: settings plus the ordered tool table."""

    model_config = ConfigDict(extra="forbid")

    settings: Settings = Field(default_factory=Settings)
    tools: dict[str, Tool] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _inject_tool_keys(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        tools = data.get("tools")
        if not isinstance(tools, Mapping):
            return data
        keyed: dict[str, Any] = {}
        for key, entry in tools.items():
            if isinstance(entry, Mapping):
                keyed[key] = {**entry, "key": key}
            else:
                keyed[key] = entry
        return {**data, "tools": keyed}

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any], *, source: str = "configuration") -> Config:
        """Validate ``payload`` into a :class:`Config`.

        Args:
            payload: Raw mapping loaded from a configuration source.
            source: Description of the source used in error messages.

        Returns:
            Config: Validated configuration.

        Raises:
            ConfigError: If ``payload`` fails validation.
        """

        try:
            return cls.model_validate(dict(payload))
        except ValidationError as exc:
            raise ConfigError(f"Invalid {source}: {exc}") from exc

    def select(self, keys: Iterable[str] = (), *, tags: Iterable[str] = ()) -> list[Tool]:
        """Return the tools to run for the requested keys and tags.

        Explicitly named tools run even when disabled and keep the order in
        which they were named. Without names, every enabled tool runs in
        declaration order, narrowed to ``tags`` when any are given.

        Args:
            keys: Tool keys named by the caller.
            tags: Tags a tool must carry at least one of.

        Returns:
            list[Tool]: Tools to run.

        Raises:
            ConfigError: If a named tool is not configured.
        """

        requested = list(dict.fromkeys(keys))
        if requested:
            unknown = [key for key in requested if key not in self.tools]
            if unknown:
                raise ConfigError(f"Unknown tool(s): {', '.join(unknown)}")
            return [self.tools[key] for key in requested]
        wanted = set(tags)
        return [
            tool
            for tool in self.tools.values()
            if tool.enabled and (not wanted or wanted.intersection(tool.tags))
        ]


__all__ = ["Config", "ConfigError", "Settings"]
