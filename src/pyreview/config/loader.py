# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Locate and load the pyreview configuration for a project root."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from .models import Config, ConfigError
from .sources import PyProjectConfigSource, TomlConfigSource

LOGGER = logging.getLogger(__name__)

CONFIG_FILENAME: Final[str] = ".pyreview.toml"
PYPROJECT_FILENAME: Final[str] = "pyproject.toml"


def resolve_config_source(root: Path, explicit: Path | None = None) -> TomlConfigSource | None:
    """Return the configuration source that applies to ``root``.

    Args:
        root: Project root directory.
        explicit: Configuration file named by the caller, if any.

    Returns:
        TomlConfigSource | None: Source for the explicit file, ``.pyreview.toml``
        or ``pyproject.toml`` (first match wins), or ``None`` when none exist.

    Raises:
        ConfigError: If ``explicit`` does not exist.
    """

    if explicit is not None:
        path = explicit if explicit.is_absolute() else root / explicit
        if not path.is_file():
            raise ConfigError(f"Configuration file {path} does not exist")
        if path.name == PYPROJECT_FILENAME:
            return PyProjectConfigSource(path)
        return TomlConfigSource(path)
    candidate = root / CONFIG_FILENAME
    if candidate.is_file():
        return TomlConfigSource(candidate)
    pyproject = root / PYPROJECT_FILENAME
    if pyproject.is_file():
        return PyProjectConfigSource(pyproject)
    return None


def load_config(root: Path, explicit: Path | None = None) -> Config:
    """Load and validate the configuration for ``root``.

    Args:
        root: Project root directory.
        explicit: Optional configuration file overriding discovery.

    Returns:
        Config: Validated configuration, empty when no source was found.

    Raises:
        ConfigError: If the configuration cannot be read or is invalid.
    """

    source = resolve_config_source(root, explicit)
    if source is None:
        LOGGER.debug("no configuration found root=%s", root)
        return Config()
    LOGGER.debug("loading configuration source=%s", source.describe())
    return Config.from_mapping(source.load(), source=source.describe())


__all__ = ["CONFIG_FILENAME", "PYPROJECT_FILENAME", "load_config", "resolve_config_source"]
