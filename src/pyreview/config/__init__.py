# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Configuration loading and models."""

from __future__ import annotations

from .loader import CONFIG_FILENAME, load_config, resolve_config_source
from .models import Config, ConfigError, Settings
from .sources import PyProjectConfigSource, TomlConfigSource

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "PyProjectConfigSource",
    "Settings",
    "TomlConfigSource",
    "load_config",
    "resolve_config_source",
]
