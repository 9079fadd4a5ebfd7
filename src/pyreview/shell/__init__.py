# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Subprocess execution and timing primitives."""

from __future__ import annotations

from .executor import CANNOT_EXECUTE, COMMAND_NOT_FOUND, ExecutionOutcome, ShellExecutor, parse_command
from .timer import Timer

__all__ = [
    "CANNOT_EXECUTE",
    "COMMAND_NOT_FOUND",
    "ExecutionOutcome",
    "ShellExecutor",
    "Timer",
    "parse_command",
]
