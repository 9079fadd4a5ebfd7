# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""pyreview: run code review tools with adaptive verbosity."""

from __future__ import annotations

from .batch import Batch, BatchReport
from .history import History
from .reporting import ConsoleReporter, EventRecorder, Reporter
from .results import Result, Severity, Stage, classify
from .runner import Runner, RunnerState
from .shell import COMMAND_NOT_FOUND, ExecutionOutcome, ShellExecutor, Timer
from .strategies import Strategy, run_under_strategy
from .tools import CommandType, Tool, ToolCommands, assemble_command

__version__ = "0.1.0"

__all__ = [
    "Batch",
    "BatchReport",
    "COMMAND_NOT_FOUND",
    "CommandType",
    "ConsoleReporter",
    "EventRecorder",
    "ExecutionOutcome",
    "History",
    "Reporter",
    "Result",
    "Runner",
    "RunnerState",
    "Severity",
    "ShellExecutor",
    "Stage",
    "Strategy",
    "Timer",
    "Tool",
    "ToolCommands",
    "__version__",
    "classify",
    "run_under_strategy",
]
