# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Verbosity strategies governing how tool output is surfaced."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .shell.executor import ExecutionOutcome, ShellExecutor

OutputSink = Callable[[str], None]


class Strategy(str, Enum):
    """Enumerate the verbosity policies a runner may apply to a tool."""

    QUIET = "quiet"
    VERBOSE = "verbose"

    @property
    def streams_output(self) -> bool:
        """Return ``True`` when tool output is echoed live while it runs.

        Returns:
            bool: ``True`` for :attr:`Strategy.VERBOSE`.
        """

        return self is Strategy.VERBOSE

    @property
    def captures_output(self) -> bool:
        """Return ``True`` because every strategy retains the tool output."""

        return True

    def escalate(self) -> Strategy:
        """Return the strategy to use after a recoverable failure.

        Escalation is monotone: quiet becomes verbose and verbose stays verbose.

        Returns:
            Strategy: Always :attr:`Strategy.VERBOSE`.
        """

        return Strategy.VERBOSE


def run_under_strategy(
    strategy: Strategy,
    executor: ShellExecutor,
    command: str,
    *,
    sink: OutputSink | None = None,
) -> ExecutionOutcome:
    """Execute ``command`` through ``executor`` honouring ``strategy``.

    Quiet runs keep the output captured and silent. Verbose runs forward each
    line to ``sink`` as it is produced.

    Args:
        strategy: Verbosity policy active for the invocation.
        executor: Shell executor that spawns the subprocess.
        command: Literal command string assembled for the tool.
        sink: Callable receiving streamed output lines in verbose mode.

    Returns:
        ExecutionOutcome: Exit status and combined output of the command.
    """

    if strategy.streams_output:
        return executor.run(command, stream=True, sink=sink)
    return executor.run(command, stream=False)


__all__ = ["OutputSink", "Strategy", "run_under_strategy"]
