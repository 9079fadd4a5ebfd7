# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Run a single tool, escalating verbosity when a failure needs diagnosing.

A :class:`Runner` moves through ``IDLE -> PREPARING -> RUNNING ->
CLASSIFYING -> (DONE | RETRYING)``. Preparation only happens when the shared
:class:`~pyreview.history.History` says the tool still needs it. A standard
failure under the quiet strategy switches the runner to the verbose strategy
and re-runs the failing command so its output becomes visible; the switch
sticks for later invocations of the same runner until :meth:`Runner.reset`.
Total failures are reported as-is because re-running a command that could not
start shows nothing new.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import partial

from .history import History
from .reporting import (
    CurrentCommand,
    OutputLine,
    Reporter,
    Retrying,
    RunFailed,
    RunSucceeded,
    ToolSummary,
)
from .results import Result, Severity, Stage, classify
from .shell.executor import ExecutionOutcome, ShellExecutor
from .shell.timer import Timer
from .strategies import Strategy, run_under_strategy
from .tools import CommandType, Tool, ToolCommandError, assemble_command

LOGGER = logging.getLogger(__name__)


class RunnerState(str, Enum):
    """Enumerate the states a runner passes through during one invocation."""

    IDLE = "idle"
    PREPARING = "preparing"
    RUNNING = "running"
    CLASSIFYING = "classifying"
    RETRYING = "retrying"
    DONE = "done"


class Runner:
    """Orchestrate one tool's preparation, main command and failure handling."""

    def __init__(
        self,
        tool: Tool,
        command_type: CommandType,
        *,
        history: History,
        reporter: Reporter,
        executor: ShellExecutor | None = None,
        strategy: Strategy = Strategy.QUIET,
    ) -> None:
        """Initialise the runner.

        Args:
            tool: Tool to run.
            command_type: Main command to execute (review or format).
            history: Shared record of completed preparation steps.
            reporter: Receiver for run events.
            executor: Shell executor used to spawn commands.
            strategy: Verbosity policy to start from.

        Raises:
            ValueError: If ``command_type`` is the preparation command.
            ToolCommandError: If ``tool`` does not define ``command_type``.
        """

        if command_type is CommandType.PREPARE:
            raise ValueError("the preparation command cannot be a runner's main command")
        if not tool.supports(command_type):
            raise ToolCommandError(tool.key, command_type)
        self.tool = tool
        self.command_type = command_type
        self.history = history
        self.reporter = reporter
        self.executor = executor if executor is not None else ShellExecutor()
        self.default_strategy = strategy
        self._strategy = strategy
        self._state = RunnerState.IDLE
        self._result: Result | None = None
        self._timer = Timer()

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def result(self) -> Result | None:
        """Return the result of the most recent invocation, if any."""

        return self._result

    @property
    def timer(self) -> Timer:
        return self._timer

    @property
    def success(self) -> bool:
        return self._result is not None and self._result.success

    @property
    def exit_status(self) -> int | None:
        return None if self._result is None else self._result.exit_status

    def run(self) -> int:
        """Run the tool once and return the exit status of the classified outcome.

        Returns:
            int: ``0`` on success, the tool's own status on a standard failure,
            or the command-not-found convention on a total failure.
        """

        self._timer = Timer()
        self.reporter.emit(
            ToolSummary(tool=self.tool.key, name=self.tool.display_name, description=self.tool.description)
        )
        prepared = False
        if self._needs_preparation():
            self._state = RunnerState.PREPARING
            outcome = self._timer.record_prep(partial(self._execute, CommandType.PREPARE))
            if not outcome.succeeded:
                return self._finish(classify(outcome, self._timer, stage=Stage.PREPARE))
            prepared = True

        self._state = RunnerState.RUNNING
        outcome = self._timer.record_main(partial(self._execute, self.command_type))
        self._state = RunnerState.CLASSIFYING
        result = classify(outcome, self._timer)
        if result.success and (prepared or not self.tool.prepares):
            self.history.record_success(self.tool.key)
        return self._finish(result)

    def reset(self) -> None:
        """Return to the configured default strategy and forget the last result."""

        self._strategy = self.default_strategy
        self._result = None
        self._timer = Timer()
        self._state = RunnerState.IDLE

    def _needs_preparation(self) -> bool:
        return self.tool.prepares and self.history.should_prepare(self.tool.key)

    def _finish(self, result: Result) -> int:
        self._result = result
        if result.severity is Severity.SUCCESS:
            self.reporter.emit(RunSucceeded(tool=self.tool.key, timer=self._timer))
        elif result.severity is Severity.TOTAL_FAILURE:
            LOGGER.debug("total failure tool=%s exit_status=%s", self.tool.key, result.exit_status)
            self.reporter.emit(self._failure_event(result))
        else:
            self._handle_standard_failure(result)
        self._state = RunnerState.DONE
        return result.exit_status

    def _handle_standard_failure(self, result: Result) -> None:
        if self._strategy is Strategy.QUIET:
            self._strategy = self._strategy.escalate()
            LOGGER.debug("escalating tool=%s strategy=%s", self.tool.key, self._strategy.value)
            self._state = RunnerState.RETRYING
            self.reporter.emit(Retrying(tool=self.tool.key, strategy=self._strategy))
            command_type = CommandType.PREPARE if result.stage is Stage.PREPARE else self.command_type
            self._execute(command_type)
        self.reporter.emit(self._failure_event(result))

    def _failure_event(self, result: Result) -> RunFailed:
        return RunFailed(tool=self.tool.key, result=result, command=result.command, links=dict(self.tool.links))

    def _execute(self, command_type: CommandType) -> ExecutionOutcome:
        command = assemble_command(self.tool, command_type, self._strategy)
        self.reporter.emit(CurrentCommand(tool=self.tool.key, command=command, strategy=self._strategy))
        return run_under_strategy(self._strategy, self.executor, command, sink=self._forward_output)

    def _forward_output(self, line: str) -> None:
        self.reporter.emit(OutputLine(tool=self.tool.key, text=line))


__all__ = ["Runner", "RunnerState"]
