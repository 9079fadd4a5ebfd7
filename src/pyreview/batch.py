# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Run a batch of tools and aggregate their exit statuses."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

from .history import History
from .reporting import BatchSummary, Reporter
from .runner import Runner
from .shell.executor import ShellExecutor
from .strategies import Strategy
from .tools import CommandType, Tool

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BatchReport:
    """Aggregate outcome of a batch run.

    Attributes:
        exit_status: Highest exit status reported by any tool, ``0`` when all passed.
        results: Exit status per tool key, in the order the tools were given.
        seconds: Wall-clock duration of the whole batch.
        skipped: Keys of tools that do not define the requested command.
    """

    exit_status: int
    results: dict[str, int] = field(default_factory=dict)
    seconds: float = 0.0
    skipped: tuple[str, ...] = ()

    @property
    def success(self) -> bool:
        return self.exit_status == 0


class Batch:
    """Run one :class:`Runner` per tool, sharing a single history.

    Each runner owns its timer and strategy. With ``jobs > 1`` runners execute
    on a thread pool; the history is lock-protected and the reporter is
    expected to serialise its own writes.
    """

    def __init__(
        self,
        tools: Sequence[Tool],
        command_type: CommandType,
        *,
        history: History,
        reporter: Reporter,
        executor: ShellExecutor | None = None,
        strategy: Strategy = Strategy.QUIET,
        jobs: int = 1,
    ) -> None:
        if jobs < 1:
            raise ValueError("jobs must be at least 1")
        self.command_type = command_type
        self.history = history
        self.reporter = reporter
        self.executor = executor if executor is not None else ShellExecutor()
        self.strategy = strategy
        self.jobs = jobs
        self.skipped = tuple(tool.key for tool in tools if not tool.supports(command_type))
        for key in self.skipped:
            LOGGER.info("skipping tool=%s without a %s command", key, command_type.value)
        self.runners = [
            Runner(
                tool,
                command_type,
                history=history,
                reporter=reporter,
                executor=self.executor,
                strategy=strategy,
            )
            for tool in tools
            if tool.supports(command_type)
        ]

    def run(self) -> BatchReport:
        """Run every tool and return the aggregated report.

        Returns:
            BatchReport: Per-tool exit statuses and the overall exit status.
        """

        started = time.perf_counter()
        if self.jobs == 1 or len(self.runners) <= 1:
            statuses = self._run_serial()
        else:
            statuses = self._run_parallel()
        seconds = time.perf_counter() - started
        results = {runner.tool.key: statuses[runner.tool.key] for runner in self.runners}
        exit_status = max(results.values(), default=0)
        self.reporter.emit(BatchSummary(tool_count=len(self.runners), seconds=seconds, exit_status=exit_status))
        return BatchReport(exit_status=exit_status, results=results, seconds=seconds, skipped=self.skipped)

    def _run_serial(self) -> dict[str, int]:
        return {runner.tool.key: runner.run() for runner in self.runners}

    def _run_parallel(self) -> dict[str, int]:
        statuses: dict[str, int] = {}
        with ThreadPoolExecutor(max_workers=self.jobs) as pool:
            future_map = {pool.submit(runner.run): runner for runner in self.runners}
            for future in as_completed(future_map):
                statuses[future_map[future].tool.key] = future.result()
        return statuses


__all__ = ["Batch", "BatchReport"]
