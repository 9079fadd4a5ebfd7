# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for batch execution of several tools."""

from __future__ import annotations

import pytest

from pyreview.batch import Batch
from pyreview.reporting import BatchSummary, RunFailed, RunSucceeded
from pyreview.tools import CommandType, ToolCommands


def test_batch_runs_every_tool_and_reports_highest_status(tool_factory, scripted, history, recorder) -> None:
    tools = [
        tool_factory("first", review="first-check"),
        tool_factory("second", review="second-check"),
        tool_factory("third", review="third-check"),
    ]
    statuses = {"first-check": 0, "second-check": 3, "third-check": 1}
    executor = scripted(lambda command: statuses[command])

    report = Batch(tools, CommandType.REVIEW, history=history, reporter=recorder, executor=executor).run()

    assert report.results == {"first": 0, "second": 3, "third": 1}
    assert report.exit_status == 3
    assert not report.success
    assert len(recorder.of_type(RunSucceeded)) == 1
    assert len(recorder.of_type(RunFailed)) == 2
    (summary,) = recorder.of_type(BatchSummary)
    assert summary.tool_count == 3
    assert summary.exit_status == 3


def test_batch_skips_tools_without_requested_command(tool_factory, scripted, history, recorder) -> None:
    formatter = tool_factory("fmt").model_copy(update={"commands": ToolCommands(format="fmt-run")})
    linter = tool_factory("lint", review="lint-run")

    report = Batch(
        [formatter, linter],
        CommandType.FORMAT,
        history=history,
        reporter=recorder,
        executor=scripted(lambda command: 0),
    ).run()

    assert report.results == {"fmt": 0}
    assert report.skipped == ("lint",)
    assert report.success


def test_empty_batch_succeeds(history, recorder) -> None:
    report = Batch([], CommandType.REVIEW, history=history, reporter=recorder).run()

    assert report.exit_status == 0
    assert report.results == {}


def test_parallel_batch_shares_history(tool_factory, scripted, history, recorder) -> None:
    tools = [tool_factory(f"tool{index}", prepare=f"prep{index}", review=f"run{index}") for index in range(6)]
    executor = scripted(lambda command: 0 if command.startswith(("prep", "run0", "run1", "run2")) else 1)

    report = Batch(
        tools,
        CommandType.REVIEW,
        history=history,
        reporter=recorder,
        executor=executor,
        jobs=3,
    ).run()

    assert list(report.results) == [tool.key for tool in tools]
    assert report.results["tool0"] == 0
    assert report.results["tool5"] == 1
    assert report.exit_status == 1
    assert not history.should_prepare("tool0")
    assert history.should_prepare("tool5")


def test_runners_own_their_strategy(tool_factory, scripted, history, recorder) -> None:
    tools = [tool_factory("ok", review="ok-run"), tool_factory("bad", review="bad-run")]
    batch = Batch(
        tools,
        CommandType.REVIEW,
        history=history,
        reporter=recorder,
        executor=scripted(lambda command: 0 if command.startswith("ok") else 2),
    )

    batch.run()

    strategies = {runner.tool.key: runner.strategy.value for runner in batch.runners}
    assert strategies == {"ok": "quiet", "bad": "verbose"}


def test_jobs_must_be_positive(history, recorder) -> None:
    with pytest.raises(ValueError):
        Batch([], CommandType.REVIEW, history=history, reporter=recorder, jobs=0)
