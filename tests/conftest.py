# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import shlex
import sys
from collections.abc import Callable, Iterable

import pytest

from pyreview.history import History
from pyreview.reporting import EventRecorder
from pyreview.shell.executor import ExecutionOutcome, ShellExecutor
from pyreview.tools import Tool, ToolCommands

MISSING_EXECUTABLE = "pyreview-definitely-missing-tool"


def python_command(code: str) -> str:
    """Return a command string running ``code`` with the current interpreter."""

    return f"{shlex.quote(sys.executable)} -c {shlex.quote(code)}"


def make_tool(
    key: str = "sample",
    *,
    review: str | None = None,
    prepare: str | None = None,
    format: str | None = None,
    **extra: object,
) -> Tool:
    commands = ToolCommands(prepare=prepare, review=review or python_command("pass"), format=format)
    return Tool(key=key, name=key.title(), description=f"{key} checks", commands=commands, **extra)


class ScriptedExecutor(ShellExecutor):
    """Executor returning pre-set exit statuses instead of spawning processes."""

    def __init__(self, statuses: Callable[[str], int] | Iterable[int] = (), output: str = "") -> None:
        super().__init__()
        self._statuses = statuses if callable(statuses) else iter(statuses)
        self._output = output
        self.calls: list[tuple[str, bool]] = []

    def run(self, command, *, stream=False, sink=None):  # type: ignore[override]
        self.calls.append((command, stream))
        if callable(self._statuses):
            status = self._statuses(command)
        else:
            status = next(self._statuses)
        if stream and sink is not None:
            for line in self._output.splitlines():
                sink(line)
        return ExecutionOutcome(command=command, exit_status=status, output=self._output)


@pytest.fixture
def history() -> History:
    return History()


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()


@pytest.fixture
def py_command() -> Callable[[str], str]:
    return python_command


@pytest.fixture
def tool_factory() -> Callable[..., Tool]:
    return make_tool


@pytest.fixture
def scripted() -> type[ScriptedExecutor]:
    return ScriptedExecutor


@pytest.fixture
def missing_executable() -> str:
    return MISSING_EXECUTABLE
