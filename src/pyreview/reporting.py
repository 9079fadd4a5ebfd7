# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Events emitted while tools run and the reporters that consume them.

Runners never write to the console directly. They emit the events defined
here to an injected :class:`Reporter`; :class:`ConsoleReporter` renders them
with Rich while :class:`EventRecorder` simply keeps them for inspection.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from threading import Lock
from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.text import Text

from .results import Result
from .shell.timer import Timer
from .strategies import Strategy


@dataclass(frozen=True, slots=True)
class ToolSummary:
    """Announce the tool that is about to run."""

    tool: str
    name: str
    description: str


@dataclass(frozen=True, slots=True)
class CurrentCommand:
    """Announce the literal command about to be executed."""

    tool: str
    command: str
    strategy: Strategy


@dataclass(frozen=True, slots=True)
class OutputLine:
    """One line of live tool output streamed under the verbose strategy."""

    tool: str
    text: str


@dataclass(frozen=True, slots=True)
class Retrying:
    """Announce that a failed command is re-run with a more verbose strategy."""

    tool: str
    strategy: Strategy


@dataclass(frozen=True, slots=True)
class RunSucceeded:
    """Terminal event for a successful tool run."""

    tool: str
    timer: Timer


@dataclass(frozen=True, slots=True)
class RunFailed:
    """Terminal event for a failed tool run.

    Attributes:
        tool: Key of the failing tool.
        result: Classified result that ended the run.
        command: Failing command string when it should be shown for diagnosis.
        links: Named reference URLs for the tool, shown as guidance.
    """

    tool: str
    result: Result
    command: str | None = None
    links: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class BatchSummary:
    """Summary emitted once a batch of tools has finished."""

    tool_count: int
    seconds: float
    exit_status: int


RunEvent = ToolSummary | CurrentCommand | OutputLine | Retrying | RunSucceeded | RunFailed | BatchSummary


@runtime_checkable
class Reporter(Protocol):
    """Receiver of run events."""

    def emit(self, event: RunEvent) -> None:
        """Handle ``event``.

        Args:
            event: Event produced by a runner or batch.

        Raises:
            NotImplementedError: Always raised; concrete reporters implement it.
        """

        raise NotImplementedError


@dataclass(slots=True)
class EventRecorder(Reporter):
    """Reporter that stores every event it receives."""

    events: list[RunEvent] = field(default_factory=list)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def emit(self, event: RunEvent) -> None:
        with self._lock:
            self.events.append(event)

    def of_type(self, event_type: type[RunEvent]) -> list[RunEvent]:
        """Return the recorded events that are instances of ``event_type``."""

        with self._lock:
            return [event for event in self.events if isinstance(event, event_type)]


class ConsoleReporter(Reporter):
    """Render run events to a Rich console, one event at a time."""

    def __init__(self, console: Console, *, use_emoji: bool = True, show_commands: bool = False) -> None:
        """Initialise the reporter.

        Args:
            console: Rich console receiving the rendered output.
            use_emoji: Whether status lines may include emoji glyphs.
            show_commands: Print every command before it runs, not only
                verbose ones.
        """

        self._console = console
        self._use_emoji = use_emoji
        self._show_commands = show_commands
        self._lock = Lock()

    def emit(self, event: RunEvent) -> None:
        with self._lock:
            self._render(event)

    def _render(self, event: RunEvent) -> None:
        if isinstance(event, ToolSummary):
            self._render_summary(event)
        elif isinstance(event, CurrentCommand):
            self._render_command(event)
        elif isinstance(event, OutputLine):
            self._console.out(event.text, highlight=False)
        elif isinstance(event, Retrying):
            self._console.print(Text(f"Re-running {event.tool} with {event.strategy.value} output", style="dim"))
        elif isinstance(event, RunSucceeded):
            self._render_success(event)
        elif isinstance(event, RunFailed):
            self._render_failure(event)
        elif isinstance(event, BatchSummary):
            self._render_batch(event)

    def _render_summary(self, event: ToolSummary) -> None:
        text = Text()
        text.append(event.name, style="bold")
        if event.description:
            text.append(f" {event.description}", style="dim")
        self._console.print()
        self._console.print(text)

    def _render_command(self, event: CurrentCommand) -> None:
        if event.strategy is not Strategy.VERBOSE and not self._show_commands:
            return
        self._console.print(Text("Now Running:", style="bold"))
        self._console.print(Text(event.command, style="bright_black"))

    def _render_success(self, event: RunSucceeded) -> None:
        timer = event.timer
        text = Text()
        text.append(self._glyph("✅ "))
        text.append("Success", style="bold green")
        text.append(f" {timer.total_seconds}s", style="green")
        if timer.prepped:
            text.append(f" ({timer.prep_percent}% prep ~{timer.prep_seconds}s)", style="yellow")
        self._console.print(text)

    def _render_failure(self, event: RunFailed) -> None:
        result = event.result
        text = Text()
        text.append(self._glyph("❌ "))
        text.append("Failure", style="bold red")
        text.append(f" {result.details}", style="dim")
        self._console.print(text)
        if result.total_failure:
            self._console.print(Text("Unrecoverable Error:", style="bold red"))
            output = result.output.strip()
            if output:
                self._console.print(Text(output, style="bright_black"))
        if event.command is not None:
            self._console.print()
            self._console.print(Text("Failed Command:", style="bold"))
            self._console.print(Text(event.command, style="bright_black"))
        if event.links:
            self._render_guidance(event.links)

    def _render_guidance(self, links: Mapping[str, str]) -> None:
        self._console.print()
        self._console.print(Text("Guidance:", style="bold"))
        for label, url in links.items():
            text = Text(f"{label}: ", style="dim")
            text.append(url, style="cyan")
            self._console.print(text)

    def _render_batch(self, event: BatchSummary) -> None:
        text = Text()
        text.append(f"~{round(event.seconds, 1)} seconds", style="bold")
        if event.tool_count > 1:
            text.append(f" for {event.tool_count} tools", style="dim")
        self._console.print()
        self._console.print(text)

    def _glyph(self, symbol: str) -> str:
        return symbol if self._use_emoji else ""


__all__ = [
    "BatchSummary",
    "ConsoleReporter",
    "CurrentCommand",
    "EventRecorder",
    "OutputLine",
    "Reporter",
    "Retrying",
    "RunEvent",
    "RunFailed",
    "RunSucceeded",
    "ToolSummary",
]
