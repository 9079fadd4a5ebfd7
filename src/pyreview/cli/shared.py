# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, options)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

from rich.console import Console
from rich.text import Text

from ..console import build_console

_STATUS_STYLES: Final[dict[str, tuple[str, str]]] = {
    "info": ("ℹ️ ", "cyan"),
    "ok": ("✅ ", "green"),
    "warn": ("⚠️ ", "yellow"),
    "fail": ("❌ ", "red"),
}


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 2) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Print one-line status messages around a batch run.

    Attributes:
        console: Destination console; its colour setting decides whether styles show.
        use_emoji: Prefix each message with a status glyph.
    """

    console: Console
    use_emoji: bool = True

    def fail(self, message: str) -> None:
        self._status("fail", message)

    def warn(self, message: str) -> None:
        self._status("warn", message)

    def ok(self, message: str) -> None:
        self._status("ok", message)

    def info(self, message: str) -> None:
        self._status("info", message)

    def _status(self, kind: str, message: str) -> None:
        glyph, style = _STATUS_STYLES[kind]
        prefix = glyph if self.use_emoji else ""
        self.console.print(Text(f"{prefix}{message}", style=style))


def build_cli_logger(*, color: bool, emoji: bool) -> CLILogger:
    """Return a :class:`CLILogger` writing to a console built for the presentation flags."""

    return CLILogger(console=build_console(color=color, emoji=emoji), use_emoji=emoji)


@dataclass(slots=True)
class RunOptions:
    """Options shared by the ``review`` and ``format`` commands.

    Attributes:
        tools: Tool keys named on the command line.
        tags: Tags selecting groups of tools when none are named.
        root: Project root used for configuration discovery and as working directory.
        config: Explicit configuration file.
        verbose: Start every tool with the verbose strategy.
        jobs: Concurrency override, ``None`` to use the configured value.
        no_color: Disable colour output.
        no_emoji: Disable emoji output.
        show_commands: Print every command before it runs.
        debug: Enable debug logging.
    """

    tools: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    root: Path = field(default_factory=Path.cwd)
    config: Path | None = None
    verbose: bool = False
    jobs: int | None = None
    no_color: bool = False
    no_emoji: bool = False
    show_commands: bool = False
    debug: bool = False


__all__ = ["CLIError", "CLILogger", "RunOptions", "build_cli_logger"]
