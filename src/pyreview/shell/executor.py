# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Subprocess execution for assembled tool command strings."""

from __future__ import annotations

import logging
import os
import re
import shlex
import shutil

# Bandit: subprocess usage is intentional; commands come from the project's own
# tool configuration and are executed as argument lists without a shell.
import subprocess  # nosec B404
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Final, cast

LOGGER = logging.getLogger(__name__)

COMMAND_NOT_FOUND: Final[int] = 127
CANNOT_EXECUTE: Final[int] = 126

_CONTROL_CHARS: Final[frozenset[str]] = frozenset("&|;<>()")
_ASSIGNMENT_RE: Final[re.Pattern[str]] = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)=(.*)$", re.DOTALL)


@dataclass(frozen=True, slots=True)
class ExecutionOutcome:
    """Raw result of a single subprocess invocation.

    Attributes:
        command: Literal command string that was requested.
        exit_status: Process exit status, or a conventional code when the
            process could not be spawned.
        output: Combined standard output and standard error text.
    """

    command: str
    exit_status: int
    output: str = ""

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0


@dataclass(frozen=True, slots=True)
class ParsedCommand:
    """Split form of a command string: leading env assignments plus argv."""

    env: Mapping[str, str]
    argv: tuple[str, ...]


def find_control_operator(command: str) -> str | None:
    """Return the first unquoted, unescaped shell control operator in ``command``.

    Quoting follows POSIX rules: nothing is special inside single quotes, and
    a backslash escapes the next character outside them.

    Args:
        command: Literal command string.

    Returns:
        str | None: The operator text (e.g. ``"&&"`` or ``">"``), or ``None``.
    """

    quote: str | None = None
    escaped = False
    start: int | None = None
    for index, char in enumerate(command):
        if start is not None:
            if char in _CONTROL_CHARS:
                continue
            return command[start:index]
        if escaped:
            escaped = False
        elif quote == "'":
            if char == "'":
                quote = None
        elif char == "\\":
            escaped = True
        elif quote == '"':
            if char == '"':
                quote = None
        elif char in "'\"":
            quote = char
        elif char in _CONTROL_CHARS:
            start = index
    return None if start is None else command[start:]


def parse_command(command: str) -> ParsedCommand:
    """Split ``command`` into environment assignments and an argument vector.

    Args:
        command: Literal command string such as ``"FOO=1 ruff check ."``.

    Returns:
        ParsedCommand: Environment assignments and the remaining argv.

    Raises:
        ValueError: If the string cannot be tokenised, names no executable, or
            uses shell control operators that cannot run without a shell.
    """

    operator = find_control_operator(command)
    if operator is not None:
        raise ValueError(f"command {command!r} uses shell operator {operator!r}; wrap it in a script instead")
    tokens = shlex.split(command)
    env: dict[str, str] = {}
    while tokens:
        match = _ASSIGNMENT_RE.match(tokens[0])
        if match is None:
            break
        env[match.group(1)] = match.group(2)
        tokens.pop(0)
    if not tokens:
        raise ValueError(f"command {command!r} does not name an executable")
    return ParsedCommand(env=env, argv=tuple(tokens))


@dataclass(slots=True)
class ShellExecutor:
    """Run command strings as subprocesses and capture their outcome.

    Spawn failures are reported as data rather than exceptions so that a
    missing binary shows up as exit status ``127`` and permission problems as
    ``126``.

    Attributes:
        env: Extra environment variables injected into every command.
        cwd: Working directory for spawned commands, ``None`` for the current one.
    """

    env: Mapping[str, str] = field(default_factory=dict)
    cwd: Path | None = None

    def run(
        self,
        command: str,
        *,
        stream: bool = False,
        sink: Callable[[str], None] | None = None,
    ) -> ExecutionOutcome:
        """Execute ``command`` and return its outcome.

        Args:
            command: Literal command string assembled for a tool.
            stream: When ``True`` forward each output line to ``sink`` as it arrives.
            sink: Receiver for streamed lines (without trailing newlines).

        Returns:
            ExecutionOutcome: Exit status and combined output.

        Raises:
            ValueError: If ``command`` is empty or cannot be tokenised.
        """

        parsed = parse_command(command)
        env = self._build_env(parsed.env)
        argv = _resolve_argv(parsed.argv, env)
        if argv is None:
            LOGGER.debug("executable not found command=%s", command)
            return ExecutionOutcome(
                command=command,
                exit_status=COMMAND_NOT_FOUND,
                output=f"{parsed.argv[0]}: command not found\n",
            )
        LOGGER.debug("spawning command=%s stream=%s", command, stream)
        try:
            # Bandit: argv is passed directly with shell expansion disabled.
            process = subprocess.Popen(  # nosec B603
                argv,
                cwd=str(self.cwd) if self.cwd is not None else None,
                env=env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except FileNotFoundError as exc:
            return ExecutionOutcome(command=command, exit_status=COMMAND_NOT_FOUND, output=f"{exc}\n")
        except OSError as exc:
            return ExecutionOutcome(command=command, exit_status=CANNOT_EXECUTE, output=f"{exc}\n")

        if stream:
            output = _stream_output(process, sink)
        else:
            output, _ = process.communicate()
        exit_status = process.wait()
        LOGGER.debug("finished command=%s exit_status=%s", command, exit_status)
        return ExecutionOutcome(command=command, exit_status=exit_status, output=output or "")

    def _build_env(self, assignments: Mapping[str, str]) -> dict[str, str]:
        merged = os.environ.copy()
        merged.update(self.env)
        merged.update(assignments)
        return merged


def _resolve_argv(argv: Sequence[str], env: Mapping[str, str]) -> list[str] | None:
    head, *rest = argv
    if os.sep in head or (os.altsep and os.altsep in head):
        return [str(Path(head)), *rest]
    resolved = shutil.which(head, path=env.get("PATH"))
    if resolved is None:
        return None
    return [resolved, *rest]


def _stream_output(process: subprocess.Popen[str], sink: Callable[[str], None] | None) -> str:
    chunks: list[str] = []
    stdout = cast(IO[str], process.stdout)
    with stdout:
        for line in stdout:
            chunks.append(line)
            if sink is not None:
                sink(line.rstrip("\n"))
    return "".join(chunks)


__all__ = [
    "CANNOT_EXECUTE",
    "COMMAND_NOT_FOUND",
    "ExecutionOutcome",
    "ParsedCommand",
    "ShellExecutor",
    "find_control_operator",
    "parse_command",
]
