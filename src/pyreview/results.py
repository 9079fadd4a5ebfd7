# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Classification of tool exit statuses into severity tiers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from .shell.executor import CANNOT_EXECUTE, COMMAND_NOT_FOUND, ExecutionOutcome
from .shell.timer import Timer

TOTAL_FAILURE_STATUSES: Final[frozenset[int]] = frozenset({CANNOT_EXECUTE, COMMAND_NOT_FOUND})


class Severity(str, Enum):
    """Enumerate the severity tiers a tool run can end in."""

    SUCCESS = "success"
    STANDARD_FAILURE = "standard_failure"
    TOTAL_FAILURE = "total_failure"


class Stage(str, Enum):
    """Enumerate the phases of a tool run that can produce a result."""

    PREPARE = "prepare"
    MAIN = "main"


def severity_for(exit_status: int) -> Severity:
    """Return the severity tier implied by ``exit_status``.

    Args:
        exit_status: Exit status reported for a command.

    Returns:
        Severity: ``SUCCESS`` for zero, ``TOTAL_FAILURE`` when the command
        could not be located or executed, otherwise ``STANDARD_FAILURE``.
    """

    if exit_status == 0:
        return Severity.SUCCESS
    if exit_status in TOTAL_FAILURE_STATUSES:
        return Severity.TOTAL_FAILURE
    return Severity.STANDARD_FAILURE


@dataclass(frozen=True, slots=True)
class Result:
    """Classified outcome of a tool run.

    Attributes:
        outcome: Execution outcome the classification was derived from.
        severity: Severity tier assigned to the outcome.
        timer: Timing measurements for the run.
        stage: Phase that produced ``outcome``.
    """

    outcome: ExecutionOutcome
    severity: Severity
    timer: Timer
    stage: Stage = Stage.MAIN

    @property
    def success(self) -> bool:
        return self.severity is Severity.SUCCESS

    @property
    def total_failure(self) -> bool:
        return self.severity is Severity.TOTAL_FAILURE

    @property
    def exit_status(self) -> int:
        return self.outcome.exit_status

    @property
    def output(self) -> str:
        return self.outcome.output

    @property
    def command(self) -> str:
        return self.outcome.command

    @property
    def details(self) -> str:
        """Return a short human readable description of the exit status."""

        prefix = "Preparation failed: " if self.stage is Stage.PREPARE and not self.success else ""
        return f"{prefix}Exit Status {self.exit_status}"


def classify(outcome: ExecutionOutcome, timer: Timer, *, stage: Stage = Stage.MAIN) -> Result:
    """Classify ``outcome`` into a :class:`Result`.

    Main-stage outcomes map straight through :func:`severity_for`. A failed
    preparation is always a standard failure of the whole run, whatever its
    exit status.

    Args:
        outcome: Raw execution outcome to classify.
        timer: Timer holding the measurements for the run.
        stage: Phase that produced ``outcome``.

    Returns:
        Result: Classified result.
    """

    severity = severity_for(outcome.exit_status)
    if stage is Stage.PREPARE and severity is Severity.TOTAL_FAILURE:
        severity = Severity.STANDARD_FAILURE
    return Result(outcome=outcome, severity=severity, timer=timer, stage=stage)


__all__ = ["Result", "Severity", "Stage", "TOTAL_FAILURE_STATUSES", "classify", "severity_for"]
