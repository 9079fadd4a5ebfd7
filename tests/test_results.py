# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for exit status classification."""

from __future__ import annotations

import pytest

from pyreview.results import Severity, Stage, classify, severity_for
from pyreview.shell.executor import COMMAND_NOT_FOUND, ExecutionOutcome
from pyreview.shell.timer import Timer


@pytest.mark.parametrize("exit_status", [0, 1, 2, 3, 64, 125, 126, 127, 128, 130, 255, -9])
def test_success_only_for_zero(exit_status: int) -> None:
    result = classify(ExecutionOutcome("tool", exit_status), Timer())

    assert result.success is (exit_status == 0)


@pytest.mark.parametrize(
    ("exit_status", "expected"),
    [
        (0, Severity.SUCCESS),
        (1, Severity.STANDARD_FAILURE),
        (2, Severity.STANDARD_FAILURE),
        (125, Severity.STANDARD_FAILURE),
        (126, Severity.TOTAL_FAILURE),
        (127, Severity.TOTAL_FAILURE),
        (128, Severity.STANDARD_FAILURE),
    ],
)
def test_severity_tiers(exit_status: int, expected: Severity) -> None:
    assert severity_for(exit_status) is expected
    assert classify(ExecutionOutcome("tool", exit_status), Timer()).total_failure is (
        expected is Severity.TOTAL_FAILURE
    )


def test_classification_is_idempotent() -> None:
    outcome = ExecutionOutcome("ruff check", 1, "E501 line too long\n")
    timer = Timer(main=0.5)

    first = classify(outcome, timer)
    second = classify(outcome, timer)

    assert first == second
    assert first.severity is second.severity
    assert first.output == second.output == "E501 line too long\n"


def test_result_exposes_outcome_details() -> None:
    timer = Timer(main=0.2)
    result = classify(ExecutionOutcome("mypy src", 2, "error\n"), timer)

    assert result.exit_status == 2
    assert result.command == "mypy src"
    assert result.output == "error\n"
    assert result.timer is timer
    assert result.details == "Exit Status 2"
    assert result.stage is Stage.MAIN


def test_failed_preparation_is_a_standard_failure() -> None:
    result = classify(ExecutionOutcome("missing", COMMAND_NOT_FOUND), Timer(), stage=Stage.PREPARE)

    assert result.severity is Severity.STANDARD_FAILURE
    assert not result.total_failure
    assert result.exit_status == COMMAND_NOT_FOUND
    assert result.details.startswith("Preparation failed")
