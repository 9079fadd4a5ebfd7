# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for tool definitions and command assembly."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pyreview.strategies import Strategy
from pyreview.tools import (
    CommandType,
    Tool,
    ToolCommandError,
    ToolCommands,
    assemble_command,
    render_flags,
)


def _tool(**overrides: object) -> Tool:
    payload: dict[str, object] = {
        "key": "rubocop",
        "commands": ToolCommands(prepare="bundle install", review="bundle exec rubocop", format="rubocop -A"),
        "env": {"rubocop_opts": "--cache true"},
        "flags": {"parallel": True, "format": "simple", "c": ".rubocop.yml", "debug": False},
        "quiet_option": "--format quiet",
    }
    payload.update(overrides)
    return Tool.model_validate(payload)


def test_review_command_quiet_includes_env_flags_and_quiet_option() -> None:
    command = assemble_command(_tool(), CommandType.REVIEW, Strategy.QUIET)

    assert command == (
        "RUBOCOP_OPTS='--cache true' bundle exec rubocop --parallel --format simple -c .rubocop.yml --format quiet"
    )


def test_verbose_omits_quiet_option() -> None:
    command = assemble_command(_tool(), CommandType.REVIEW, Strategy.VERBOSE)

    assert command.endswith("-c .rubocop.yml")
    assert "--format quiet" not in command


def test_prepare_command_has_no_flags() -> None:
    command = assemble_command(_tool(), CommandType.PREPARE, Strategy.QUIET)

    assert command == "RUBOCOP_OPTS='--cache true' bundle install"


def test_missing_command_type_raises() -> None:
    tool = _tool(commands=ToolCommands(review="ruff check"))

    assert not tool.prepares
    assert not tool.supports(CommandType.FORMAT)
    with pytest.raises(ToolCommandError) as excinfo:
        assemble_command(tool, CommandType.FORMAT, Strategy.QUIET)
    assert excinfo.value.tool_key == "rubocop"
    assert excinfo.value.command_type is CommandType.FORMAT


def test_render_flags_quotes_values() -> None:
    assert list(render_flags({"exclude": "a b", "n": 4})) == ["--exclude 'a b'", "-n 4"]


def test_display_name_defaults_to_key() -> None:
    assert _tool().display_name == "rubocop"
    assert _tool(name="RuboCop").display_name == "RuboCop"


def test_tool_rejects_unknown_fields_and_blank_keys() -> None:
    with pytest.raises(ValidationError):
        _tool(unexpected=True)
    with pytest.raises(ValidationError):
        _tool(key="  ")


def test_tool_is_immutable() -> None:
    tool = _tool()
    with pytest.raises(ValidationError):
        tool.description = "changed"  # type: ignore[misc]


@pytest.mark.parametrize("template", ["", "   ", "\t\n"])
def test_command_templates_reject_blank_strings(template: str) -> None:
    with pytest.raises(ValidationError, match="must not be blank"):
        ToolCommands(review=template)


def test_command_templates_reject_shell_operators() -> None:
    with pytest.raises(ValidationError, match="shell operator '&&'"):
        ToolCommands(prepare="bundle install && bundle exec rake")

    commands = ToolCommands(review="grep -r 'a && b' src")
    assert commands.review == "grep -r 'a && b' src"


def test_quiet_option_rejects_shell_operators() -> None:
    with pytest.raises(ValidationError, match="quiet option"):
        _tool(quiet_option="--quiet > /dev/null")
