# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI application entry point wiring the review, format and list commands."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from ..batch import Batch, BatchReport
from ..config import Config, ConfigError, load_config
from ..history import History
from ..logging import configure_logging
from ..reporting import ConsoleReporter
from ..shell.executor import ShellExecutor
from ..strategies import Strategy
from ..tools import CommandType
from .shared import CLIError, CLILogger, RunOptions, build_cli_logger

app = typer.Typer(
    name="pyreview",
    help="Run configured code review tools with adaptive verbosity.",
    no_args_is_help=True,
    add_completion=False,
)

ToolsArgument = Annotated[list[str] | None, typer.Argument(help="Tool keys to run (default: all enabled tools).")]
TagOption = Annotated[list[str] | None, typer.Option("--tag", "-t", help="Run enabled tools carrying this tag.")]
RootOption = Annotated[Path, typer.Option("--root", help="Project root.", file_okay=False, resolve_path=True)]
ConfigOption = Annotated[Path | None, typer.Option("--config", "-c", help="Configuration file to load.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Stream tool output from the start.")]
JobsOption = Annotated[int | None, typer.Option("--jobs", "-j", min=1, help="Number of tools to run concurrently.")]
NoColorOption = Annotated[bool, typer.Option("--no-color", help="Disable ANSI colour output.")]
NoEmojiOption = Annotated[bool, typer.Option("--no-emoji", help="Disable emoji output.")]
ShowCommandsOption = Annotated[bool, typer.Option("--show-commands", help="Print every command before it runs.")]
DebugOption = Annotated[bool, typer.Option("--debug", help="Enable debug logging.")]


def _run_command(command_type: CommandType) -> Callable[..., None]:
    """Return a Typer callback that runs ``command_type`` for each selected tool."""

    def run(
        tools: ToolsArgument = None,
        tag: TagOption = None,
        root: RootOption = Path("."),
        config: ConfigOption = None,
        verbose: VerboseOption = False,
        jobs: JobsOption = None,
        no_color: NoColorOption = False,
        no_emoji: NoEmojiOption = False,
        show_commands: ShowCommandsOption = False,
        debug: DebugOption = False,
    ) -> None:
        options = RunOptions(
            tools=list(tools or []),
            tags=list(tag or []),
            root=root,
            config=config,
            verbose=verbose,
            jobs=jobs,
            no_color=no_color,
            no_emoji=no_emoji,
            show_commands=show_commands,
            debug=debug,
        )
        raise typer.Exit(code=_execute(command_type, options))

    return run


app.command("review", help="Run the review command of each selected tool.")(_run_command(CommandType.REVIEW))
app.command("format", help="Run the format command of each selected tool.")(_run_command(CommandType.FORMAT))


@app.command("list")
def list_tools(
    root: RootOption = Path("."),
    config: ConfigOption = None,
    no_color: NoColorOption = False,
    no_emoji: NoEmojiOption = False,
) -> None:
    """List the configured tools."""

    logger = build_cli_logger(color=not no_color, emoji=not no_emoji)
    loaded = _load(root, config, logger)
    if not loaded.tools:
        logger.warn("No tools configured")
        raise typer.Exit(code=0)
    table = Table(title="Configured tools")
    table.add_column("Key", style="bold")
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("Commands")
    table.add_column("Enabled")
    for tool in loaded.tools.values():
        commands = ", ".join(command.value for command in CommandType if tool.supports(command))
        table.add_row(tool.key, tool.display_name, tool.description, commands, "yes" if tool.enabled else "no")
    logger.console.print(table)


def _execute(command_type: CommandType, options: RunOptions) -> int:
    configure_logging(debug=options.debug)
    logger = build_cli_logger(color=not options.no_color, emoji=not options.no_emoji)
    loaded = _load(options.root, options.config, logger)
    try:
        selected = loaded.select(options.tools, tags=options.tags)
    except ConfigError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=2) from exc
    if not selected:
        logger.warn(f"No tools selected for {command_type.value}")
        return 0

    settings = loaded.settings
    use_color = settings.color and not options.no_color
    use_emoji = settings.emoji and not options.no_emoji
    logger = build_cli_logger(color=use_color, emoji=use_emoji)
    reporter = ConsoleReporter(logger.console, use_emoji=use_emoji, show_commands=options.show_commands)
    strategy = Strategy.VERBOSE if options.verbose else settings.default_strategy
    batch = Batch(
        selected,
        command_type,
        history=History(max_age=settings.prep_max_age),
        reporter=reporter,
        executor=ShellExecutor(cwd=options.root),
        strategy=strategy,
        jobs=options.jobs or settings.jobs,
    )
    report = batch.run()
    _summarise(report, logger)
    return report.exit_status


def _load(root: Path, config: Path | None, logger: CLILogger) -> Config:
    try:
        return _load_or_raise(root, config)
    except CLIError as exc:
        logger.fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc


def _load_or_raise(root: Path, config: Path | None) -> Config:
    try:
        return load_config(root, config)
    except ConfigError as exc:
        raise CLIError(str(exc)) from exc


def _summarise(report: BatchReport, logger: CLILogger) -> None:
    for key in report.skipped:
        logger.info(f"Skipped {key}: no matching command configured")
    failed = [key for key, status in report.results.items() if status != 0]
    if failed:
        logger.fail(f"Failed: {', '.join(failed)}")
    else:
        logger.ok("All tools passed")


__all__ = ["app"]
