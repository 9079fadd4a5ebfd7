# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rich console construction for pyreview's terminal output."""

from __future__ import annotations

from rich.console import Console


def build_console(*, color: bool, emoji: bool, stderr: bool = False) -> Console:
    """Return a console honouring the colour and emoji presentation settings.

    Rich still decides whether the stream is a terminal; ``color=False`` only
    forces plain output on top of that.

    Args:
        color: ``False`` to strip every style from rendered text.
        emoji: ``False`` to leave ``:name:`` codes unexpanded.
        stderr: Write to standard error instead of standard output.

    Returns:
        Console: A fresh console; tool output lines are never soft-wrapped.
    """

    return Console(stderr=stderr, no_color=not color, emoji=emoji, soft_wrap=True, highlight=False)


__all__ = ["build_console"]
