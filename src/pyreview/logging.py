# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Diagnostic logging for the ``pyreview`` logger hierarchy."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from .console import build_console


def configure_logging(*, debug: bool) -> None:
    """Route the ``pyreview`` logger hierarchy through Rich on standard error.

    Args:
        debug: Emit debug records when ``True``; otherwise only warnings and above.
    """

    logger = logging.getLogger("pyreview")
    logger.handlers.clear()
    console = build_console(color=True, emoji=False, stderr=True)
    handler = RichHandler(console=console, show_path=False, markup=False, rich_tracebacks=debug)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False


__all__ = ["configure_logging"]
