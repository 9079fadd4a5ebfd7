# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""In-memory record of which tools have completed their preparation step.

A :class:`History` is owned explicitly by whoever orchestrates a batch and is
handed to each runner. Entries live for the lifetime of the instance; they
never expire unless a maximum age is configured, and :meth:`History.reset`
clears them all.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from threading import Lock

ToolKey = Hashable
Clock = Callable[[], float]


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Use this container to describe the preparation status of one tool.

    Attributes:
        tool_key: Identity of the tool the entry belongs to.
        last_prepared_at: Clock reading taken when preparation last succeeded.
    """

    tool_key: ToolKey
    last_prepared_at: float


class History:
    """Thread-safe cache of successful preparation runs keyed by tool."""

    def __init__(self, *, max_age: float | None = None, clock: Clock = time.time) -> None:
        """Initialise an empty history.

        Args:
            max_age: Seconds after which a recorded preparation is considered
                stale, ``None`` to keep entries until :meth:`reset`.
            clock: Callable returning the current time in seconds.

        Raises:
            ValueError: If ``max_age`` is negative.
        """

        if max_age is not None and max_age < 0:
            raise ValueError("max_age must be non-negative")
        self._max_age = max_age
        self._clock = clock
        self._entries: dict[ToolKey, HistoryEntry] = {}
        self._lock = Lock()

    @property
    def max_age(self) -> float | None:
        return self._max_age

    def should_prepare(self, tool_key: ToolKey) -> bool:
        """Return ``True`` when ``tool_key`` still needs its preparation step.

        Args:
            tool_key: Identity of the tool about to run.

        Returns:
            bool: ``True`` when no successful preparation is on record or the
            recorded one is older than the configured maximum age.
        """

        with self._lock:
            entry = self._entries.get(tool_key)
        if entry is None:
            return True
        if self._max_age is None:
            return False
        return self._clock() - entry.last_prepared_at > self._max_age

    def record_success(self, tool_key: ToolKey) -> None:
        """Mark the preparation of ``tool_key`` as satisfied as of now."""

        entry = HistoryEntry(tool_key=tool_key, last_prepared_at=self._clock())
        with self._lock:
            self._entries[tool_key] = entry

    def reset(self) -> None:
        """Forget every recorded preparation."""

        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, tool_key: object) -> bool:
        with self._lock:
            return tool_key in self._entries


__all__ = ["History", "HistoryEntry", "ToolKey"]
