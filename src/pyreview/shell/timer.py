# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Wall-clock timing for the preparation and main phases of a tool run."""

from __future__ import annotations

import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

ResultT = TypeVar("ResultT")


@dataclass(slots=True)
class Timer:
    """Measure preparation and main durations and derive totals from them.

    Attributes:
        prep: Seconds spent running the preparation command, when one ran.
        main: Seconds spent running the main command, when it ran.
    """

    prep: float | None = None
    main: float | None = None

    def record_prep(self, work: Callable[[], ResultT]) -> ResultT:
        """Run ``work`` and record its duration as preparation time.

        Args:
            work: Zero-argument callable performing the preparation.

        Returns:
            ResultT: Whatever ``work`` returned.
        """

        result, self.prep = _measure(work)
        return result

    def record_main(self, work: Callable[[], ResultT]) -> ResultT:
        """Run ``work`` and record its duration as main time.

        Args:
            work: Zero-argument callable performing the main command.

        Returns:
            ResultT: Whatever ``work`` returned.
        """

        result, self.main = _measure(work)
        return result

    @property
    def total(self) -> float:
        """Return the sum of the recorded durations."""

        return sum(value for value in (self.prep, self.main) if value is not None)

    @property
    def prepped(self) -> bool:
        """Return ``True`` when both preparation and main time were recorded."""

        return self.prep is not None and self.main is not None

    @property
    def prep_seconds(self) -> float | None:
        return None if self.prep is None else round(self.prep, 2)

    @property
    def main_seconds(self) -> float | None:
        return None if self.main is None else round(self.main, 2)

    @property
    def total_seconds(self) -> float:
        return round(self.total, 2)

    @property
    def prep_percent(self) -> int | None:
        """Return the share of total time spent preparing, as a whole percentage.

        Returns:
            int | None: Percentage rounded half up, or ``None`` unless both phases were
            recorded.
        """

        prep, main = self.prep, self.main
        if prep is None or main is None:
            return None
        total = prep + main
        if total == 0:
            return 0
        return math.floor(prep * 100 / total + 0.5)


def _measure(work: Callable[[], ResultT]) -> tuple[ResultT, float]:
    started = time.perf_counter()
    result = work()
    return result, time.perf_counter() - started


__all__ = ["Timer"]
