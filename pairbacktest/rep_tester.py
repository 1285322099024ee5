"""Repetition tester: track min, max and mean timings of repeated runs."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import TextIO

__all__ = ["Tester", "format_throughput"]

_MEGABYTE = 1024.0 * 1024.0
_GIGABYTE = _MEGABYTE * 1024.0
_INT_MAX = 2**31 - 1


def _ratio(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator:
        return math.copysign(math.inf, numerator)
    return math.nan


def format_throughput(seconds: float, size: int) -> str:
    """Describe ``size`` bytes processed in ``seconds`` as size and rate."""
    bytes_per_second = _ratio(size, seconds)
    megabytes = size / _MEGABYTE
    gigabytes_per_second = bytes_per_second / _GIGABYTE
    return f"   {megabytes:.3f}mb at {gigabytes_per_second:.2f}gb/s "


@dataclass
class Tester:
    """Timing statistics for a function run repeatedly.

    ``try_for_time`` is how many seconds to keep testing after the last new
    minimum; ``cpu_freq`` is the tick rate of the timings added.
    """

    try_for_time: float
    cpu_freq: int
    min_time: int = _INT_MAX
    max_time: int = 0
    time_since_last_update: int = 0
    total_time: int = 0
    total_count: int = 0

    def add_time(self, elapsed: int) -> None:
        """Record one run that took ``elapsed`` ticks."""
        if self.min_time > elapsed:
            self.min_time = elapsed
            self.time_since_last_update = 0
        else:
            self.time_since_last_update += elapsed

        if self.max_time < elapsed:
            self.max_time = elapsed

        self.total_time += elapsed
        self.total_count += 1

    def should_test(self) -> bool:
        """Whether testing should continue looking for a new minimum."""
        return self.try_for_time >= _ratio(self.time_since_last_update, self.cpu_freq)

    def format_result(self, function_name: str, processed_data: int) -> str:
        """Render min, average and max timings with throughput."""
        min_seconds = _ratio(self.min_time, self.cpu_freq)
        avg_seconds = _ratio(_ratio(self.total_time, self.total_count), self.cpu_freq)
        max_seconds = _ratio(self.max_time, self.cpu_freq)

        lines = [f"---- {function_name} ----"]
        for name, seconds in (("Min", min_seconds), ("Avg", avg_seconds), ("Max", max_seconds)):
            lines.append(
                f"{name} time: {seconds * 1000.0:f}ms"
                + format_throughput(seconds, processed_data)
            )
        return "\n".join(lines) + "\n"

    def print_result(
        self, function_name: str, processed_data: int, out: TextIO | None = None
    ) -> None:
        """Write the result of :meth:`format_result` to ``out``."""
        (sys.stdout if out is None else out).write(
            self.format_result(function_name, processed_data)
        )