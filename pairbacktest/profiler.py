"""Hierarchical block profiler with exclusive and inclusive timings."""

from __future__ import annotations

import functools
import math
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, TextIO

from pairbacktest.timer import estimate_cpu_freq, read_cpu_timer

__all__ = ["Anchor", "Profiler", "format_anchor"]

_MEGABYTE = 1024.0 * 1024.0
_GIGABYTE = _MEGABYTE * 1024.0


def _ratio(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator:
        return math.copysign(math.inf, numerator)
    return math.nan


@dataclass
class Anchor:
    """Accumulated timings for one labelled block."""

    label: str
    hit_count: int = 0
    processed_data: int = 0
    elapsed_exclusive: int = 0
    elapsed_inclusive: int = 0


def format_anchor(total_elapsed: int, anchor: Anchor, cpu_freq: int) -> str:
    """Render one anchor's timings as a report line."""
    percent = 100.0 * _ratio(anchor.elapsed_exclusive, total_elapsed)
    ms = _ratio(anchor.elapsed_exclusive, cpu_freq) * 1000.0
    text = (
        f"   {anchor.label}[{anchor.hit_count}]: {anchor.elapsed_exclusive} "
        f"({ms:f}ms) ({percent:.2f}%"
    )

    if anchor.elapsed_inclusive != anchor.elapsed_exclusive:
        with_children = 100.0 * _ratio(anchor.elapsed_inclusive, total_elapsed)
        text += f", {with_children:.2f}% w/children"

    if anchor.processed_data:
        seconds = _ratio(anchor.elapsed_inclusive, cpu_freq)
        bytes_per_second = _ratio(anchor.processed_data, seconds)
        megabytes = anchor.processed_data / _MEGABYTE
        gigabytes_per_second = bytes_per_second / _GIGABYTE
        text += f"   {megabytes:.3f}mb at {gigabytes_per_second:.2f}gb/s"

    return text + ")"


@dataclass
class Profiler:
    """Collects timings of nested, labelled blocks.

    ``clock`` supplies counter ticks; ``cpu_freq`` is the tick rate, or
    ``None`` to estimate it when the report is printed.
    """

    clock: Callable[[], int] = read_cpu_timer
    cpu_freq: int | None = None
    anchors: dict[str, Anchor] = field(default_factory=dict)
    start_tsc: int = 0
    end_tsc: int = 0
    _stack: list[Anchor] = field(default_factory=list, init=False, repr=False)

    def start(self) -> None:
        """Mark the beginning of the profiled run."""
        self.start_tsc = self.clock()

    @contextmanager
    def time_block(self, label: str, processed_data: int = 0) -> Iterator[Anchor]:
        """Time the enclosed block under ``label``."""
        anchor = self.anchors.get(label)
        if anchor is None:
            anchor = self.anchors[label] = Anchor(label)
        old_inclusive = anchor.elapsed_inclusive
        anchor.processed_data += processed_data
        self._stack.append(anchor)
        start = self.clock()
        try:
            yield anchor
        finally:
            elapsed = self.clock() - start
            self._stack.pop()
            if self._stack:
                self._stack[-1].elapsed_exclusive -= elapsed
            anchor.elapsed_exclusive += elapsed
            anchor.elapsed_inclusive = old_inclusive + elapsed
            anchor.hit_count += 1

    def time_function(self, func: Callable) -> Callable:
        """Decorate ``func`` so every call is timed under its name."""

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with self.time_block(func.__name__):
                return func(*args, **kwargs)

        return wrapper

    def report(self, total_elapsed: int, cpu_freq: int) -> list[str]:
        """Return report lines for every anchor that recorded time."""
        return [
            format_anchor(total_elapsed, anchor, cpu_freq)
            for anchor in self.anchors.values()
            if anchor.elapsed_inclusive
        ]

    def end_and_print(self, out: TextIO | None = None) -> None:
        """Mark the end of the run and write the report to ``out``."""
        out = sys.stdout if out is None else out
        self.end_tsc = self.clock()
        cpu_freq = self.cpu_freq if self.cpu_freq is not None else estimate_cpu_freq(1000)
        total_elapsed = self.end_tsc - self.start_tsc

        if cpu_freq:
            total_ms = 1000.0 * total_elapsed / cpu_freq
            out.write(f"\n Total time: {total_ms:.0f}ms (CPU freq {cpu_freq})\n")

        for line in self.report(total_elapsed, cpu_freq):
            out.write(line + "\n")