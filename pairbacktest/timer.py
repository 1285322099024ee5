"""Wall-clock and high-resolution counters, plus counter frequency estimation."""

from __future__ import annotations

import time

__all__ = ["read_os_timer", "read_cpu_timer", "estimate_cpu_freq"]


def read_os_timer() -> int:
    """Return the wall-clock time in microseconds since the epoch."""
    return time.time_ns() // 1000


def read_cpu_timer() -> int:
    """Return the current value of the high-resolution monotonic counter."""
    return time.perf_counter_ns()


def estimate_cpu_freq(ms: int) -> int:
    """Estimate how many counter ticks elapse per second.

    Busy-waits for ``ms`` milliseconds of wall-clock time and compares the
    counter's progress against it. Returns 0 when no wall time elapsed.
    """
    cpu_start = read_cpu_timer()
    os_start = read_os_timer()
    os_elapsed = 0
    os_wait_time = 1_000_000 * ms // 1000

    while os_elapsed < os_wait_time:
        os_elapsed = read_os_timer() - os_start

    cpu_elapsed = read_cpu_timer() - cpu_start
    if not os_elapsed:
        return 0
    return 1_000_000 * cpu_elapsed // os_elapsed