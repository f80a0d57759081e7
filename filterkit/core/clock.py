"""
Clock abstraction for wall-clock and process CPU time.

The coordinator and executor take a clock instead of reading global timers
so tests can substitute deterministic values.
"""

import os
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class CpuTimes:
    """Process-wide CPU time in seconds."""
    user: float
    system: float

    def __sub__(self, other: "CpuTimes") -> "CpuTimes":
        return CpuTimes(user=self.user - other.user, system=self.system - other.system)


class SystemClock:
    """Clock backed by time.perf_counter and os.times."""

    def now(self) -> float:
        """Monotonic wall-clock seconds."""
        return time.perf_counter()

    def cpu_times(self) -> CpuTimes:
        """User and system CPU seconds consumed by this process."""
        t = os.times()
        return CpuTimes(user=t.user, system=t.system)
