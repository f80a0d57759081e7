"""
Text progress reporting for filter runs.

Formatting is pure: every function here returns a fresh string and keeps no
state, so filters may call them concurrently. ConsoleReporter writes those
strings to a stream without any locking. Lines from concurrent filters may
interleave on the console; each write is a self-contained line.
"""

import math
import sys
from typing import Optional, TextIO

from ..core import FilterResult, PixelBuffer, RunSummary

BAR_WIDTH = 40
LABEL_WIDTH = 9
RULE = "=" * 41


def clamp_fraction(fraction: float) -> float:
    """Clamp to [0, 1]; NaN counts as no progress."""
    if math.isnan(fraction):
        return 0.0
    return max(0.0, min(1.0, fraction))


def render_progress(label: str, fraction: float) -> str:
    """
    Render a single progress line.

    Example:
        >>> render_progress("Blur", 0.5)
        'Blur      [====================>                   ]  50%'
    """
    fraction = clamp_fraction(fraction)
    pos = int(BAR_WIDTH * fraction)
    bar = "".join(
        "=" if i < pos else ">" if i == pos else " "
        for i in range(BAR_WIDTH)
    )
    return f"{label:<{LABEL_WIDTH}} [{bar}] {int(fraction * 100):3d}%"


def format_loaded(buffer: PixelBuffer) -> str:
    return f"Loaded image: {buffer.width} x {buffer.height} ({buffer.channels} channels)"


def format_result(result: FilterResult) -> str:
    """Completion line for one filter; failures are never omitted."""
    if result.succeeded:
        return f"✓ {result.name} completed in {result.elapsed:.3f} sec -> {result.output_path}"
    return f"✗ {result.name} failed after {result.elapsed:.3f} sec: {result.error}"


def format_summary(summary: RunSummary) -> str:
    """Final aggregate block."""
    total = len(summary.results)
    if summary.all_succeeded:
        headline = "All filters completed successfully!"
    else:
        failed = ", ".join(r.name for r in summary.failed)
        headline = f"{len(summary.succeeded)} of {total} filters completed; failed: {failed}"

    lines = [
        RULE,
        headline,
        f"Total elapsed time: {summary.total_elapsed:.3f} sec",
        f"CPU time used: {summary.cpu_user:.3f} sec (user) + {summary.cpu_system:.3f} sec (system)",
        RULE,
    ]
    return "\n".join(lines)


class ConsoleReporter:
    """Writes progress, completion and summary lines to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def loaded(self, buffer: PixelBuffer) -> None:
        self._write(format_loaded(buffer) + "\n")

    def progress(self, label: str, fraction: float) -> None:
        """Redraw the evolving progress line for one filter."""
        self._write("\r" + render_progress(label, fraction))

    def completed(self, result: FilterResult) -> None:
        self._write("\n" + format_result(result) + "\n")

    def summary(self, summary: RunSummary) -> None:
        self._write("\n" + format_summary(summary) + "\n")
