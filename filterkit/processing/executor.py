"""
Processing executor - runs one filter task from pixels to file.

A task computes its output from the shared buffer, encodes it to the
filter's own output path, and reports a FilterResult. Failures stay inside
the task: they become a FAILURE result instead of propagating into the pool.
"""

import logging
from typing import Callable, Optional

import numpy as np

from ..core import (
    AllocationError,
    EncodeError,
    FilterResult,
    FilterStatus,
    PixelBuffer,
    SystemClock,
)
from ..oiio import OiioAdapter
from .filters import DEFAULT_CADENCE, ProcessingFilter
from .progress import ConsoleReporter

logger = logging.getLogger(__name__)

Encoder = Callable[[str, np.ndarray, int], None]


class FilterExecutor:
    """Executes a single filter task on a shared PixelBuffer."""

    def __init__(
        self,
        reporter: Optional[ConsoleReporter] = None,
        clock=None,
        encoder: Optional[Encoder] = None,
        quality: int = 100,
        cadence: float = DEFAULT_CADENCE,
    ):
        self.reporter = reporter if reporter is not None else ConsoleReporter()
        self.clock = clock if clock is not None else SystemClock()
        self.encoder = encoder if encoder is not None else OiioAdapter.write_image
        self.quality = quality
        self.cadence = cadence

    def execute(
        self,
        filter: ProcessingFilter,
        buffer: PixelBuffer,
        output_path: str,
    ) -> FilterResult:
        """
        Apply a filter and write its output.

        Elapsed time covers allocation, the pixel loop and the encode call.

        Args:
            filter: Filter to apply
            buffer: Shared input image, read-only
            output_path: File this task alone writes to

        Returns:
            FilterResult with SUCCESS or FAILURE status
        """
        start = self.clock.now()
        error = None

        def on_progress(fraction: float) -> None:
            self.reporter.progress(filter.label, fraction)

        try:
            output = filter.apply(buffer, progress=on_progress, cadence=self.cadence)
            self.encoder(output_path, output, self.quality)
            self.reporter.progress(filter.label, 1.0)

        except (AllocationError, EncodeError) as e:
            error = str(e)
            logger.error("Filter %s failed: %s", filter.name, e)

        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            logger.exception("Unexpected error in filter %s", filter.name)

        elapsed = self.clock.now() - start
        result = FilterResult(
            name=filter.name,
            elapsed=elapsed,
            output_path=output_path,
            status=FilterStatus.SUCCESS if error is None else FilterStatus.FAILURE,
            error=error,
        )
        self.reporter.completed(result)
        return result
