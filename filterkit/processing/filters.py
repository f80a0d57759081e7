"""
Filter definitions for parallel image processing.

Each filter reads a shared, read-only PixelBuffer and produces a freshly
allocated output array of identical shape. Work is done in bands of
scanlines so progress can be reported between bands.

Channel policy:
- colour math touches the first min(channels, 3) channels
- any further channel (alpha) is copied through unchanged
- output buffers start zeroed, so untouched samples are 0
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

import numpy as np

from ..core import AllocationError, PixelBuffer

DEFAULT_CADENCE = 1 / 50

ProgressCallback = Callable[[float], None]


def allocate_output(buffer: PixelBuffer) -> np.ndarray:
    """Allocate a zeroed output array with the buffer's shape."""
    try:
        return np.zeros(buffer.shape, dtype=np.uint8)
    except MemoryError as e:
        raise AllocationError(
            f"Cannot allocate {buffer.width}x{buffer.height}x{buffer.channels} output buffer"
        ) from e


def band_size(height: int, cadence: float) -> int:
    """Scanlines per progress band."""
    return max(1, int(round(height * cadence)))


def invert_value(value: int) -> int:
    """Invert one 8-bit sample."""
    return 255 - value


@dataclass
class ProcessingFilter:
    """Base class for all processing filters."""
    filter_id: str
    name: str
    output_filename: str

    @property
    def label(self) -> str:
        """Label shown on the progress line."""
        return self.name

    def apply(
        self,
        buffer: PixelBuffer,
        progress: Optional[ProgressCallback] = None,
        cadence: float = DEFAULT_CADENCE,
    ) -> np.ndarray:
        """
        Run the filter over the whole image.

        Args:
            buffer: Shared input image (never written)
            progress: Called with the fraction of rows done before each band
            cadence: Band height as a fraction of the image height

        Returns:
            New uint8 array shaped like the input
        """
        src = buffer.pixels
        dst = allocate_output(buffer)
        height = buffer.height
        step = band_size(height, cadence)

        for start in range(0, height, step):
            if progress is not None:
                progress(start / height)
            self.process_rows(src, dst, start, min(start + step, height))

        if buffer.channels > 3:
            dst[:, :, 3:] = src[:, :, 3:]

        return dst

    def process_rows(self, src: np.ndarray, dst: np.ndarray, start: int, stop: int) -> None:
        """Fill dst rows [start, stop) from src."""
        raise NotImplementedError


# ============================================================================
# FILTER IMPLEMENTATIONS
# ============================================================================

class GrayscaleFilter(ProcessingFilter):
    """Average of R, G and B written back to all three colour channels."""

    def __init__(self):
        super().__init__(
            filter_id="grayscale",
            name="Grayscale",
            output_filename="output_gray.jpg",
        )

    def process_rows(self, src, dst, start, stop):
        rows = src[start:stop]
        if rows.shape[2] < 3:
            dst[start:stop, :, 0] = rows[:, :, 0]
            return

        total = rows[:, :, 0].astype(np.uint16) + rows[:, :, 1] + rows[:, :, 2]
        gray = (total // 3).astype(np.uint8)
        dst[start:stop, :, :3] = gray[:, :, np.newaxis]


class InvertFilter(ProcessingFilter):
    """255 minus each colour sample."""

    def __init__(self):
        super().__init__(
            filter_id="invert",
            name="Invert",
            output_filename="output_invert.jpg",
        )

    def process_rows(self, src, dst, start, stop):
        color = min(src.shape[2], 3)
        dst[start:stop, :, :color] = np.uint8(255) - src[start:stop, :, :color]


class BlurFilter(ProcessingFilter):
    """
    3x3 box blur over interior pixels.

    The one-pixel border is not processed: its colour samples stay zero.
    Each interior sample is floor(sum of the 3x3 neighbourhood / 9), computed
    by summing nine shifted views rather than looping per pixel.
    """

    def __init__(self):
        super().__init__(
            filter_id="blur",
            name="Blur",
            output_filename="output_blur.jpg",
        )

    def process_rows(self, src, dst, start, stop):
        height, width = src.shape[:2]
        first = max(start, 1)
        last = min(stop, height - 1)
        if first >= last or width < 3:
            return

        color = min(src.shape[2], 3)
        acc = np.zeros((last - first, width - 2, color), dtype=np.uint16)
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                acc += src[first + dy:last + dy, 1 + dx:width - 1 + dx, :color]

        dst[first:last, 1:width - 1, :color] = (acc // 9).astype(np.uint8)


FILTER_REGISTRY = {
    "grayscale": GrayscaleFilter,
    "invert": InvertFilter,
    "blur": BlurFilter,
}

DEFAULT_FILTER_IDS = ("grayscale", "invert", "blur")


def create_filter(filter_id: str) -> Optional[ProcessingFilter]:
    """Create a filter instance by ID."""
    filter_class = FILTER_REGISTRY.get(filter_id)
    if filter_class:
        return filter_class()
    return None


def default_filters() -> List[ProcessingFilter]:
    """The fixed filter set, in reporting order."""
    return [create_filter(filter_id) for filter_id in DEFAULT_FILTER_IDS]
