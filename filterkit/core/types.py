"""
Core data types for filterkit.

All types use @dataclass and Enum for structured, immutable representations.
No loose dicts at the internal API boundary.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Optional, Sequence

import numpy as np


SUPPORTED_CHANNELS = (1, 3, 4)


class FilterStatus(Enum):
    """Outcome of a single filter task."""
    SUCCESS = auto()
    FAILURE = auto()


class RunState(Enum):
    """Lifecycle of a run coordinator."""
    IDLE = auto()
    DECODING = auto()
    RUNNING = auto()
    JOINING = auto()
    REPORTING = auto()
    DONE = auto()
    FAILED = auto()


class ValidationSeverity(Enum):
    """Validation issue severity."""
    ERROR = auto()
    WARNING = auto()


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Decoded image data shared read-only between filter tasks.

    Pixels are stored as a uint8 array shaped (height, width, channels).
    The array is made non-writeable on construction, so a filter that tries
    to write into its input fails loudly instead of corrupting its siblings.
    """
    pixels: np.ndarray

    def __post_init__(self):
        pixels = self.pixels
        if not isinstance(pixels, np.ndarray):
            raise ValueError("pixels must be a numpy array")
        if pixels.ndim != 3:
            raise ValueError(f"pixels must be (height, width, channels), got shape {pixels.shape}")
        if pixels.dtype != np.uint8:
            raise ValueError(f"pixels must be uint8, got {pixels.dtype}")
        height, width, channels = pixels.shape
        if width <= 0 or height <= 0:
            raise ValueError(f"image must be non-empty, got {width}x{height}")
        if channels not in SUPPORTED_CHANNELS:
            raise ValueError(f"unsupported channel count: {channels}")

        # Private copy; the caller keeps its array and its writeable flag
        pixels = np.array(pixels, dtype=np.uint8, order="C", copy=True)
        pixels.flags.writeable = False
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_samples(
        cls, width: int, height: int, channels: int, samples: Sequence[int]
    ) -> "PixelBuffer":
        """Build a buffer from a flat, row-major sequence of samples."""
        data = np.asarray(bytearray(samples) if isinstance(samples, (bytes, bytearray)) else samples)
        expected = width * height * channels
        if data.size != expected:
            raise ValueError(f"expected {expected} samples, got {data.size}")
        if data.size and (data.min() < 0 or data.max() > 255):
            raise ValueError("samples must be in the range 0-255")
        return cls(data.astype(np.uint8).reshape(height, width, channels))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def channels(self) -> int:
        return self.pixels.shape[2]

    @property
    def color_channels(self) -> int:
        """Number of leading channels the colour filters operate on."""
        return min(self.channels, 3)

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.height, self.width, self.channels)

    @property
    def samples(self) -> np.ndarray:
        """Flat read-only view of length width * height * channels."""
        return self.pixels.reshape(-1)

    def __repr__(self) -> str:
        return f"<PixelBuffer {self.width}x{self.height} channels={self.channels}>"


@dataclass(frozen=True)
class FilterResult:
    """Outcome of one filter task, consumed by the coordinator."""
    name: str
    elapsed: float  # seconds
    output_path: str
    status: FilterStatus
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == FilterStatus.SUCCESS


@dataclass(frozen=True)
class RunSummary:
    """Aggregate timing and results, built once after all tasks join."""
    total_elapsed: float
    cpu_user: float
    cpu_system: float
    results: tuple[FilterResult, ...] = ()

    @property
    def succeeded(self) -> list[FilterResult]:
        return [r for r in self.results if r.succeeded]

    @property
    def failed(self) -> list[FilterResult]:
        return [r for r in self.results if not r.succeeded]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed


@dataclass(frozen=True)
class RunConfig:
    """Configuration for a single filter run."""
    input_path: str = "input.jpg"
    output_dir: str = "."
    quality: int = 100
    progress_cadence: float = 0.02
    parallel: bool = True
    strict: bool = False

    def output_path(self, filename: str) -> str:
        """Resolve a fixed output filename against the output directory."""
        return str(Path(self.output_dir) / filename)


@dataclass
class ValidationIssue:
    """A validation problem."""
    severity: ValidationSeverity
    code: str
    message: str
    context: dict = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.severity.name}] {self.code}: {self.message}"
