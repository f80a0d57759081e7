"""
Core types, errors, clock and validation for filterkit.
"""

from .types import (
    SUPPORTED_CHANNELS,
    FilterStatus,
    RunState,
    ValidationSeverity,
    PixelBuffer,
    FilterResult,
    RunSummary,
    RunConfig,
    ValidationIssue,
)
from .errors import (
    FilterKitError,
    DecodeError,
    EncodeError,
    AllocationError,
    ConfigError,
)
from .clock import CpuTimes, SystemClock
from .validation import ValidationEngine

__all__ = [
    "SUPPORTED_CHANNELS",
    "FilterStatus",
    "RunState",
    "ValidationSeverity",
    "PixelBuffer",
    "FilterResult",
    "RunSummary",
    "RunConfig",
    "ValidationIssue",
    # Errors
    "FilterKitError",
    "DecodeError",
    "EncodeError",
    "AllocationError",
    "ConfigError",
    # Timing
    "CpuTimes",
    "SystemClock",
    "ValidationEngine",
]
