"""
Processing system for filterkit.

Provides the fixed set of independent pixel filters (grayscale, invert,
box blur), the executor that runs one filter from pixels to file, and the
text progress reporter they share.
"""

from .filters import (
    ProcessingFilter,
    GrayscaleFilter,
    InvertFilter,
    BlurFilter,
    DEFAULT_CADENCE,
    allocate_output,
    band_size,
    invert_value,
)
from .executor import FilterExecutor
from .filters import (
    create_filter,
    default_filters,
    FILTER_REGISTRY,
)
from .progress import (
    ConsoleReporter,
    render_progress,
    format_result,
    format_summary,
)

__all__ = [
    "ProcessingFilter",
    "FilterExecutor",
    "ConsoleReporter",
    # Helpers
    "create_filter",
    "default_filters",
    "FILTER_REGISTRY",
    "DEFAULT_CADENCE",
    "allocate_output",
    "band_size",
    "invert_value",
    "render_progress",
    "format_result",
    "format_summary",
    # Filters
    "GrayscaleFilter",
    "InvertFilter",
    "BlurFilter",
]
