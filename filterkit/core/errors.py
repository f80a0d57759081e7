"""
Error hierarchy for filterkit.

DecodeError is fatal for a whole run. EncodeError and AllocationError are
local to the filter task that raised them.
"""


class FilterKitError(Exception):
    """Base class for all filterkit errors."""


class DecodeError(FilterKitError):
    """Input image is missing, unreadable, or in an unsupported format."""


class EncodeError(FilterKitError):
    """An output image could not be written."""


class AllocationError(FilterKitError):
    """An output buffer could not be allocated."""


class ConfigError(FilterKitError):
    """Run configuration failed validation."""

    def __init__(self, message: str, issues=None):
        super().__init__(message)
        self.issues = list(issues or [])
