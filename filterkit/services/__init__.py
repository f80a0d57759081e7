"""Services for filterkit."""

from .settings import Settings
from .run_coordinator import RunCoordinator

__all__ = ["Settings", "RunCoordinator"]
