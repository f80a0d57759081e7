"""
OpenImageIO-backed decode/encode interface.
"""

from .adapter import OiioAdapter

__all__ = ["OiioAdapter"]
