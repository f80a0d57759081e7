"""
filterkit — parallel image filters.

Decodes one image, runs grayscale, invert and box blur over it on separate
worker threads, and writes each result to its own file.
"""

__version__ = "1.0.0"
