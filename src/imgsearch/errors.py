"""
Exceptions raised by the image search routines.
"""

from __future__ import annotations


class ImageSearchError(Exception):
    """
    Base class for every error raised by the package.
    """


class DimensionError(ImageSearchError, ValueError):
    """
    Raised when a pixel buffer is empty or malformed, or when the template
    does not fit inside the search image.
    """


class InvalidMetricError(ImageSearchError, ValueError):
    """
    Raised when a similarity metric cannot be resolved.
    """


__all__ = ["DimensionError", "ImageSearchError", "InvalidMetricError"]
