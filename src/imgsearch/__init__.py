"""
Core package for locating a small image inside a larger one.
"""

from .buffer import PixelBuffer
from .errors import DimensionError, ImageSearchError, InvalidMetricError
from .matching.engine import ImageSearch, find_all_matches, find_match
from .matching.selector import MatchPoint
from .metrics import DEFAULT_METRIC, SimilarityMetric

__all__ = [
    "DEFAULT_METRIC",
    "DimensionError",
    "ImageSearch",
    "ImageSearchError",
    "InvalidMetricError",
    "MatchPoint",
    "PixelBuffer",
    "SimilarityMetric",
    "find_all_matches",
    "find_match",
]
