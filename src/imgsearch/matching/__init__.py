"""
Matching subpackage exposes similarity-map construction and match selection.
"""

from .engine import ImageSearch, find_all_matches, find_match
from .selector import MatchPoint, SearchSession, find_all, find_best
from .similarity import build_similarity_map

__all__ = [
    "ImageSearch",
    "MatchPoint",
    "SearchSession",
    "build_similarity_map",
    "find_all",
    "find_all_matches",
    "find_best",
    "find_match",
]
