from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

import cv2
import numpy as np

from ..buffer import PixelBuffer
from ..metrics import MetricLike, SimilarityMetric
from .similarity import build_similarity_map

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

DEFAULT_TOLERANCE = 0.1

_FLOAT32_MAX = float(np.finfo(np.float32).max)
_FLOAT32_LOWEST = float(np.finfo(np.float32).min)


@dataclass(frozen=True, slots=True)
class MatchPoint:
    """
    Location and score of a single template occurrence.

    ``x`` and ``y`` are either the top-left corner of the matched window or
    its center, depending on how the search was requested. ``score`` is in
    the native range of the metric that produced it.
    """

    x: int
    y: int
    score: float

    def as_tuple(self) -> Tuple[int, int]:
        return self.x, self.y


class SearchSession:
    """
    Scratch state for one multi-match search.

    Owns a similarity map and flattens regions of it as matches are taken,
    so the same occurrence is never selected twice.
    """

    def __init__(self, similarity_map: np.ndarray, lower_is_better: bool, tolerance: float = DEFAULT_TOLERANCE) -> None:
        if similarity_map.ndim != 2 or similarity_map.dtype != np.float32:
            raise ValueError("similarity map must be a 2-D float32 array")
        self._map = np.ascontiguousarray(similarity_map)
        self.lower_is_better = lower_is_better
        self.tolerance = tolerance
        self.fill_value = _FLOAT32_MAX if lower_is_better else _FLOAT32_LOWEST

    def take_best(self) -> Tuple[Cell, float]:
        """
        Return the ``(col, row)`` cell and score of the best remaining placement.

        Ties resolve to the first cell in row-major order.
        """
        min_val, max_val, min_loc, max_loc = cv2.minMaxLoc(self._map)
        if self.lower_is_better:
            return (int(min_loc[0]), int(min_loc[1])), float(min_val)
        return (int(max_loc[0]), int(max_loc[1])), float(max_val)

    def passes(self, score: float, punctuality: float) -> bool:
        """
        Check ``score`` against ``punctuality`` in the direction of the metric.

        A cell already overwritten by ``suppress`` never passes, even against an
        infinite threshold, so an exhausted map ends the search early.
        """
        if score == self.fill_value:
            return False
        if self.lower_is_better:
            return score <= punctuality
        return score >= punctuality

    def suppress(self, cell: Cell) -> int:
        """
        Flood-fill the 4-connected region around ``cell`` whose values lie
        within ``tolerance`` of the value at ``cell``.

        Returns the number of cells overwritten.
        """
        flags = 4 | cv2.FLOODFILL_FIXED_RANGE
        filled, _, _, _ = cv2.floodFill(
            self._map,
            None,
            cell,
            self.fill_value,
            loDiff=self.tolerance,
            upDiff=self.tolerance,
            flags=flags,
        )
        return int(filled)


def _to_image_point(cell: Cell, score: float, template: PixelBuffer, return_center: bool) -> MatchPoint:
    x, y = cell
    if return_center:
        x += template.width // 2
        y += template.height // 2
    return MatchPoint(x=x, y=y, score=score)


def find_best(
    template: PixelBuffer,
    search: PixelBuffer,
    metric: MetricLike,
    return_center: bool = True,
) -> MatchPoint:
    """
    Locate the single best placement of ``template`` inside ``search``.
    """
    metric = SimilarityMetric.parse(metric)
    similarity = build_similarity_map(template, search, metric)
    session = SearchSession(similarity, metric.lower_is_better)
    cell, score = session.take_best()
    return _to_image_point(cell, score, template, return_center)


def find_all(
    template: PixelBuffer,
    search: PixelBuffer,
    metric: MetricLike,
    max_count: int,
    punctuality: float,
    return_center: bool = True,
    tolerance: float = DEFAULT_TOLERANCE,
) -> List[MatchPoint]:
    """
    Collect up to ``max_count`` matches, best first.

    Stops at the first candidate whose score does not clear ``punctuality``
    (at most it for lower-is-better metrics, at least it otherwise). Each
    accepted match has its neighbourhood flattened in the map before the
    next candidate is taken.
    """
    metric = SimilarityMetric.parse(metric)
    matches: List[MatchPoint] = []
    if max_count <= 0:
        return matches

    similarity = build_similarity_map(template, search, metric)
    session = SearchSession(similarity, metric.lower_is_better, tolerance)

    while len(matches) < max_count:
        cell, score = session.take_best()
        if not session.passes(score, punctuality):
            logger.debug("stopping after %d matches: score %.6f at %s fails %.6f", len(matches), score, cell, punctuality)
            break
        filled = session.suppress(cell)
        logger.debug("accepted score %.6f at %s, suppressed %d cells", score, cell, filled)
        matches.append(_to_image_point(cell, score, template, return_center))

    return matches


__all__ = ["DEFAULT_TOLERANCE", "MatchPoint", "SearchSession", "find_all", "find_best"]
