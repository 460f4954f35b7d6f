from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..buffer import PixelBuffer
from ..metrics import DEFAULT_METRIC, MetricLike, SimilarityMetric
from .selector import DEFAULT_TOLERANCE, MatchPoint, find_all, find_best


@dataclass(slots=True)
class ImageSearch:
    """
    Finds a small image inside a larger one.

    ``metric`` is the default scoring formula; each call may pass its own.
    ``tolerance`` is the half-width of the score band flattened around every
    accepted match in ``find_all_matches``.
    """

    metric: MetricLike = DEFAULT_METRIC
    tolerance: float = DEFAULT_TOLERANCE

    def __post_init__(self) -> None:
        self.metric = SimilarityMetric.parse(self.metric)
        if self.tolerance < 0:
            raise ValueError("tolerance must be >= 0")

    def resolve_metric(self, metric: Optional[MetricLike] = None) -> SimilarityMetric:
        if metric is None:
            return SimilarityMetric.parse(self.metric)
        return SimilarityMetric.parse(metric)

    def find_match(
        self,
        small: PixelBuffer,
        big: PixelBuffer,
        return_center: bool = True,
        metric: Optional[MetricLike] = None,
    ) -> MatchPoint:
        """
        Locate the best placement of ``small`` inside ``big``.

        Returns the center of the matched window unless ``return_center`` is
        false, in which case the top-left corner is returned.
        """
        return find_best(small, big, self.resolve_metric(metric), return_center=return_center)

    def find_all_matches(
        self,
        small: PixelBuffer,
        big: PixelBuffer,
        max_count: int,
        punctuality: float,
        return_center: bool = True,
        metric: Optional[MetricLike] = None,
    ) -> List[MatchPoint]:
        """
        Locate up to ``max_count`` distinct occurrences of ``small`` in ``big``.

        ``punctuality`` is the score a match must reach to be reported; for the
        normalized metrics it lies in ``[0, 1]`` (``[-1, 1]`` for the
        normalized correlation coefficient).
        """
        resolved = self.resolve_metric(metric)
        return find_all(
            small,
            big,
            resolved,
            max_count,
            punctuality,
            return_center=return_center,
            tolerance=self.tolerance,
        )


_default_search = ImageSearch()


def find_match(
    small: PixelBuffer,
    big: PixelBuffer,
    return_center: bool = True,
    metric: Optional[MetricLike] = None,
) -> MatchPoint:
    return _default_search.find_match(small, big, return_center=return_center, metric=metric)


def find_all_matches(
    small: PixelBuffer,
    big: PixelBuffer,
    max_count: int,
    punctuality: float,
    return_center: bool = True,
    metric: Optional[MetricLike] = None,
) -> List[MatchPoint]:
    return _default_search.find_all_matches(
        small,
        big,
        max_count,
        punctuality,
        return_center=return_center,
        metric=metric,
    )


__all__ = ["ImageSearch", "find_all_matches", "find_match"]
