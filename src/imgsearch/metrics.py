from __future__ import annotations

from enum import IntEnum
from typing import Union

import cv2

from .errors import InvalidMetricError


class SimilarityMetric(IntEnum):
    """
    Scoring formula used to compare the template against each placement.

    Member values are the matching OpenCV ``TM_*`` method codes.
    """

    SQUARE_DIFFERENCE = cv2.TM_SQDIFF
    SQUARE_DIFFERENCE_NORMALIZED = cv2.TM_SQDIFF_NORMED
    CROSS_CORRELATION = cv2.TM_CCORR
    CROSS_CORRELATION_NORMALIZED = cv2.TM_CCORR_NORMED
    CORRELATION_COEFFICIENT = cv2.TM_CCOEFF
    CORRELATION_COEFFICIENT_NORMALIZED = cv2.TM_CCOEFF_NORMED

    @property
    def lower_is_better(self) -> bool:
        return self in (SimilarityMetric.SQUARE_DIFFERENCE, SimilarityMetric.SQUARE_DIFFERENCE_NORMALIZED)

    @classmethod
    def parse(cls, value: Union["SimilarityMetric", int, str]) -> "SimilarityMetric":
        """
        Resolve a metric from a member, an OpenCV method code or a member name.

        Names are case-insensitive and accept ``-`` in place of ``_``.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise InvalidMetricError(f"unrecognized similarity metric: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError as exc:
                raise InvalidMetricError(f"unrecognized similarity metric code: {value}") from exc
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_")
            try:
                return cls[key]
            except KeyError as exc:
                raise InvalidMetricError(f"unrecognized similarity metric name: {value!r}") from exc
        raise InvalidMetricError(f"unrecognized similarity metric: {value!r}")


MetricLike = Union[SimilarityMetric, int, str]

DEFAULT_METRIC = SimilarityMetric.CORRELATION_COEFFICIENT_NORMALIZED


__all__ = ["DEFAULT_METRIC", "MetricLike", "SimilarityMetric"]
