from __future__ import annotations

import logging

import cv2
import numpy as np

from ..buffer import PixelBuffer
from ..errors import DimensionError
from ..metrics import MetricLike, SimilarityMetric

logger = logging.getLogger(__name__)


def similarity_map_shape(template: PixelBuffer, search: PixelBuffer) -> tuple[int, int]:
    """
    Return the ``(rows, cols)`` of the map produced for this pair of buffers.

    Raises DimensionError when the template does not fit inside the search image.
    """
    if template.width > search.width or template.height > search.height:
        raise DimensionError(
            f"template {template.width}x{template.height} exceeds search image {search.width}x{search.height}"
        )
    return search.height - template.height + 1, search.width - template.width + 1


def build_similarity_map(
    template: PixelBuffer,
    search: PixelBuffer,
    metric: MetricLike,
) -> np.ndarray:
    """
    Score every top-left placement of ``template`` inside ``search``.

    Returns a float32 array of shape
    ``(search.height - template.height + 1, search.width - template.width + 1)``
    where cell ``[r, c]`` holds the score of the window starting at column
    ``c``, row ``r``. The correlation-coefficient metrics subtract the
    per-channel means of the template and of each window before correlating.
    """
    metric = SimilarityMetric.parse(metric)
    rows, cols = similarity_map_shape(template, search)

    # copies detach the map from caller memory and drop row padding
    search_pixels = search.as_array().copy()
    template_pixels = template.as_array().copy()

    result = cv2.matchTemplate(search_pixels, template_pixels, int(metric))

    logger.debug("built %dx%d similarity map with %s", cols, rows, metric.name)
    return result.astype(np.float32, copy=False)


__all__ = ["build_similarity_map", "similarity_map_shape"]
